"""
Repositórios Django para persistência de Tickets.

Implementam as interfaces (Ports) definidas no Core.
São DRIVEN ADAPTERS - acionados pelo Core em resposta a operações.

Responsabilidades:
- Implementar TicketRepository e ReferenceRegistry
- Mapear entities para models e vice-versa
- Executar queries no banco via ORM
- Leituras eager com select_related (categoria, prioridade, usuário)
- Leitura com lock (select_for_update) para o partial update

Princípios:
- Repository não contém lógica de negócio
- Usa Mapper para conversões
- Trata apenas persistência
"""

from typing import List, Optional
import logging

from django.db import IntegrityError, transaction

from tickettracker.core.shared.exceptions import ValidationError
from tickettracker.core.shared.pagination import PaginatedResult, PaginationParams
from tickettracker.core.tickets.entities import Reference, Ticket

from ..shared.repository import BaseRepository
from .mappers import ReferenceMapper, TicketMapper
from .models import TicketCategoryModel, TicketModel, TicketPriorityModel

logger = logging.getLogger(__name__)


class DjangoTicketRepository(BaseRepository[Ticket, TicketModel]):
    """
    Implementação Django do TicketRepository.

    Implementa a interface definida em tickettracker/core/tickets/ports.py.

    Example:
        repo = DjangoTicketRepository()

        saved = repo.save(ticket)
        ticket = repo.find_by_id_eager(saved.id)
        page = repo.find_all_eager(PaginationParams(page=1, per_page=20))
    """

    model_class = TicketModel
    select_related_fields = ['category', 'priority', 'user']

    def to_entity(self, model: TicketModel, eager: bool = False) -> Ticket:
        return TicketMapper.to_entity(model, eager=eager)

    def save(self, ticket: Ticket) -> Ticket:
        """
        Persiste ticket (create ou update).

        Sem ID: INSERT e o banco atribui o ID.
        Com ID: substitui todas as colunas da linha.

        Args:
            ticket: Entidade de domínio a persistir

        Returns:
            Ticket persistido (sem relações carregadas)
        """
        model = TicketMapper.to_model(ticket)
        model.save()

        logger.info(f"Ticket saved: {model.id}")
        return TicketMapper.to_entity(model)

    def find_by_id(self, ticket_id: int, for_update: bool = False) -> Optional[Ticket]:
        """
        Busca ticket por ID.

        Args:
            ticket_id: ID do ticket
            for_update: SELECT ... FOR UPDATE (exige transação aberta,
                ver DjangoUnitOfWork)
        """
        return self._get(ticket_id, for_update=for_update)

    def find_by_id_eager(self, ticket_id: int) -> Optional[Ticket]:
        return self._get(ticket_id, eager=True)

    def find_all(self, pagination: PaginationParams) -> PaginatedResult[Ticket]:
        return self.list_paginated(pagination)

    def find_all_eager(self, pagination: PaginationParams) -> PaginatedResult[Ticket]:
        return self.list_paginated(pagination, eager=True)

    def find_all_by_user(self, user_id: int) -> List[Ticket]:
        """
        Lista tickets submetidos por um usuário.

        Args:
            user_id: ID do usuário

        Returns:
            Tickets do usuário, com relações carregadas
        """
        models = (
            self._get_base_queryset(eager=True)
            .filter(user_id=user_id)
            .order_by(self.default_order_field)
        )
        return TicketMapper.to_entity_list(models, eager=True)


class DjangoReferenceRegistry(BaseRepository[Reference, TicketCategoryModel]):
    """
    Registro de referências (id, nome) sobre um model Django.

    Subclasses definem model_class e kind.
    """

    kind = "reference"

    def to_entity(self, model, eager: bool = False) -> Reference:
        return ReferenceMapper.to_entity(model)

    def get(self, ref_id: int) -> Optional[Reference]:
        return self._get(ref_id)

    def create(self, name: str) -> Reference:
        """
        Cria referência.

        Raises:
            ValidationError: Se nome vazio ou já existente
        """
        if not name or not name.strip():
            raise ValidationError("Nome é obrigatório", field="name")
        try:
            with transaction.atomic():
                model = self.model_class.objects.create(name=name)
        except IntegrityError:
            raise ValidationError(f"{self.kind} '{name}' já existe", field="name")

        logger.info(f"{self.model_class.__name__} created: {model.pk}")
        return self.to_entity(model)

    def find_or_create(self, name: str) -> Reference:
        """
        Busca por nome ou cria (idempotente).

        get_or_create trata a corrida de duas inserções simultâneas
        relendo a linha após o IntegrityError.
        """
        if not name or not name.strip():
            raise ValidationError("Nome é obrigatório", field="name")
        model, created = self.model_class.objects.get_or_create(name=name)
        if created:
            logger.info(f"{self.model_class.__name__} created: {model.pk}")
        return self.to_entity(model)

    def update(self, ref_id: int, name: str) -> Optional[Reference]:
        """
        Renomeia referência (linha lida com select_for_update).

        Returns:
            Referência atualizada, ou None se o ID não existe

        Raises:
            ValidationError: Se nome vazio ou já usado por outra referência
        """
        if not name or not name.strip():
            raise ValidationError("Nome é obrigatório", field="name")
        try:
            with transaction.atomic():
                model = (
                    self.model_class.objects.select_for_update()
                    .filter(pk=ref_id)
                    .first()
                )
                if model is None:
                    return None
                model.name = name
                model.save(update_fields=['name'])
        except IntegrityError:
            raise ValidationError(f"{self.kind} '{name}' já existe", field="name")

        logger.info(f"{self.model_class.__name__} updated: {model.pk}")
        return self.to_entity(model)

    def list_all(self) -> List[Reference]:
        models = self._get_base_queryset().order_by(self.default_order_field)
        return [self.to_entity(m) for m in models]

    def delete(self, ref_id: int) -> None:
        """
        Remove referência.

        Raises:
            ProtectedError: Se algum ticket ainda referencia o registro
        """
        self.delete_by_id(ref_id)


class DjangoCategoryRegistry(DjangoReferenceRegistry):
    """Registro de categorias."""

    model_class = TicketCategoryModel
    kind = "Categoria"


class DjangoPriorityRegistry(DjangoReferenceRegistry):
    """Registro de prioridades."""

    model_class = TicketPriorityModel
    kind = "Prioridade"
