"""
Use Cases (Application Services) do Domínio de Tickets.

O TicketService é o único componente com efeitos colaterais: aplica a
política de validação, preenche defaults e coordena o store.

Operações:
- create: Valida, aplica defaults (status OPEN, data de criação) e persiste
- update: Substitui ticket existente (revalidado, sem defaults)
- partial_update: Read-merge-write de título, descrição, data e status
- find_one / get_one: Busca com relações (eager)
- find_all: Listagem paginada
- find_all_for_user: Tickets de um usuário
- delete: Remoção idempotente
- count: Total de tickets

Princípios:
- Dependências injetadas (DI)
- Sem estado entre chamadas: cada operação de escrita abre seu próprio
  Unit of Work, então uma instância pode ser compartilhada entre threads
- Sem lógica de infraestrutura
"""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from tickettracker.core.shared.exceptions import (
    EntityNotFoundError,
    RequiredFieldMissingError,
    ValidationError,
)
from tickettracker.core.shared.interfaces import UnitOfWorkFactory
from tickettracker.core.shared.pagination import PaginatedResult, PaginationParams

from .entities import Ticket, TicketStatus
from .ports import InMemoryUnitOfWork, TicketRepository
from .validation import TicketValidationPolicy

logger = logging.getLogger(__name__)

# Campos que o partial update copia quando não nulos
MERGEABLE_FIELDS = ("title", "description", "creation_date", "status")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TicketService:
    """
    Orquestrador do ciclo de vida de tickets.

    Attributes:
        ticket_repo: Store de tickets
        uow_factory: Fábrica de Unit of Work (uma transação por operação)
        validator: Política de validação
        clock: Fonte de "agora" para a data de criação

    Example:
        repo = InMemoryTicketRepository()
        service = TicketService(repo)

        ticket = service.create(Ticket(
            title="Login broken",
            description="Cannot log in since last update",
            category_id=1,
            priority_id=1,
        ))
        assert ticket.status == TicketStatus.OPEN
    """

    def __init__(
        self,
        ticket_repo: TicketRepository,
        uow_factory: Optional[UnitOfWorkFactory] = None,
        validator: Optional[TicketValidationPolicy] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Inicializa service com dependências injetadas.

        Args:
            ticket_repo: Repositório para persistência
            uow_factory: Cria um Unit of Work por operação. Default:
                InMemoryUnitOfWork usando o lock do repositório, se houver
            validator: Política de validação (default: TicketValidationPolicy)
            clock: Função que retorna o instante atual (default: UTC now)
        """
        self.ticket_repo = ticket_repo
        self.uow_factory = uow_factory or (
            lambda: InMemoryUnitOfWork(getattr(ticket_repo, "lock", None))
        )
        self.validator = validator or TicketValidationPolicy()
        self.clock = clock or utc_now

    def _validate(self, ticket: Ticket) -> None:
        try:
            self.validator.validate(ticket)
        except ValidationError as e:
            logger.debug(f"Ticket rejected: {e}")
            raise

    @staticmethod
    def _require_id(ticket: Ticket) -> int:
        if ticket.id is None:
            raise RequiredFieldMissingError("id", "ID é obrigatório para atualização")
        return ticket.id

    def create(self, ticket: Ticket) -> Ticket:
        """
        Cria ticket.

        O objeto recebido recebe os defaults (status, data de criação)
        antes de ser persistido.

        Args:
            ticket: Ticket candidato

        Returns:
            Ticket persistido, com ID atribuído

        Raises:
            ValidationError: Se o ticket violar a política (nada é persistido)
        """
        logger.debug(f"Request to save Ticket: {ticket!r}")

        self._validate(ticket)

        if ticket.status is None:
            ticket.status = TicketStatus.OPEN
        if ticket.creation_date is None:
            ticket.creation_date = self.clock()

        with self.uow_factory():
            saved = self.ticket_repo.save(ticket)

        ticket.id = saved.id
        return saved

    def update(self, ticket: Ticket) -> Ticket:
        """
        Substitui ticket existente (todos os campos).

        Revalida o ticket; não aplica defaults.

        Raises:
            RequiredFieldMissingError: Se ticket sem ID
            ValidationError: Se o ticket violar a política
            EntityNotFoundError: Se o ID não existe no store
        """
        logger.debug(f"Request to update Ticket: {ticket!r}")

        ticket_id = self._require_id(ticket)
        self._validate(ticket)

        with self.uow_factory():
            if not self.ticket_repo.exists(ticket_id):
                raise EntityNotFoundError(
                    f"Ticket {ticket_id} não encontrado",
                    entity_type="Ticket",
                    entity_id=ticket_id,
                )
            return self.ticket_repo.save(ticket)

    def partial_update(self, ticket: Ticket) -> Optional[Ticket]:
        """
        Atualiza parcialmente um ticket existente.

        Copia apenas title, description, creation_date e status não nulos;
        referências (categoria, prioridade, usuário) nunca são alteradas.
        A leitura é feita com lock dentro do Unit of Work.

        Returns:
            Ticket atualizado, ou None se o ID não existe

        Raises:
            RequiredFieldMissingError: Se ticket sem ID
        """
        logger.debug(f"Request to partially update Ticket: {ticket!r}")

        ticket_id = self._require_id(ticket)

        with self.uow_factory():
            existing = self.ticket_repo.find_by_id(ticket_id, for_update=True)
            if existing is None:
                return None

            for name in MERGEABLE_FIELDS:
                value = getattr(ticket, name)
                if value is not None:
                    setattr(existing, name, value)

            return self.ticket_repo.save(existing)

    def find_one(self, ticket_id: int) -> Optional[Ticket]:
        """Busca ticket com relações; None se não existe."""
        logger.debug(f"Request to get Ticket: {ticket_id}")
        return self.ticket_repo.find_by_id_eager(ticket_id)

    def get_one(self, ticket_id: int) -> Ticket:
        """
        Como find_one, mas falha se não existe.

        Raises:
            EntityNotFoundError: Se ticket não encontrado
        """
        ticket = self.find_one(ticket_id)
        if ticket is None:
            raise EntityNotFoundError(
                f"Ticket {ticket_id} não encontrado",
                entity_type="Ticket",
                entity_id=ticket_id,
            )
        return ticket

    def find_all(
        self,
        pagination: Optional[PaginationParams] = None,
        eager: bool = True,
    ) -> PaginatedResult[Ticket]:
        """Lista página de tickets (com relações quando eager=True)."""
        pagination = pagination or PaginationParams()
        logger.debug(f"Request to get all Tickets: {pagination}")
        if eager:
            return self.ticket_repo.find_all_eager(pagination)
        return self.ticket_repo.find_all(pagination)

    def find_all_for_user(self, user_id: int) -> List[Ticket]:
        """Tickets submetidos pelo usuário."""
        return self.ticket_repo.find_all_by_user(user_id)

    def delete(self, ticket_id: int) -> None:
        """Remove ticket; nada acontece se ele não existir."""
        logger.debug(f"Request to delete Ticket: {ticket_id}")
        with self.uow_factory():
            self.ticket_repo.delete_by_id(ticket_id)

    def count(self) -> int:
        return self.ticket_repo.count()
