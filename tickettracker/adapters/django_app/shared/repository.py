"""
Repository Base - Implementação base de repositórios com Django ORM.

Fornece funcionalidades comuns para todos os repositórios:
- Busca por ID, existência, contagem, remoção
- Paginação (PaginationParams/PaginatedResult do Core)
- Otimização de queries (select_related)

Princípios:
- Repositórios são stateless
- Não contêm lógica de negócio
- Apenas persistência e queries
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, Type, TypeVar
import logging

from django.db import models
from django.db.models import QuerySet

from tickettracker.core.shared.pagination import PaginatedResult, PaginationParams

logger = logging.getLogger(__name__)

# Type variables
T = TypeVar("T")  # Entity type
M = TypeVar("M", bound=models.Model)  # Model type


class BaseRepository(ABC, Generic[T, M]):
    """
    Classe base abstrata para repositórios Django.

    Type Parameters:
        T: Tipo da entidade de domínio
        M: Tipo do Model Django

    Example:
        class DjangoTicketRepository(BaseRepository[Ticket, TicketModel]):
            model_class = TicketModel
            select_related_fields = ['category', 'priority', 'user']

            def to_entity(self, model, eager=False):
                return TicketMapper.to_entity(model, eager=eager)
    """

    # Classe do model Django (definir na subclasse)
    model_class: Type[M]

    # Campos para select_related em leituras eager (evita N+1)
    select_related_fields: List[str] = []

    # Campo padrão de ordenação
    default_order_field: str = "id"

    @abstractmethod
    def to_entity(self, model: M, eager: bool = False) -> T:
        """Converte Model Django para Entity de domínio."""
        raise NotImplementedError

    def _get_base_queryset(self, eager: bool = False) -> QuerySet:
        """
        Retorna queryset base.

        Aplica select_related quando eager=True.
        """
        qs = self.model_class.objects.all()

        if eager and self.select_related_fields:
            qs = qs.select_related(*self.select_related_fields)

        return qs

    def _get(self, entity_id, eager: bool = False, for_update: bool = False) -> Optional[T]:
        qs = self._get_base_queryset(eager=eager)
        if for_update:
            qs = qs.select_for_update()
        try:
            return self.to_entity(qs.get(pk=entity_id), eager=eager)
        except self.model_class.DoesNotExist:
            logger.debug(f"{self.model_class.__name__} not found: {entity_id}")
            return None

    def delete_by_id(self, entity_id) -> None:
        """Remove entidade (não falha se não existir)."""
        deleted_count, _ = self.model_class.objects.filter(pk=entity_id).delete()

        if deleted_count > 0:
            logger.info(f"{self.model_class.__name__} deleted: {entity_id}")
        else:
            logger.debug(f"{self.model_class.__name__} not found for deletion: {entity_id}")

    def exists(self, entity_id) -> bool:
        return self.model_class.objects.filter(pk=entity_id).exists()

    def count(self) -> int:
        return self.model_class.objects.count()

    def list_paginated(
        self,
        pagination: PaginationParams,
        eager: bool = False,
    ) -> PaginatedResult[T]:
        """
        Lista entidades com paginação.

        Args:
            pagination: Parâmetros de paginação
            eager: Carregar relações via select_related

        Returns:
            Resultado paginado
        """
        qs = self._get_base_queryset(eager=eager).order_by(self.default_order_field)

        total = qs.count()
        page = qs[pagination.offset:pagination.limit]

        return PaginatedResult(
            items=[self.to_entity(m, eager=eager) for m in page],
            total=total,
            page=pagination.page,
            per_page=pagination.per_page,
        )
