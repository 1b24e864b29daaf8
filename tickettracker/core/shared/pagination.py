"""
Paginação - parâmetros e resultado de listagens paginadas.

Vive no Core porque o contrato de listagem (FindAll) faz parte do port
de persistência; os adapters apenas traduzem offset/limit para sua
própria linguagem de consulta.
"""

from dataclasses import dataclass
from typing import Any, Dict, Generic, List, TypeVar

from .exceptions import ValidationError

T = TypeVar("T")

DEFAULT_PER_PAGE = 20


@dataclass(frozen=True)
class PaginationParams:
    """Parâmetros de paginação (página começa em 1)."""
    page: int = 1
    per_page: int = DEFAULT_PER_PAGE

    def __post_init__(self):
        if self.page < 1:
            raise ValidationError("Página deve ser maior ou igual a 1", field="page")
        if self.per_page < 1:
            raise ValidationError(
                "Itens por página deve ser maior ou igual a 1", field="per_page"
            )

    @property
    def offset(self) -> int:
        """Calcula offset para query."""
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        return self.offset + self.per_page


@dataclass
class PaginatedResult(Generic[T]):
    """Resultado paginado."""
    items: List[T]
    total: int
    page: int
    per_page: int

    @property
    def total_pages(self) -> int:
        """Calcula total de páginas."""
        return (self.total + self.per_page - 1) // self.per_page

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    def to_dict(self) -> Dict[str, Any]:
        """Converte para dict (itens via to_dict quando disponível)."""
        return {
            "items": [
                item.to_dict() if hasattr(item, "to_dict") else item
                for item in self.items
            ],
            "total": self.total,
            "page": self.page,
            "per_page": self.per_page,
            "total_pages": self.total_pages,
            "has_next": self.has_next,
            "has_prev": self.has_prev,
        }
