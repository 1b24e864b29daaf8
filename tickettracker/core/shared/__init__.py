"""
Shared Domain Components.

Contém componentes compartilhados entre todos os domínios:
- Exceções de domínio
- Interfaces (Ports)
- Paginação
"""

from .exceptions import (
    DomainException,
    ValidationError,
    RequiredFieldMissingError,
    FieldTooShortError,
    EntityNotFoundError,
)
from .interfaces import UnitOfWork, UnitOfWorkFactory
from .pagination import PaginationParams, PaginatedResult

__all__ = [
    "DomainException",
    "ValidationError",
    "RequiredFieldMissingError",
    "FieldTooShortError",
    "EntityNotFoundError",
    "UnitOfWork",
    "UnitOfWorkFactory",
    "PaginationParams",
    "PaginatedResult",
]
