"""
Domínio de Tickets - Ciclo de vida de tickets de suporte.

Este módulo contém a lógica de admissão e manutenção de tickets:
- Entidades (Ticket, TicketStatus, Reference)
- Política de validação (TicketValidationPolicy)
- Use Cases (TicketService)
- DTOs (Input/Output Data Transfer Objects)
- Ports (Interfaces para o store e registros de referência)

Características do Domínio:
- Tickets só são admitidos com título, descrição, categoria e prioridade
- Status OPEN e data de criação atribuídos automaticamente
- Sem máquina de estados: status é um campo como os demais
"""

from .entities import Reference, Ticket, TicketStatus
from .validation import (
    DESCRIPTION_MIN_LENGTH,
    TITLE_MIN_LENGTH,
    TicketValidationPolicy,
    validate_ticket,
)
from .dtos import ReferenceInputDTO, TicketInputDTO, TicketOutputDTO
from .ports import (
    InMemoryReferenceRegistry,
    InMemoryTicketRepository,
    InMemoryUnitOfWork,
    ReferenceRegistry,
    TicketRepository,
)
from .use_cases import TicketService

__all__ = [
    # Entities
    "Reference",
    "Ticket",
    "TicketStatus",
    # Validation
    "DESCRIPTION_MIN_LENGTH",
    "TITLE_MIN_LENGTH",
    "TicketValidationPolicy",
    "validate_ticket",
    # DTOs
    "ReferenceInputDTO",
    "TicketInputDTO",
    "TicketOutputDTO",
    # Ports
    "InMemoryReferenceRegistry",
    "InMemoryTicketRepository",
    "InMemoryUnitOfWork",
    "ReferenceRegistry",
    "TicketRepository",
    # Use Cases
    "TicketService",
]
