"""
Data Transfer Objects (DTOs) do Domínio de Tickets.

DTOs são estruturas simples para transportar dados entre camadas,
evitando vazamento de modelos internos (entidades) para camadas externas.

Tipos de DTOs:
- Input DTOs: Recebem dados brutos (de APIs) e constroem entidades
- Output DTOs: Formatam dados para resposta (para APIs)
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from tickettracker.core.shared.exceptions import ValidationError

from .entities import Reference, Ticket, TicketStatus

# Limites das colunas (TicketModel.title, ReferenceModel.name)
TITLE_MAX_LENGTH = 255
NAME_MAX_LENGTH = 100


def _parse_int(data: Dict[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"Campo '{key}' deve ser inteiro", field=key)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Campo '{key}' deve ser inteiro", field=key)


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            raise ValidationError(
                f"Data inválida: {value}", field="creation_date"
            )
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_status(value: Any) -> Optional[TicketStatus]:
    if value is None:
        return None
    try:
        return TicketStatus.from_string(value)
    except ValueError as e:
        raise ValidationError(str(e), field="status")


def _reference_id(data: Dict[str, Any], key: str) -> Optional[int]:
    """Aceita `category_id` ou `category: {"id": ...}`."""
    if data.get(f"{key}_id") is not None:
        return _parse_int(data, f"{key}_id")
    nested = data.get(key)
    if isinstance(nested, dict):
        return _parse_int(nested, "id")
    return None


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class TicketInputDTO:
    """
    DTO de entrada para create, update e partial update.

    Imutável (frozen=True). Campos ausentes ficam None; para partial
    update, None significa "não alterar".

    Attributes:
        id: ID informado no corpo (None para create)
        title: Título
        description: Descrição
        status: Status já convertido para enum
        creation_date: Data de criação (tz-aware)
        category_id: ID da categoria
        priority_id: ID da prioridade
        user_id: ID do usuário que submeteu
    """

    id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TicketStatus] = None
    creation_date: Optional[datetime] = None
    category_id: Optional[int] = None
    priority_id: Optional[int] = None
    user_id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TicketInputDTO":
        """
        Constrói DTO a partir de JSON decodificado.

        Raises:
            ValidationError: Se algum campo tiver tipo/formato inválido
        """
        if not isinstance(data, dict):
            raise ValidationError("Corpo da requisição deve ser um objeto JSON")

        for key in ("title", "description"):
            if data.get(key) is not None and not isinstance(data[key], str):
                raise ValidationError(f"Campo '{key}' deve ser texto", field=key)

        title = data.get("title")
        if title is not None and len(title) > TITLE_MAX_LENGTH:
            raise ValidationError(
                f"Campo 'title' deve ter no máximo {TITLE_MAX_LENGTH} caracteres",
                field="title",
            )

        return cls(
            id=_parse_int(data, "id"),
            title=data.get("title"),
            description=data.get("description"),
            status=_parse_status(data.get("status")),
            creation_date=_parse_datetime(data.get("creation_date")),
            category_id=_reference_id(data, "category"),
            priority_id=_reference_id(data, "priority"),
            user_id=_reference_id(data, "user"),
        )

    def to_entity(self, ticket_id: Optional[int] = None) -> Ticket:
        """Cria entidade (ticket_id sobrescreve o id do corpo)."""
        return Ticket(
            id=ticket_id if ticket_id is not None else self.id,
            title=self.title,
            description=self.description,
            status=self.status,
            creation_date=self.creation_date,
            category_id=self.category_id,
            priority_id=self.priority_id,
            user_id=self.user_id,
        )


@dataclass(frozen=True)
class ReferenceInputDTO:
    """DTO de entrada para criar categoria/prioridade."""

    name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReferenceInputDTO":
        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Nome é obrigatório", field="name")
        if len(name.strip()) > NAME_MAX_LENGTH:
            raise ValidationError(
                f"Nome deve ter no máximo {NAME_MAX_LENGTH} caracteres", field="name"
            )
        return cls(name=name.strip())


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class TicketOutputDTO:
    """
    DTO de saída com dados do ticket.

    Relações (category, priority, user) só aparecem preenchidas quando
    o ticket veio de uma leitura eager.
    """

    id: int
    title: Optional[str]
    description: Optional[str]
    status: Optional[str]
    creation_date: Optional[datetime]
    category_id: Optional[int]
    priority_id: Optional[int]
    user_id: Optional[int]
    category: Optional[Reference] = None
    priority: Optional[Reference] = None
    user: Optional[Reference] = None

    @classmethod
    def from_entity(cls, entity: Ticket) -> "TicketOutputDTO":
        """
        Factory method para converter entidade em DTO.

        Args:
            entity: Ticket persistido

        Returns:
            DTO com dados da entidade
        """
        return cls(
            id=entity.id,
            title=entity.title,
            description=entity.description,
            status=entity.status.value if entity.status else None,
            creation_date=entity.creation_date,
            category_id=entity.category_id,
            priority_id=entity.priority_id,
            user_id=entity.user_id,
            category=entity.category,
            priority=entity.priority,
            user=entity.user,
        )

    def to_dict(self) -> dict:
        """Converte para dicionário (serialização JSON)."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "creation_date": (
                self.creation_date.isoformat() if self.creation_date else None
            ),
            "category_id": self.category_id,
            "priority_id": self.priority_id,
            "user_id": self.user_id,
            "category": self.category.to_dict() if self.category else None,
            "priority": self.priority.to_dict() if self.priority else None,
            "user": self.user.to_dict() if self.user else None,
        }
