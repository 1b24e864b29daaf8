"""
Entidades do Domínio de Tickets.

Este módulo define o registro de ticket e os valores que ele referencia.

Entidades:
- Ticket: Registro principal (título, descrição, status, data de criação
  e referências para categoria, prioridade e usuário)
- TicketStatus: Estados possíveis de um ticket
- Reference: Referência somente-leitura (id, nome) carregada em leituras
  eager para categoria, prioridade e usuário

A entidade não se auto-valida: as regras de admissão ficam na
TicketValidationPolicy, e os defaults (status, data de criação) são
aplicados pelo TicketService no momento da criação.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class TicketStatus(Enum):
    """
    Estados possíveis de um ticket.

    Não há máquina de estados: qualquer status pode ser atribuído
    diretamente via update ou partial update.
    """

    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"
    CLOSED = "CLOSED"

    @classmethod
    def from_string(cls, value: str) -> "TicketStatus":
        """
        Converte string para enum.

        Args:
            value: Nome do enum, sem diferenciar maiúsculas
                ("open", "In Progress", "in-progress")

        Returns:
            TicketStatus correspondente

        Raises:
            ValueError: Se valor inválido
        """
        if not isinstance(value, str):
            raise ValueError(f"Status inválido: {value!r}")

        normalized = value.strip().upper().replace(" ", "_").replace("-", "_")
        try:
            return cls[normalized]
        except KeyError:
            raise ValueError(f"Status inválido: {value}")


@dataclass(frozen=True)
class Reference:
    """
    Referência para entidade externa (categoria, prioridade, usuário).

    Para usuários, `name` carrega o login.
    """

    id: int
    name: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}


@dataclass(eq=False)
class Ticket:
    """
    Entidade de Domínio: Ticket.

    Todos os campos são opcionais na construção: um ticket em memória
    pode estar incompleto até passar pela política de validação.

    Invariantes (de todo ticket retornado por TicketService.create):
    - Título não nulo e com pelo menos 5 caracteres após trim
    - Descrição não nula e com pelo menos 20 caracteres após trim
    - category_id e priority_id não nulos
    - status e creation_date não nulos

    Attributes:
        id: Identificador numérico atribuído pelo store (None antes do save)
        title: Título do ticket (armazenado sem trim)
        description: Descrição detalhada
        status: Estado atual
        creation_date: Data/hora de criação (UTC)
        category_id: ID da categoria referenciada
        priority_id: ID da prioridade referenciada
        user_id: ID do usuário que submeteu
        category: Categoria carregada (somente em leituras eager)
        priority: Prioridade carregada (somente em leituras eager)
        user: Usuário carregado (somente em leituras eager)

    Example:
        ticket = Ticket(
            title="Login broken",
            description="Cannot log in since last update",
            category_id=1,
            priority_id=2,
        )
        saved = service.create(ticket)
        assert saved.status == TicketStatus.OPEN
    """

    id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TicketStatus] = None
    creation_date: Optional[datetime] = None

    # Referências fracas (apenas IDs)
    category_id: Optional[int] = None
    priority_id: Optional[int] = None
    user_id: Optional[int] = None

    # Relações eager (não participam da identidade)
    category: Optional[Reference] = field(default=None, repr=False)
    priority: Optional[Reference] = field(default=None, repr=False)
    user: Optional[Reference] = field(default=None, repr=False)

    @property
    def is_persisted(self) -> bool:
        """Verifica se o store já atribuiu ID."""
        return self.id is not None

    def __eq__(self, other: object) -> bool:
        """Comparação por ID (identidade de entidade)."""
        if self is other:
            return True
        if not isinstance(other, Ticket):
            return False
        return self.id is not None and self.id == other.id

    def __hash__(self) -> int:
        # Constante por classe: o ID muda de None para int no primeiro save
        return hash(Ticket)
