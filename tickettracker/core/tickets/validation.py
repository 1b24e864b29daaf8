"""
Política de Validação de Tickets.

Componente puro e sem estado que decide se um ticket pode ser admitido.
Não altera o ticket e não acessa o store.

Regras (avaliadas nesta ordem; a primeira falha é a reportada):
1. Título obrigatório (não nulo, não em branco)
2. Título com pelo menos TITLE_MIN_LENGTH caracteres após trim
3. Descrição obrigatória
4. Descrição com pelo menos DESCRIPTION_MIN_LENGTH caracteres após trim
5. Categoria obrigatória
6. Prioridade obrigatória

O tamanho é medido em code points (len) sobre str.strip(). O valor
armazenado nunca é alterado.
"""

from typing import Optional

from tickettracker.core.shared.exceptions import (
    FieldTooShortError,
    RequiredFieldMissingError,
)

from .entities import Ticket

TITLE_MIN_LENGTH = 5
DESCRIPTION_MIN_LENGTH = 20


def _check_text(value: Optional[str], field: str, min_length: int) -> None:
    if value is None or not value.strip():
        raise RequiredFieldMissingError(field)
    if len(value.strip()) < min_length:
        raise FieldTooShortError(field, min_length)


class TicketValidationPolicy:
    """
    Valida um ticket antes da admissão.

    Example:
        policy = TicketValidationPolicy()
        policy.validate(ticket)  # lança ValidationError se inválido
    """

    title_min_length = TITLE_MIN_LENGTH
    description_min_length = DESCRIPTION_MIN_LENGTH

    def validate(self, ticket: Ticket) -> None:
        """
        Aplica as regras de admissão.

        Args:
            ticket: Ticket candidato

        Raises:
            RequiredFieldMissingError: Campo obrigatório ausente
            FieldTooShortError: Texto abaixo do tamanho mínimo
        """
        _check_text(ticket.title, "title", self.title_min_length)
        _check_text(ticket.description, "description", self.description_min_length)

        if ticket.category_id is None:
            raise RequiredFieldMissingError("category")

        if ticket.priority_id is None:
            raise RequiredFieldMissingError("priority")

    def is_valid(self, ticket: Ticket) -> bool:
        """Versão booleana de validate()."""
        try:
            self.validate(ticket)
        except (RequiredFieldMissingError, FieldTooShortError):
            return False
        return True


_default_policy = TicketValidationPolicy()


def validate_ticket(ticket: Ticket) -> None:
    """Valida com a política padrão."""
    _default_policy.validate(ticket)
