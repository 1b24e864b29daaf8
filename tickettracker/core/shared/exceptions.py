"""
Exceções de Domínio do Ticket Tracker.

Este módulo define exceções específicas do domínio que permitem
comunicar erros de forma clara e tipada entre as camadas.

Hierarquia:
    DomainException (base)
    ├── ValidationError (validação de entrada)
    │   ├── RequiredFieldMissingError (campo obrigatório ausente)
    │   └── FieldTooShortError (campo abaixo do tamanho mínimo)
    └── EntityNotFoundError (entidade não existe)
"""

from typing import Optional


class DomainException(Exception):
    """
    Exceção base para todos os erros de domínio.

    Todas as exceções específicas do domínio devem herdar desta classe.
    Isso permite capturar qualquer erro de domínio de forma genérica.

    Example:
        try:
            service.create(ticket)
        except DomainException as e:
            logger.debug(f"Erro de domínio: {e}")
    """

    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict:
        """Serializa exceção para dicionário (útil para APIs)."""
        return {
            "error": self.code,
            "message": self.message,
        }


class ValidationError(DomainException):
    """
    Erro de validação de dados de entrada.

    Lançada quando dados fornecidos não atendem aos requisitos
    mínimos para processamento.

    Example:
        if page < 1:
            raise ValidationError("Página deve ser >= 1", field="page")
    """

    kind = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str = None):
        self.field = field
        code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)

    def to_dict(self) -> dict:
        result = super().to_dict()
        result["kind"] = self.kind
        if self.field:
            result["field"] = self.field
        return result


class RequiredFieldMissingError(ValidationError):
    """
    Campo obrigatório ausente ou em branco.

    Example:
        if not ticket.title or not ticket.title.strip():
            raise RequiredFieldMissingError("title")
    """

    kind = "REQUIRED_FIELD_MISSING"

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(message or f"Campo '{field}' é obrigatório", field)


class FieldTooShortError(ValidationError):
    """
    Campo com tamanho (após trim) abaixo do mínimo exigido.

    Example:
        raise FieldTooShortError("title", 5)
    """

    kind = "FIELD_TOO_SHORT"

    def __init__(self, field: str, min_length: int, message: Optional[str] = None):
        self.min_length = min_length
        super().__init__(
            message or f"Campo '{field}' deve ter pelo menos {min_length} caracteres",
            field,
        )

    def to_dict(self) -> dict:
        result = super().to_dict()
        result["min_length"] = self.min_length
        return result


class EntityNotFoundError(DomainException):
    """
    Entidade não encontrada no repositório.

    Lançada quando uma busca por ID não retorna resultado.

    Example:
        ticket = repo.find_by_id_eager(ticket_id)
        if not ticket:
            raise EntityNotFoundError(f"Ticket {ticket_id} não encontrado")
    """

    def __init__(self, message: str, entity_type: str = None, entity_id=None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(message, "ENTITY_NOT_FOUND")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.entity_type:
            result["entity_type"] = self.entity_type
        if self.entity_id is not None:
            result["entity_id"] = self.entity_id
        return result
