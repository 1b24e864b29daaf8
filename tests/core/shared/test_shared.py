"""
Testes para componentes compartilhados: exceções e paginação.
"""

import pytest

from tickettracker.core.shared.exceptions import (
    DomainException,
    EntityNotFoundError,
    FieldTooShortError,
    RequiredFieldMissingError,
    ValidationError,
)
from tickettracker.core.shared.pagination import PaginatedResult, PaginationParams


class TestExceptions:
    """Testes para a hierarquia de exceções."""

    def test_hierarquia(self):
        assert issubclass(RequiredFieldMissingError, ValidationError)
        assert issubclass(FieldTooShortError, ValidationError)
        assert issubclass(EntityNotFoundError, DomainException)

    def test_str_inclui_codigo(self):
        error = RequiredFieldMissingError("title")

        assert str(error).startswith("[VALIDATION_ERROR_TITLE]")

    def test_required_to_dict(self):
        data = RequiredFieldMissingError("category").to_dict()

        assert data == {
            "error": "VALIDATION_ERROR_CATEGORY",
            "message": "Campo 'category' é obrigatório",
            "kind": "REQUIRED_FIELD_MISSING",
            "field": "category",
        }

    def test_not_found_to_dict(self):
        data = EntityNotFoundError("Ticket 3 não encontrado", "Ticket", 3).to_dict()

        assert data["error"] == "ENTITY_NOT_FOUND"
        assert data["entity_id"] == 3


class TestPagination:
    """Testes para PaginationParams e PaginatedResult."""

    def test_offset(self):
        assert PaginationParams(page=3, per_page=10).offset == 20

    @pytest.mark.parametrize("page,per_page", [(0, 10), (1, 0), (-1, 5)])
    def test_parametros_invalidos(self, page, per_page):
        with pytest.raises(ValidationError):
            PaginationParams(page=page, per_page=per_page)

    def test_resultado(self):
        result = PaginatedResult(items=[1, 2], total=5, page=1, per_page=2)

        assert result.total_pages == 3
        assert result.has_next
        assert not result.has_prev
        assert result.to_dict()["items"] == [1, 2]

    def test_resultado_vazio(self):
        result = PaginatedResult(items=[], total=0, page=1, per_page=20)

        assert result.total_pages == 0
        assert not result.has_next
