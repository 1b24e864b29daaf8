"""
Testes para DTOs do domínio de Tickets.
"""

from datetime import datetime, timezone

import pytest

from tickettracker.core.shared.exceptions import ValidationError
from tickettracker.core.tickets.dtos import (
    NAME_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    ReferenceInputDTO,
    TicketInputDTO,
    TicketOutputDTO,
)
from tickettracker.core.tickets.entities import Reference, Ticket, TicketStatus


class TestTicketInputDTO:
    """Testes para TicketInputDTO.from_dict / to_entity."""

    def test_from_dict_completo(self):
        dto = TicketInputDTO.from_dict({
            "title": "Login broken",
            "description": "Cannot log in since last update",
            "status": "in_progress",
            "creation_date": "2024-05-01T12:00:00Z",
            "category_id": 1,
            "priority_id": "2",
        })

        assert dto.status == TicketStatus.IN_PROGRESS
        assert dto.creation_date == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        assert dto.category_id == 1
        assert dto.priority_id == 2

    def test_referencias_aninhadas(self):
        """Aceita {"category": {"id": 3}} além de category_id."""
        dto = TicketInputDTO.from_dict({
            "category": {"id": 3, "name": "Bug"},
            "priority": {"id": 4},
        })

        assert dto.category_id == 3
        assert dto.priority_id == 4

    def test_campos_ausentes_ficam_none(self):
        dto = TicketInputDTO.from_dict({})

        assert dto == TicketInputDTO()

    def test_data_sem_timezone_assume_utc(self):
        dto = TicketInputDTO.from_dict({"creation_date": "2024-05-01T12:00:00"})

        assert dto.creation_date.tzinfo == timezone.utc

    @pytest.mark.parametrize("data,field", [
        ({"status": "ABERTO"}, "status"),
        ({"creation_date": "ontem"}, "creation_date"),
        ({"category_id": "abc"}, "category_id"),
        ({"priority_id": True}, "priority_id"),
        ({"title": 123}, "title"),
    ])
    def test_valores_invalidos(self, data, field):
        with pytest.raises(ValidationError) as exc_info:
            TicketInputDTO.from_dict(data)

        assert exc_info.value.field == field

    def test_to_entity_usa_id_da_url(self):
        dto = TicketInputDTO(id=None, title="Login broken")

        ticket = dto.to_entity(ticket_id=9)

        assert ticket.id == 9
        assert ticket.title == "Login broken"


class TestReferenceInputDTO:

    def test_nome_obrigatorio(self):
        with pytest.raises(ValidationError):
            ReferenceInputDTO.from_dict({"name": "  "})

    def test_faz_trim(self):
        assert ReferenceInputDTO.from_dict({"name": " Bug "}).name == "Bug"


class TestTicketOutputDTO:

    def test_to_dict(self):
        ticket = Ticket(
            id=1,
            title="Login broken",
            description="Cannot log in since last update",
            status=TicketStatus.OPEN,
            creation_date=datetime(2024, 5, 1, tzinfo=timezone.utc),
            category_id=1,
            priority_id=2,
            category=Reference(1, "Bug"),
        )

        data = TicketOutputDTO.from_entity(ticket).to_dict()

        assert data["status"] == "OPEN"
        assert data["creation_date"] == "2024-05-01T00:00:00+00:00"
        assert data["category"] == {"id": 1, "name": "Bug"}
        assert data["priority"] is None
        assert data["user_id"] is None


class TestLimitesDeEntrada:
    """Inteiros e tamanhos máximos vindos do JSON."""

    def test_float_fracionario_rejeitado(self):
        with pytest.raises(ValidationError) as exc_info:
            TicketInputDTO.from_dict({"category_id": 1.9})

        assert exc_info.value.field == "category_id"

    def test_float_inteiro_aceito(self):
        assert TicketInputDTO.from_dict({"priority_id": 2.0}).priority_id == 2

    def test_float_fracionario_aninhado(self):
        with pytest.raises(ValidationError):
            TicketInputDTO.from_dict({"category": {"id": 3.5}})

    def test_titulo_acima_do_limite(self):
        with pytest.raises(ValidationError) as exc_info:
            TicketInputDTO.from_dict({"title": "x" * (TITLE_MAX_LENGTH + 1)})

        assert exc_info.value.field == "title"

    def test_titulo_no_limite(self):
        dto = TicketInputDTO.from_dict({"title": "x" * TITLE_MAX_LENGTH})

        assert len(dto.title) == TITLE_MAX_LENGTH

    def test_nome_acima_do_limite(self):
        with pytest.raises(ValidationError):
            ReferenceInputDTO.from_dict({"name": "n" * (NAME_MAX_LENGTH + 1)})
