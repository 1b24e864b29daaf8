"""
Testes de integração dos Adapters Django.

Testa:
- Mappers (Entity ↔ Model)
- DjangoTicketRepository (CRUD, eager, paginação)
- Registros de categoria/prioridade
- DjangoUnitOfWork (commit/rollback)
- TicketService sobre o ORM
"""

from datetime import datetime, timezone

import pytest
from django.db.models import ProtectedError

from tickettracker.adapters.django_app.shared.unit_of_work import DjangoUnitOfWork
from tickettracker.adapters.django_app.tickets.mappers import ReferenceMapper, TicketMapper
from tickettracker.adapters.django_app.tickets.models import (
    TicketCategoryModel,
    TicketModel,
)
from tickettracker.adapters.django_app.tickets.repositories import (
    DjangoCategoryRegistry,
    DjangoPriorityRegistry,
)
from tickettracker.config.container import get_container
from tickettracker.core.shared.exceptions import ValidationError
from tickettracker.core.shared.pagination import PaginationParams
from tickettracker.core.tickets.entities import Reference, Ticket, TicketStatus
from tickettracker.core.tickets.ports import ReferenceRegistry, TicketRepository


pytestmark = pytest.mark.django_db


# =============================================================================
# Mappers
# =============================================================================

class TestTicketMapper:
    """Testes para TicketMapper."""

    def test_to_model(self, category, priority):
        entity = Ticket(
            title="Login broken",
            description="Cannot log in since last update",
            status=TicketStatus.RESOLVED,
            category_id=category.id,
            priority_id=priority.id,
        )

        model = TicketMapper.to_model(entity)

        assert model.id is None
        assert model.status == "RESOLVED"
        assert model.category_id == category.id

    def test_to_entity_lazy(self, ticket_model_factory):
        model = ticket_model_factory()

        entity = TicketMapper.to_entity(model)

        assert entity.id == model.id
        assert entity.status == TicketStatus.OPEN
        assert entity.category is None

    def test_to_entity_eager(self, ticket_model_factory, user):
        model = ticket_model_factory(user=user)

        entity = TicketMapper.to_entity(model, eager=True)

        assert entity.category == Reference(model.category_id, "Bug")
        assert entity.priority.name == "Alta"
        assert entity.user == Reference(user.id, "alice")

    def test_status_nulo(self, ticket_model_factory):
        entity = TicketMapper.to_entity(ticket_model_factory(status=None))

        assert entity.status is None

    def test_reference_mapper_none(self):
        assert ReferenceMapper.to_entity(None) is None


# =============================================================================
# Repositório de Tickets
# =============================================================================

class TestDjangoTicketRepository:
    """Testes para DjangoTicketRepository."""

    def test_implementa_protocol(self, django_ticket_repo):
        assert isinstance(django_ticket_repo, TicketRepository)

    def test_save_atribui_id(self, django_ticket_repo, valid_ticket):
        saved = django_ticket_repo.save(valid_ticket())

        assert saved.id is not None
        assert TicketModel.objects.filter(pk=saved.id).exists()

    def test_save_com_id_substitui_linha(self, django_ticket_repo, valid_ticket):
        saved = django_ticket_repo.save(valid_ticket(status=TicketStatus.OPEN))

        django_ticket_repo.save(valid_ticket(id=saved.id, title="Replaced title"))

        model = TicketModel.objects.get(pk=saved.id)
        assert model.title == "Replaced title"
        assert model.status is None
        assert TicketModel.objects.count() == 1

    def test_round_trip_de_data(self, django_ticket_repo, valid_ticket):
        when = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
        saved = django_ticket_repo.save(valid_ticket(creation_date=when))

        found = django_ticket_repo.find_by_id(saved.id)

        assert found.creation_date == when

    def test_find_by_id_inexistente(self, django_ticket_repo):
        assert django_ticket_repo.find_by_id(9999) is None
        assert django_ticket_repo.find_by_id_eager(9999) is None

    def test_find_by_id_for_update(self, django_ticket_repo, valid_ticket):
        saved = django_ticket_repo.save(valid_ticket())

        with DjangoUnitOfWork():
            found = django_ticket_repo.find_by_id(saved.id, for_update=True)

        assert found.id == saved.id

    def test_find_by_id_eager(self, django_ticket_repo, valid_ticket, user):
        saved = django_ticket_repo.save(valid_ticket(user_id=user.id))

        found = django_ticket_repo.find_by_id_eager(saved.id)

        assert found.category.name == "Bug"
        assert found.priority.name == "Alta"
        assert found.user.name == "alice"

    def test_find_all_paginado(self, django_ticket_repo, valid_ticket):
        ids = [django_ticket_repo.save(valid_ticket()).id for _ in range(5)]

        page = django_ticket_repo.find_all_eager(PaginationParams(page=2, per_page=2))

        assert [t.id for t in page.items] == ids[2:4]
        assert page.total == 5
        assert page.items[0].category is not None

    def test_find_all_by_user(self, django_ticket_repo, valid_ticket, user):
        mine = django_ticket_repo.save(valid_ticket(user_id=user.id))
        django_ticket_repo.save(valid_ticket())

        tickets = django_ticket_repo.find_all_by_user(user.id)

        assert [t.id for t in tickets] == [mine.id]

    def test_delete_idempotente(self, django_ticket_repo, valid_ticket):
        saved = django_ticket_repo.save(valid_ticket())

        django_ticket_repo.delete_by_id(saved.id)
        django_ticket_repo.delete_by_id(saved.id)

        assert not django_ticket_repo.exists(saved.id)
        assert django_ticket_repo.count() == 0


# =============================================================================
# Registros de Referência
# =============================================================================

class TestDjangoReferenceRegistry:
    """Testes para DjangoCategoryRegistry / DjangoPriorityRegistry."""

    def test_implementa_protocol(self):
        assert isinstance(DjangoCategoryRegistry(), ReferenceRegistry)

    def test_create_e_list(self):
        registry = DjangoPriorityRegistry()

        low = registry.create("Baixa")
        high = registry.create("Alta")

        assert registry.list_all() == [low, high]
        assert registry.get(low.id).name == "Baixa"

    def test_create_duplicado(self):
        registry = DjangoCategoryRegistry()
        registry.create("Bug")

        with pytest.raises(ValidationError) as exc_info:
            registry.create("Bug")

        assert exc_info.value.field == "name"

    def test_find_or_create(self):
        registry = DjangoCategoryRegistry()

        first = registry.find_or_create("Acesso")
        second = registry.find_or_create("Acesso")

        assert first == second
        assert TicketCategoryModel.objects.filter(name="Acesso").count() == 1

    def test_delete_referenciado_protegido(self, ticket_model_factory, category):
        ticket_model_factory()

        with pytest.raises(ProtectedError):
            DjangoCategoryRegistry().delete(category.id)

    def test_delete_livre(self):
        registry = DjangoCategoryRegistry()
        ref = registry.create("Hardware")

        registry.delete(ref.id)

        assert not registry.exists(ref.id)

    def test_update_renomeia(self, category):
        registry = DjangoCategoryRegistry()

        updated = registry.update(category.id, "Defeito")

        assert updated == Reference(category.id, "Defeito")
        assert TicketCategoryModel.objects.get(pk=category.id).name == "Defeito"

    def test_update_nome_de_outro(self, category):
        registry = DjangoCategoryRegistry()
        other = registry.create("Acesso")

        with pytest.raises(ValidationError) as exc_info:
            registry.update(other.id, category.name)

        assert exc_info.value.field == "name"
        assert registry.get(other.id).name == "Acesso"

    def test_update_inexistente(self):
        assert DjangoPriorityRegistry().update(999, "Urgente") is None


# =============================================================================
# Unit of Work
# =============================================================================

class TestDjangoUnitOfWork:
    """Testes para DjangoUnitOfWork."""

    def test_commit(self, django_ticket_repo, valid_ticket):
        with DjangoUnitOfWork() as uow:
            saved = django_ticket_repo.save(valid_ticket())

        assert uow.is_committed
        assert django_ticket_repo.exists(saved.id)

    def test_rollback_em_excecao(self, django_ticket_repo, valid_ticket):
        uow = DjangoUnitOfWork()

        with pytest.raises(RuntimeError):
            with uow:
                django_ticket_repo.save(valid_ticket())
                raise RuntimeError("falha no meio da transação")

        assert uow.is_rolled_back
        assert django_ticket_repo.count() == 0

    def test_rollback_explicito(self, django_ticket_repo, valid_ticket):
        uow = DjangoUnitOfWork()

        with uow:
            django_ticket_repo.save(valid_ticket())
            uow.rollback()

        assert uow.is_rolled_back
        assert not uow.is_committed
        assert django_ticket_repo.count() == 0


# =============================================================================
# Service sobre o ORM
# =============================================================================

class TestTicketServiceDjango:
    """TicketService montado pelo Container de produção."""

    def test_create_e_find_one(self, valid_ticket):
        service = get_container().ticket_service()

        created = service.create(valid_ticket())
        found = service.find_one(created.id)

        assert found.status == TicketStatus.OPEN
        assert found.creation_date is not None
        assert found.category.name == "Bug"

    def test_partial_update(self, valid_ticket):
        service = get_container().ticket_service()
        created = service.create(valid_ticket())

        result = service.partial_update(
            Ticket(id=created.id, status=TicketStatus.IN_PROGRESS)
        )

        assert result.status == TicketStatus.IN_PROGRESS
        assert TicketModel.objects.get(pk=created.id).status == "IN_PROGRESS"
        assert TicketModel.objects.get(pk=created.id).title == "Login broken"

    def test_partial_update_inexistente(self):
        service = get_container().ticket_service()

        assert service.partial_update(Ticket(id=4242, title="Anything")) is None
