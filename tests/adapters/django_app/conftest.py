"""
Configuração pytest para testes com Django.

As settings vêm de tests/settings.py (DJANGO_SETTINGS_MODULE em
pyproject.toml); o pytest-django cria o banco SQLite em memória.

Fixtures:
- Models de categoria, prioridade e usuário
- Factory de TicketModel
- Repositórios Django
"""

import pytest


@pytest.fixture
def category(db):
    from tickettracker.adapters.django_app.tickets.models import TicketCategoryModel
    return TicketCategoryModel.objects.create(name="Bug")


@pytest.fixture
def priority(db):
    from tickettracker.adapters.django_app.tickets.models import TicketPriorityModel
    return TicketPriorityModel.objects.create(name="Alta")


@pytest.fixture
def user(db):
    from django.contrib.auth import get_user_model
    return get_user_model().objects.create_user(username="alice", password="secret")


@pytest.fixture
def ticket_model_factory(category, priority):
    """Factory para criar TicketModel para testes."""
    from django.utils import timezone
    from tickettracker.adapters.django_app.tickets.models import TicketModel

    def create_ticket(**kwargs):
        defaults = {
            'title': 'Login broken',
            'description': 'Cannot log in since last update',
            'status': 'OPEN',
            'creation_date': timezone.now(),
            'category': category,
            'priority': priority,
        }
        defaults.update(kwargs)
        return TicketModel.objects.create(**defaults)

    return create_ticket


@pytest.fixture
def django_ticket_repo(db):
    from tickettracker.adapters.django_app.tickets.repositories import DjangoTicketRepository
    return DjangoTicketRepository()


@pytest.fixture
def valid_ticket(category, priority):
    """Entidade válida apontando para as referências do banco."""
    from tickettracker.core.tickets.entities import Ticket

    def _make(**kwargs):
        defaults = {
            'title': 'Login broken',
            'description': 'Cannot log in since last update',
            'category_id': category.id,
            'priority_id': priority.id,
        }
        defaults.update(kwargs)
        return Ticket(**defaults)

    return _make
