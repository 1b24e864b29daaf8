"""
Configurações globais do Pytest para o Ticket Tracker.

Este arquivo é carregado automaticamente pelo pytest e
fornece fixtures e configurações compartilhadas.
"""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from tickettracker.config.container import reset_container
from tickettracker.core.tickets.entities import Ticket
from tickettracker.core.tickets.ports import (
    InMemoryReferenceRegistry,
    InMemoryTicketRepository,
    InMemoryUnitOfWork,
)
from tickettracker.core.tickets.use_cases import TicketService

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def project_root():
    """Retorna o caminho raiz do projeto."""
    return Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def reset_singletons():
    """
    Reset do container global entre testes.

    Garante que cada teste inicia com estado limpo.
    """
    reset_container()
    yield
    reset_container()


@pytest.fixture
def fixed_now():
    """Instante usado pelo relógio do service de teste."""
    return FIXED_NOW


@pytest.fixture
def categories():
    registry = InMemoryReferenceRegistry("Categoria")
    registry.create("Bug")
    registry.create("Acesso")
    return registry


@pytest.fixture
def priorities():
    registry = InMemoryReferenceRegistry("Prioridade")
    registry.create("Baixa")
    registry.create("Alta")
    return registry


@pytest.fixture
def ticket_repo(categories, priorities):
    """Repositório em memória para testes unitários."""
    return InMemoryTicketRepository(categories=categories, priorities=priorities)


@pytest.fixture
def service(ticket_repo):
    """TicketService com relógio fixo."""
    return TicketService(
        ticket_repo,
        uow_factory=lambda: InMemoryUnitOfWork(ticket_repo.lock),
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def make_ticket():
    """Factory de tickets válidos (sobrescreva campos via kwargs)."""
    def _make(**kwargs):
        defaults = {
            "title": "Login broken",
            "description": "Cannot log in since last update",
            "category_id": 1,
            "priority_id": 2,
        }
        defaults.update(kwargs)
        return Ticket(**defaults)
    return _make


def pytest_configure(config):
    """Configuração do pytest."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


def pytest_collection_modifyitems(config, items):
    """Pula testes de integração sem --run-integration."""
    skip_integration = pytest.mark.skip(reason="Integration tests require --run-integration")

    for item in items:
        if "integration" in item.keywords:
            if not config.getoption("--run-integration", default=False):
                item.add_marker(skip_integration)


def pytest_addoption(parser):
    """Adiciona opções de linha de comando."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="run integration tests",
    )
