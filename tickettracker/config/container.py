"""
Dependency Injection Container.

Configura e gerencia todas as dependências da aplicação.
Usa dependency-injector para lazy-loading e injeção automática.

Padrões:
- Singleton: Uma instância para toda app (repositories, registries, policy)
- Factory: Nova instância por chamada (services, UoW)
- Delegate: O service recebe o *provider* de UoW e abre uma transação
  por operação
"""

from dependency_injector import containers, providers
from typing import Optional


def _import(module: str, name: str):
    # Lazy import para evitar import de Django antes do setup
    return getattr(__import__(module, fromlist=[name]), name)


class Container(containers.DeclarativeContainer):
    """
    Container principal de Dependency Injection.

    Organização:
    - Configuration: Variáveis de ambiente/settings
    - Repositories: Persistência (Django ORM)
    - Unit of Work: Transações
    - Services: Use Cases

    Example:
        from tickettracker.config.container import get_container

        service = get_container().ticket_service()
        ticket = service.create(ticket)
    """

    # =========================================================================
    # Configuration
    # =========================================================================

    config = providers.Configuration()

    # =========================================================================
    # Repositories (Singleton - uma instância por app)
    # =========================================================================

    ticket_repository = providers.Singleton(
        lambda: _import(
            'tickettracker.adapters.django_app.tickets.repositories',
            'DjangoTicketRepository',
        )()
    )

    category_registry = providers.Singleton(
        lambda: _import(
            'tickettracker.adapters.django_app.tickets.repositories',
            'DjangoCategoryRegistry',
        )()
    )

    priority_registry = providers.Singleton(
        lambda: _import(
            'tickettracker.adapters.django_app.tickets.repositories',
            'DjangoPriorityRegistry',
        )()
    )

    # =========================================================================
    # Unit of Work (Factory - nova instância por operação)
    # =========================================================================

    unit_of_work = providers.Factory(
        lambda: _import(
            'tickettracker.adapters.django_app.shared.unit_of_work',
            'DjangoUnitOfWork',
        )()
    )

    # =========================================================================
    # Services / Use Cases
    # =========================================================================

    validation_policy = providers.Singleton(
        lambda: _import(
            'tickettracker.core.tickets.validation',
            'TicketValidationPolicy',
        )()
    )

    ticket_service = providers.Factory(
        lambda ticket_repo, uow_factory, validator: _import(
            'tickettracker.core.tickets.use_cases',
            'TicketService',
        )(
            ticket_repo=ticket_repo,
            uow_factory=uow_factory,
            validator=validator,
        ),
        ticket_repo=ticket_repository,
        uow_factory=unit_of_work.provider,
        validator=validation_policy,
    )


# =============================================================================
# Container Global (Singleton)
# =============================================================================

_container: Optional[containers.DeclarativeContainer] = None


def get_container() -> Container:
    """
    Retorna instância global do container.

    Cria se não existir (lazy initialization).
    """
    global _container

    if _container is None:
        _container = Container()

    return _container


def set_container(container: containers.DeclarativeContainer) -> None:
    """Substitui o container global (ex: TestingContainer em testes)."""
    global _container
    _container = container


def reset_container() -> None:
    """
    Reset do container (para testes).

    Permite criar novo container limpo.
    """
    global _container
    _container = None


# =============================================================================
# Testing Container
# =============================================================================

class TestingContainer(containers.DeclarativeContainer):
    """
    Container para testes com implementações em memória.

    Mesmos providers do Container, sem banco de dados.

    Example:
        container = TestingContainer()
        service = container.ticket_service()
        bug = container.category_registry().find_or_create("Bug")
    """

    config = providers.Configuration()

    category_registry = providers.Singleton(
        lambda: _import(
            'tickettracker.core.tickets.ports', 'InMemoryReferenceRegistry'
        )('Categoria')
    )

    priority_registry = providers.Singleton(
        lambda: _import(
            'tickettracker.core.tickets.ports', 'InMemoryReferenceRegistry'
        )('Prioridade')
    )

    ticket_repository = providers.Singleton(
        lambda categories, priorities: _import(
            'tickettracker.core.tickets.ports', 'InMemoryTicketRepository'
        )(categories=categories, priorities=priorities),
        categories=category_registry,
        priorities=priority_registry,
    )

    unit_of_work = providers.Factory(
        lambda repo: _import(
            'tickettracker.core.tickets.ports', 'InMemoryUnitOfWork'
        )(repo.lock),
        repo=ticket_repository,
    )

    validation_policy = providers.Singleton(
        lambda: _import(
            'tickettracker.core.tickets.validation',
            'TicketValidationPolicy',
        )()
    )

    ticket_service = providers.Factory(
        lambda ticket_repo, uow_factory, validator: _import(
            'tickettracker.core.tickets.use_cases',
            'TicketService',
        )(
            ticket_repo=ticket_repo,
            uow_factory=uow_factory,
            validator=validator,
        ),
        ticket_repo=ticket_repository,
        uow_factory=unit_of_work.provider,
        validator=validation_policy,
    )
