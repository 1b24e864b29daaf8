"""
Ports (Interfaces) do Domínio de Tickets.

Define os contratos que os Adapters de infraestrutura devem implementar
para persistência de tickets e dos registros de referência (categorias,
prioridades).

Tipos de Ports:
- TicketRepository: Store de tickets (ID numérico atribuído no save)
- ReferenceRegistry: Registro plano (id, nome) para categoria/prioridade

Implementações em memória ficam aqui também: são thread-safe e servem
para testes unitários, prototipagem e desenvolvimento local.

Princípio:
    Core define interfaces → Adapters implementam
    Dependências sempre apontam para o Core
"""

import itertools
import threading
from dataclasses import replace
from typing import Dict, List, Optional, Protocol, runtime_checkable

from tickettracker.core.shared.exceptions import ValidationError
from tickettracker.core.shared.interfaces import UnitOfWork
from tickettracker.core.shared.pagination import PaginatedResult, PaginationParams

from .entities import Reference, Ticket


@runtime_checkable
class TicketRepository(Protocol):
    """
    Interface para persistência de Tickets.

    Implementações:
    - DjangoTicketRepository (ORM, select_related para leituras eager)
    - InMemoryTicketRepository (para testes)

    Example:
        class DjangoTicketRepository:
            def save(self, ticket: Ticket) -> Ticket:
                model = TicketMapper.to_model(ticket)
                model.save()
                return TicketMapper.to_entity(model)
    """

    def save(self, ticket: Ticket) -> Ticket:
        """
        Persiste ticket (create se id é None, update caso contrário).

        Returns:
            Ticket persistido, com ID atribuído
        """
        ...

    def find_by_id(self, ticket_id: int, for_update: bool = False) -> Optional[Ticket]:
        """
        Busca ticket por ID, sem relações.

        Args:
            ticket_id: ID do ticket
            for_update: Solicita lock de escrita até o fim da transação
                corrente (quando o store suporta)
        """
        ...

    def find_by_id_eager(self, ticket_id: int) -> Optional[Ticket]:
        """Busca ticket por ID com categoria, prioridade e usuário."""
        ...

    def find_all(self, pagination: PaginationParams) -> PaginatedResult[Ticket]:
        """Lista página de tickets (ordem por ID), sem relações."""
        ...

    def find_all_eager(self, pagination: PaginationParams) -> PaginatedResult[Ticket]:
        """Lista página de tickets com relações carregadas."""
        ...

    def find_all_by_user(self, user_id: int) -> List[Ticket]:
        """Lista tickets submetidos por um usuário."""
        ...

    def delete_by_id(self, ticket_id: int) -> None:
        """Remove ticket. Não falha se ele não existir."""
        ...

    def exists(self, ticket_id: int) -> bool:
        ...

    def count(self) -> int:
        ...


@runtime_checkable
class ReferenceRegistry(Protocol):
    """
    Interface para registros de referência (categoria, prioridade).

    O Core só exige que a referência esteja presente no ticket; o
    registro existe para CRUD próprio e para leituras eager.
    """

    def get(self, ref_id: int) -> Optional[Reference]:
        ...

    def exists(self, ref_id: int) -> bool:
        ...

    def create(self, name: str) -> Reference:
        """
        Cria referência.

        Raises:
            ValidationError: Se nome vazio ou já existente
        """
        ...

    def find_or_create(self, name: str) -> Reference:
        """Retorna referência existente com o nome ou cria uma nova (idempotente)."""
        ...

    def update(self, ref_id: int, name: str) -> Optional[Reference]:
        """
        Renomeia referência existente.

        Returns:
            Referência atualizada, ou None se o ID não existe

        Raises:
            ValidationError: Se nome vazio ou já usado por outra referência
        """
        ...

    def list_all(self) -> List[Reference]:
        ...

    def delete(self, ref_id: int) -> None:
        ...


class InMemoryReferenceRegistry:
    """
    Registro de referências em memória.

    Example:
        categories = InMemoryReferenceRegistry()
        bug = categories.find_or_create("Bug")
    """

    def __init__(self, kind: str = "reference"):
        self.kind = kind
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._items: Dict[int, Reference] = {}

    def get(self, ref_id: int) -> Optional[Reference]:
        with self._lock:
            return self._items.get(ref_id)

    def exists(self, ref_id: int) -> bool:
        with self._lock:
            return ref_id in self._items

    def _find_by_name(self, name: str) -> Optional[Reference]:
        # Chamar com self._lock adquirido
        for item in self._items.values():
            if item.name == name:
                return item
        return None

    def _insert(self, name: str) -> Reference:
        ref = Reference(id=next(self._ids), name=name)
        self._items[ref.id] = ref
        return ref

    def create(self, name: str) -> Reference:
        if not name or not name.strip():
            raise ValidationError("Nome é obrigatório", field="name")
        with self._lock:
            if self._find_by_name(name) is not None:
                raise ValidationError(f"{self.kind} '{name}' já existe", field="name")
            return self._insert(name)

    def find_or_create(self, name: str) -> Reference:
        if not name or not name.strip():
            raise ValidationError("Nome é obrigatório", field="name")
        with self._lock:
            return self._find_by_name(name) or self._insert(name)

    def update(self, ref_id: int, name: str) -> Optional[Reference]:
        if not name or not name.strip():
            raise ValidationError("Nome é obrigatório", field="name")
        with self._lock:
            if ref_id not in self._items:
                return None
            other = self._find_by_name(name)
            if other is not None and other.id != ref_id:
                raise ValidationError(f"{self.kind} '{name}' já existe", field="name")
            ref = Reference(id=ref_id, name=name)
            self._items[ref_id] = ref
            return ref

    def list_all(self) -> List[Reference]:
        with self._lock:
            return sorted(self._items.values(), key=lambda r: r.id)

    def delete(self, ref_id: int) -> None:
        with self._lock:
            self._items.pop(ref_id, None)


class InMemoryTicketRepository:
    """
    Implementação em memória do TicketRepository.

    Thread-safe: um RLock protege o dicionário e a sequência de IDs.
    Guarda cópias, então alterações no objeto do chamador não vazam
    para o store.

    Útil para:
    - Testes unitários
    - Prototipagem
    - Desenvolvimento local

    Não usar em produção!

    Example:
        repo = InMemoryTicketRepository()
        saved = repo.save(ticket)
        found = repo.find_by_id(saved.id)
    """

    def __init__(
        self,
        categories: Optional[InMemoryReferenceRegistry] = None,
        priorities: Optional[InMemoryReferenceRegistry] = None,
        users: Optional[InMemoryReferenceRegistry] = None,
    ):
        self.lock = threading.RLock()
        self._ids = itertools.count(1)
        self._tickets: Dict[int, Ticket] = {}
        self._categories = categories
        self._priorities = priorities
        self._users = users

    @staticmethod
    def _detached(ticket: Ticket) -> Ticket:
        return replace(ticket, category=None, priority=None, user=None)

    def _resolve(self, registry: Optional[InMemoryReferenceRegistry], ref_id):
        if registry is None or ref_id is None:
            return None
        return registry.get(ref_id)

    def _eager(self, ticket: Ticket) -> Ticket:
        return replace(
            ticket,
            category=self._resolve(self._categories, ticket.category_id),
            priority=self._resolve(self._priorities, ticket.priority_id),
            user=self._resolve(self._users, ticket.user_id),
        )

    def save(self, ticket: Ticket) -> Ticket:
        """Salva ticket em memória."""
        with self.lock:
            ticket_id = ticket.id
            if ticket_id is None:
                ticket_id = next(self._ids)
                while ticket_id in self._tickets:
                    ticket_id = next(self._ids)
            stored = replace(self._detached(ticket), id=ticket_id)
            self._tickets[ticket_id] = stored
            return replace(stored)

    def find_by_id(self, ticket_id: int, for_update: bool = False) -> Optional[Ticket]:
        """Busca ticket por ID (o lock fica com o InMemoryUnitOfWork)."""
        with self.lock:
            stored = self._tickets.get(ticket_id)
            return replace(stored) if stored else None

    def find_by_id_eager(self, ticket_id: int) -> Optional[Ticket]:
        with self.lock:
            stored = self._tickets.get(ticket_id)
            return self._eager(stored) if stored else None

    def _page(self, pagination: PaginationParams, eager: bool) -> PaginatedResult[Ticket]:
        with self.lock:
            ordered = [self._tickets[k] for k in sorted(self._tickets)]
        page = ordered[pagination.offset:pagination.limit]
        items = [self._eager(t) if eager else replace(t) for t in page]
        return PaginatedResult(
            items=items,
            total=len(ordered),
            page=pagination.page,
            per_page=pagination.per_page,
        )

    def find_all(self, pagination: PaginationParams) -> PaginatedResult[Ticket]:
        return self._page(pagination, eager=False)

    def find_all_eager(self, pagination: PaginationParams) -> PaginatedResult[Ticket]:
        return self._page(pagination, eager=True)

    def find_all_by_user(self, user_id: int) -> List[Ticket]:
        """Filtra por usuário."""
        with self.lock:
            return [
                self._eager(self._tickets[k])
                for k in sorted(self._tickets)
                if self._tickets[k].user_id == user_id
            ]

    def delete_by_id(self, ticket_id: int) -> None:
        """Remove ticket."""
        with self.lock:
            self._tickets.pop(ticket_id, None)

    def exists(self, ticket_id: int) -> bool:
        """Verifica existência."""
        with self.lock:
            return ticket_id in self._tickets

    def count(self) -> int:
        """Conta total."""
        with self.lock:
            return len(self._tickets)

    def clear(self) -> None:
        """Limpa todos os dados (útil para testes)."""
        with self.lock:
            self._tickets.clear()


class InMemoryUnitOfWork(UnitOfWork):
    """
    Unit of Work em memória para testes.

    Mantém o lock do repositório durante todo o bloco `with`, o que
    serializa o read-merge-write do partial update.

    Example:
        repo = InMemoryTicketRepository()
        with InMemoryUnitOfWork(repo.lock) as uow:
            ticket = repo.find_by_id(1, for_update=True)
            repo.save(ticket)

        assert uow.committed
    """

    def __init__(self, lock: Optional[threading.RLock] = None):
        self._lock = lock
        self._held = False
        self._committed = False
        self._rolled_back = False

    def _begin_transaction(self) -> None:
        if self._lock is not None:
            self._lock.acquire()
            self._held = True

    def _release(self) -> None:
        if self._held:
            self._held = False
            self._lock.release()

    def commit(self) -> None:
        """Simula commit."""
        self._committed = True
        self._release()

    def rollback(self) -> None:
        """Simula rollback."""
        self._rolled_back = True
        self._release()

    @property
    def committed(self) -> bool:
        return self._committed

    @property
    def rolled_back(self) -> bool:
        return self._rolled_back
