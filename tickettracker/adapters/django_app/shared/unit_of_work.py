"""
Unit of Work - Implementação Django.

Gerencia transações atômicas entre múltiplos repositórios,
garantindo consistência de dados.

Responsabilidades:
- Abrir/fechar um bloco transaction.atomic()
- Commit/Rollback coordenado
- Manter locks de select_for_update até o fim do bloco

Aninhamento:
- Dentro de uma transação já aberta (ex: testes com pytest-django),
  atomic() cria um savepoint; rollback desfaz apenas o savepoint
"""

import logging

from django.db import transaction

from tickettracker.core.shared.interfaces import UnitOfWork

logger = logging.getLogger(__name__)


class DjangoUnitOfWork(UnitOfWork):
    """
    Implementação Django do Unit of Work.

    Usa django.db.transaction.atomic como transação subjacente.

    Example:
        with DjangoUnitOfWork():
            ticket = repo.find_by_id(ticket_id, for_update=True)
            ticket.title = "Novo título"
            repo.save(ticket)
        # Commit automático

    Example com rollback:
        with DjangoUnitOfWork():
            repo.save(ticket)
            raise Exception("Erro!")
        # Rollback automático
    """

    def __init__(self, using: str = None):
        """
        Inicializa Unit of Work.

        Args:
            using: Alias do banco (default: 'default')
        """
        self._using = using
        self._atomic = None
        self._committed = False
        self._rolled_back = False

    def _begin_transaction(self) -> None:
        self._atomic = transaction.atomic(using=self._using)
        self._atomic.__enter__()
        logger.debug("Transaction started")

    def _finish(self) -> None:
        atomic, self._atomic = self._atomic, None
        if atomic is not None:
            atomic.__exit__(None, None, None)

    def commit(self) -> None:
        """
        Persiste todas as mudanças.

        Raises:
            Exception: Se commit falhar, re-lança exceção
        """
        if self._committed or self._rolled_back:
            logger.warning("Transaction already finalized")
            return

        self._finish()
        self._committed = True
        logger.debug("Transaction committed")

    def rollback(self) -> None:
        """Desfaz todas as mudanças do bloco."""
        if self._committed or self._rolled_back:
            return

        if self._atomic is not None:
            transaction.set_rollback(True, using=self._using)
        self._finish()
        self._rolled_back = True
        logger.debug("Transaction rolled back")

    @property
    def is_committed(self) -> bool:
        return self._committed

    @property
    def is_rolled_back(self) -> bool:
        return self._rolled_back
