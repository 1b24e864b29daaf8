"""
Interfaces (Ports) - Contratos entre Core e Adapters.

Este módulo define as interfaces que os Adapters devem implementar.
São os "Ports" da Arquitetura Hexagonal.

Tipos de Ports:
- Driven Ports (lado direito): UnitOfWork (repositórios em core/tickets/ports.py)
- Driving Ports (lado esquerdo): Definidos nos Use Cases

Princípio: Core define interfaces; Adapters implementam.
O fluxo de dependência sempre aponta para o Core.
"""

from abc import ABC, abstractmethod
from typing import Callable


class UnitOfWork(ABC):
    """
    Unit of Work - Coordena transações atômicas.

    Garante que múltiplas operações de persistência sejam
    executadas como uma única unidade: ou todas são persistidas
    ou nenhuma é.

    Pattern: Context Manager
        with uow:
            existing = repo.find_by_id(ticket_id, for_update=True)
            repo.save(merged)
        # Commit automático ao sair sem erro
        # Rollback automático se exceção

    Responsabilidades:
    - Gerenciar início/fim de transação
    - Commit/Rollback coordenado
    - Manter o lock de leitura (read-merge-write) até o fim do bloco
    """

    def __enter__(self) -> "UnitOfWork":
        """
        Inicia contexto de transação.

        Returns:
            Self para permitir uso como context manager
        """
        self._begin_transaction()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        """
        Finaliza contexto de transação.

        Args:
            exc_type: Tipo da exceção (None se sucesso)
            exc_val: Valor da exceção
            exc_tb: Traceback da exceção

        Returns:
            False para propagar exceções
        """
        if exc_type is not None:
            self.rollback()
        else:
            self.commit()
        return False  # Não suprime exceções

    @abstractmethod
    def _begin_transaction(self) -> None:
        """
        Inicia uma nova transação.

        Deve ser implementado pelo adapter específico
        (Django: transaction.atomic().__enter__())
        """
        raise NotImplementedError

    @abstractmethod
    def commit(self) -> None:
        """Persiste todas as mudanças e libera recursos da transação."""
        raise NotImplementedError

    @abstractmethod
    def rollback(self) -> None:
        """
        Desfaz todas as mudanças.

        Chamado automaticamente se exceção ocorrer dentro
        do bloco `with`.
        """
        raise NotImplementedError


# Fábrica de UoW: cada operação abre sua própria transação
UnitOfWorkFactory = Callable[[], UnitOfWork]

