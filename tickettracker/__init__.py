"""
Ticket Tracker - ciclo de vida de tickets de suporte.

Camadas:
- core: Domínio puro (entidades, validação, use cases, ports)
- adapters: Implementações de infraestrutura (Django ORM, API JSON)
- config: Settings Django e container de DI
"""

__version__ = "0.1.0"
