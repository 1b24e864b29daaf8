"""
Configuração do projeto Ticket Tracker.

Módulos:
- settings: Configurações Django
- urls: Rotas principais
- wsgi: WSGI application
- container: Dependency Injection Container
"""
