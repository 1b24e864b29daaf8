#!/usr/bin/env python
"""
Setup rápido para desenvolvimento local.

Este script:
1. Configura Django settings
2. Verifica a conexão com o banco
3. Executa migrations
4. Cria dados de exemplo (opcional)

Uso:
    python scripts/quick_setup.py
    python scripts/quick_setup.py --with-sample-data
    python scripts/quick_setup.py --check-only
"""

import argparse
import logging
import os

from django.db import DatabaseError

logger = logging.getLogger('tickettracker.scripts.quick_setup')

SAMPLE_CATEGORIES = ['Infraestrutura', 'Acesso', 'Relatórios', 'Performance']
SAMPLE_PRIORITIES = ['Baixa', 'Média', 'Alta', 'Crítica']

SAMPLE_TICKETS = [
    {
        'title': 'Sistema fora do ar',
        'description': 'O sistema está completamente inacessível. Erro 503 em todas as páginas.',
        'category': 'Infraestrutura',
        'priority': 'Crítica',
    },
    {
        'title': 'Login com Google não responde',
        'description': 'Usuários não conseguem entrar com conta Google; o botão não responde.',
        'category': 'Acesso',
        'priority': 'Alta',
    },
    {
        'title': 'Relatório exportando dados incorretos',
        'description': 'O relatório de vendas mostra valores negativos em algumas colunas.',
        'category': 'Relatórios',
        'priority': 'Média',
        'status': 'IN_PROGRESS',
    },
    {
        'title': 'Listagem de clientes lenta',
        'description': 'A tela de listagem de clientes demora mais de 10 segundos para carregar.',
        'category': 'Performance',
        'priority': 'Baixa',
    },
]


def setup_django():
    """Configura Django para uso standalone (SQLite local)."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'tickettracker.config.settings')

    import django
    django.setup()


def run_migrations():
    """Executa migrations."""
    from django.core.management import call_command

    logger.info("Executando migrations...")
    call_command('migrate', verbosity=1)
    logger.info("Migrations concluídas")


def create_sample_data():
    """Cria categorias, prioridades e tickets de exemplo via TicketService."""
    from tickettracker.config.container import get_container
    from tickettracker.core.tickets.dtos import TicketInputDTO

    container = get_container()
    categories = {
        name: container.category_registry().find_or_create(name)
        for name in SAMPLE_CATEGORIES
    }
    priorities = {
        name: container.priority_registry().find_or_create(name)
        for name in SAMPLE_PRIORITIES
    }
    service = container.ticket_service()

    for data in SAMPLE_TICKETS:
        payload = dict(data)
        payload['category_id'] = categories[payload.pop('category')].id
        payload['priority_id'] = priorities[payload.pop('priority')].id

        ticket = service.create(TicketInputDTO.from_dict(payload).to_entity())
        logger.info(f"Ticket criado: [{ticket.id}] {ticket.title}")

    logger.info(f"{len(SAMPLE_TICKETS)} tickets criados")


def check_connection() -> bool:
    """Verifica conexão com o banco."""
    from django.db import connection

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
    except DatabaseError as e:
        logger.error(f"Erro de conexão: {e}")
        return False

    logger.info("Conexão OK")
    return True


def show_info():
    """Mostra informações do setup."""
    from django.conf import settings

    logger.info(f"Database Engine: {settings.DATABASES['default']['ENGINE']}")
    logger.info(f"Database Name: {settings.DATABASES['default']['NAME']}")
    logger.info(f"Debug Mode: {settings.DEBUG}")
    logger.info(
        "Próximo passo: django-admin runserver "
        "--settings=tickettracker.config.settings e acesse /tickets/api/"
    )


def main():
    parser = argparse.ArgumentParser(description='Setup rápido para desenvolvimento')
    parser.add_argument(
        '--with-sample-data',
        action='store_true',
        help='Criar dados de exemplo'
    )
    parser.add_argument(
        '--check-only',
        action='store_true',
        help='Apenas verificar conexão'
    )

    args = parser.parse_args()

    setup_django()

    if not check_connection():
        logger.warning(
            "Certifique-se de que o banco de dados está rodando "
            "(sem DATABASE_URL/DATABASE_HOST o SQLite local é usado)"
        )
        return

    if args.check_only:
        return

    run_migrations()

    if args.with_sample_data:
        create_sample_data()

    show_info()


if __name__ == '__main__':
    main()
