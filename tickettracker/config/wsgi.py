"""
WSGI config para o Ticket Tracker.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'tickettracker.config.settings')

application = get_wsgi_application()
