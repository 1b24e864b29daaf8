"""
URL Configuration para o Ticket Tracker.

Estrutura:
- /tickets/ - API de Tickets
- /health/ - Health check
"""

from django.http import JsonResponse
from django.urls import path, include


def health(request):
    return JsonResponse({'status': 'ok'})


urlpatterns = [
    # Tickets App
    path('tickets/', include('tickettracker.adapters.django_app.tickets.urls')),

    # Health check
    path('health/', health, name='health'),
]
