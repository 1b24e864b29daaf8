"""
URL patterns para o domínio de Tickets.

Endpoints API JSON:
- GET /tickets/api/ - Listar tickets
- POST /tickets/api/ - Criar ticket
- GET /tickets/api/mine/ - Tickets do usuário autenticado
- GET /tickets/api/categories/ - Listar categorias
- POST /tickets/api/categories/ - Criar categoria
- GET /tickets/api/priorities/ - Listar prioridades
- POST /tickets/api/priorities/ - Criar prioridade
- GET|PUT|PATCH|DELETE /tickets/api/categories/<id>/ - Operar categoria
- GET|PUT|PATCH|DELETE /tickets/api/priorities/<id>/ - Operar prioridade
- GET /tickets/api/<id>/ - Obter ticket
- PUT /tickets/api/<id>/ - Substituir ticket
- PATCH /tickets/api/<id>/ - Atualizar ticket parcialmente
- DELETE /tickets/api/<id>/ - Remover ticket
"""

from django.urls import path
from . import api_views

app_name = 'tickets'

urlpatterns = [
    # Listagem e criação
    path('api/', api_views.TicketAPIListView.as_view(), name='api_list'),

    # Rotas fixas (antes do <pk>)
    path('api/mine/', api_views.TicketAPIMineView.as_view(), name='api_mine'),
    path('api/categories/', api_views.CategoryAPIListView.as_view(), name='api_categories'),
    path('api/priorities/', api_views.PriorityAPIListView.as_view(), name='api_priorities'),
    path('api/categories/<int:pk>/', api_views.CategoryAPIDetailView.as_view(), name='api_category_detail'),
    path('api/priorities/<int:pk>/', api_views.PriorityAPIDetailView.as_view(), name='api_priority_detail'),

    # Detalhes, atualização e remoção
    path('api/<int:pk>/', api_views.TicketAPIDetailView.as_view(), name='api_detail'),
]
