"""
API Views JSON para o domínio de Tickets.

RESTful API para integração com frontends e sistemas externos.

Endpoints:
- GET /tickets/api/ - Listar tickets (paginado)
- POST /tickets/api/ - Criar ticket
- GET /tickets/api/mine/ - Tickets do usuário autenticado
- GET /tickets/api/<id>/ - Obter ticket (com relações)
- PUT /tickets/api/<id>/ - Substituir ticket
- PATCH /tickets/api/<id>/ - Atualizar ticket parcial
- DELETE /tickets/api/<id>/ - Remover ticket
- GET|POST /tickets/api/categories/ - Listar/criar categorias
- GET|POST /tickets/api/priorities/ - Listar/criar prioridades
- GET|PUT|PATCH|DELETE /tickets/api/categories/<id>/ - Operar categoria
- GET|PUT|PATCH|DELETE /tickets/api/priorities/<id>/ - Operar prioridade

Formato:
- Entrada: JSON
- Saída: JSON com estrutura {success, data/error, meta}

Autenticação:
- Session (user_id do ticket vem do usuário logado quando omitido)
"""

import json
import logging
from typing import Any, Dict, Optional

from django.conf import settings
from django.db import DataError, IntegrityError
from django.db.models import ProtectedError
from django.views import View
from django.http import JsonResponse, HttpRequest, HttpResponse
from django.utils.decorators import method_decorator
from django.views.decorators.csrf import csrf_exempt

from tickettracker.core.shared.pagination import PaginationParams
from tickettracker.core.tickets.dtos import (
    ReferenceInputDTO,
    TicketInputDTO,
    TicketOutputDTO,
)
from tickettracker.core.shared.exceptions import (
    ValidationError,
    EntityNotFoundError,
    DomainException,
)
from tickettracker.config.container import get_container

logger = logging.getLogger(__name__)


# =============================================================================
# Helpers
# =============================================================================

class BadRequest(Exception):
    """Erro de transporte (corpo/parâmetros inválidos) com chave curta."""

    def __init__(self, message: str, key: str):
        self.key = key
        super().__init__(message)


def json_response(success: bool, data: Any = None, error: str = None,
                  status: int = 200, meta: Dict = None) -> JsonResponse:
    """
    Cria resposta JSON padronizada.

    Args:
        success: Se operação foi bem sucedida
        data: Dados da resposta
        error: Mensagem de erro (se aplicável)
        status: HTTP status code
        meta: Metadados adicionais

    Returns:
        JsonResponse formatada
    """
    response = {'success': success}

    if data is not None:
        response['data'] = data

    if error is not None:
        response['error'] = error

    if meta is not None:
        response['meta'] = meta

    return JsonResponse(response, status=status)


def parse_json_body(request: HttpRequest) -> Dict:
    """
    Parseia body JSON do request.

    Raises:
        BadRequest: Se JSON inválido ou não for objeto
    """
    if not request.body:
        return {}

    try:
        data = json.loads(request.body)
    except json.JSONDecodeError as e:
        raise BadRequest(f"JSON inválido: {e}", "invalidjson")

    if not isinstance(data, dict):
        raise BadRequest("Corpo da requisição deve ser um objeto JSON", "invalidjson")
    return data


def get_user_id(request: HttpRequest) -> Optional[int]:
    """Extrai ID do usuário do request (None se anônimo)."""
    if request.user.is_authenticated:
        return request.user.id
    return None


def parse_pagination(request: HttpRequest) -> PaginationParams:
    """Lê page/per_page da query string, limitando per_page ao máximo."""
    try:
        page = int(request.GET.get('page', 1))
        per_page = int(request.GET.get('per_page', settings.TICKETS_PAGE_SIZE))
    except ValueError:
        raise BadRequest("Parâmetros de paginação devem ser inteiros", "invalidpage")
    return PaginationParams(
        page=page,
        per_page=min(per_page, settings.TICKETS_MAX_PAGE_SIZE),
    )


# =============================================================================
# Base API View
# =============================================================================

@method_decorator(csrf_exempt, name='dispatch')
class BaseAPIView(View):
    """
    View base para APIs JSON.

    Fornece:
    - Parsing de JSON
    - Acesso ao container DI
    - Tratamento de erros padronizado
    """

    def get_container(self):
        """Retorna container de DI."""
        return get_container()

    def get_service(self, service_name: str):
        """Obtém service/provider do container."""
        return getattr(self.get_container(), service_name)()

    def parse_body(self, request: HttpRequest) -> Dict:
        return parse_json_body(request)

    def check_references(self, ticket) -> None:
        """
        Garante que categoria e prioridade existem antes de persistir.

        A política de validação roda primeiro, então a ordem dos erros
        de campo é preservada.

        Raises:
            ValidationError: Se o ticket violar a política
            BadRequest: categorynotfound / prioritynotfound
        """
        self.get_service('validation_policy').validate(ticket)

        if not self.get_service('category_registry').exists(ticket.category_id):
            raise BadRequest(
                f"Categoria {ticket.category_id} não encontrada", "categorynotfound"
            )
        if not self.get_service('priority_registry').exists(ticket.priority_id):
            raise BadRequest(
                f"Prioridade {ticket.priority_id} não encontrada", "prioritynotfound"
            )

    def handle_exception(self, e: Exception) -> JsonResponse:
        """
        Trata exceções e retorna resposta apropriada.

        Args:
            e: Exceção capturada

        Returns:
            JsonResponse com erro
        """
        if isinstance(e, ValidationError):
            return json_response(
                success=False,
                error=str(e),
                status=400,
                meta={
                    'kind': e.kind,
                    'field': e.field,
                    'min_length': getattr(e, 'min_length', None),
                }
            )

        if isinstance(e, EntityNotFoundError):
            return json_response(
                success=False,
                error=str(e),
                status=404
            )

        if isinstance(e, BadRequest):
            return json_response(
                success=False,
                error=str(e),
                status=400,
                meta={'key': e.key}
            )

        if isinstance(e, ProtectedError):
            return json_response(
                success=False,
                error="Registro ainda referenciado por tickets",
                status=409
            )

        if isinstance(e, IntegrityError):
            logger.warning(f"API integrity error: {e}")
            return json_response(
                success=False,
                error="Dados violam uma restrição do banco (referência inexistente ou duplicada)",
                status=400,
                meta={'key': 'integrityviolation'}
            )

        if isinstance(e, DataError):
            logger.warning(f"API data error: {e}")
            return json_response(
                success=False,
                error="Valor incompatível com a coluna do banco",
                status=400,
                meta={'key': 'invaliddata'}
            )

        if isinstance(e, DomainException):
            return json_response(
                success=False,
                error=str(e),
                status=400
            )

        # Erro inesperado
        logger.exception(f"Unexpected API error: {e}")
        return json_response(
            success=False,
            error="Erro interno do servidor",
            status=500
        )


def _ticket_data(ticket) -> dict:
    return TicketOutputDTO.from_entity(ticket).to_dict()


# =============================================================================
# Ticket API Views
# =============================================================================

class TicketAPIListView(BaseAPIView):
    """
    API para listar e criar tickets.

    GET /tickets/api/ - Lista tickets
    POST /tickets/api/ - Cria ticket
    """

    def get(self, request: HttpRequest) -> JsonResponse:
        """
        Lista tickets paginados.

        Query params:
        - page: Página (default: 1)
        - per_page: Itens por página (default: TICKETS_PAGE_SIZE)
        - eager: "false" para não carregar relações (default: true)
        """
        try:
            service = self.get_service('ticket_service')
            pagination = parse_pagination(request)
            eager = request.GET.get('eager', 'true').lower() not in ('false', '0', 'no')

            result = service.find_all(pagination, eager=eager)

            return json_response(
                success=True,
                data=[_ticket_data(t) for t in result.items],
                meta={
                    'total': result.total,
                    'page': result.page,
                    'per_page': result.per_page,
                    'total_pages': result.total_pages,
                    'has_next': result.has_next,
                    'has_prev': result.has_prev,
                }
            )

        except Exception as e:
            return self.handle_exception(e)

    def post(self, request: HttpRequest) -> JsonResponse:
        """
        Cria novo ticket.

        Body JSON:
        {
            "title": "string (obrigatório, min 5)",
            "description": "string (obrigatório, min 20)",
            "category_id": int (obrigatório),
            "priority_id": int (obrigatório),
            "status": "OPEN|IN_PROGRESS|RESOLVED|CLOSED" (opcional),
            "creation_date": "ISO-8601" (opcional)
        }
        """
        try:
            data = self.parse_body(request)
            input_dto = TicketInputDTO.from_dict(data)

            if input_dto.id is not None:
                raise BadRequest("Um novo ticket não pode já ter ID", "idexists")

            ticket = input_dto.to_entity()
            if ticket.user_id is None:
                ticket.user_id = get_user_id(request)

            self.check_references(ticket)
            created = self.get_service('ticket_service').create(ticket)

            logger.info(f"API: Ticket created: {created.id}")

            return json_response(
                success=True,
                data=_ticket_data(created),
                status=201
            )

        except Exception as e:
            return self.handle_exception(e)


class TicketAPIMineView(BaseAPIView):
    """
    API para tickets do usuário autenticado.

    GET /tickets/api/mine/
    """

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            user_id = get_user_id(request)
            if user_id is None:
                return json_response(
                    success=False,
                    error="Autenticação necessária",
                    status=401
                )

            tickets = self.get_service('ticket_service').find_all_for_user(user_id)

            return json_response(
                success=True,
                data=[_ticket_data(t) for t in tickets]
            )

        except Exception as e:
            return self.handle_exception(e)


class TicketAPIDetailView(BaseAPIView):
    """
    API para operações em ticket específico.

    GET /tickets/api/<id>/ - Obter ticket
    PUT /tickets/api/<id>/ - Substituir ticket
    PATCH /tickets/api/<id>/ - Atualizar ticket parcialmente
    DELETE /tickets/api/<id>/ - Remover ticket
    """

    def _input_for(self, request: HttpRequest, pk: int) -> TicketInputDTO:
        input_dto = TicketInputDTO.from_dict(self.parse_body(request))
        if input_dto.id is not None and input_dto.id != pk:
            raise BadRequest("ID do corpo difere do ID da URL", "idinvalid")
        return input_dto

    def get(self, request: HttpRequest, pk: int) -> JsonResponse:
        """Obtém detalhes do ticket."""
        try:
            ticket = self.get_service('ticket_service').get_one(pk)

            return json_response(
                success=True,
                data=_ticket_data(ticket)
            )

        except Exception as e:
            return self.handle_exception(e)

    def put(self, request: HttpRequest, pk: int) -> JsonResponse:
        """Substitui o ticket (mesmas regras de validação da criação)."""
        try:
            ticket = self._input_for(request, pk).to_entity(ticket_id=pk)
            self.check_references(ticket)
            updated = self.get_service('ticket_service').update(ticket)

            logger.info(f"API: Ticket {pk} updated")

            return json_response(
                success=True,
                data=_ticket_data(updated)
            )

        except Exception as e:
            return self.handle_exception(e)

    def patch(self, request: HttpRequest, pk: int) -> JsonResponse:
        """
        Atualiza ticket parcialmente.

        Body JSON (todos opcionais):
        {
            "title": "string",
            "description": "string",
            "status": "OPEN|IN_PROGRESS|RESOLVED|CLOSED",
            "creation_date": "ISO-8601"
        }
        """
        try:
            ticket = self._input_for(request, pk).to_entity(ticket_id=pk)
            updated = self.get_service('ticket_service').partial_update(ticket)

            if updated is None:
                raise EntityNotFoundError(
                    f"Ticket {pk} não encontrado",
                    entity_type="Ticket",
                    entity_id=pk,
                )

            logger.info(f"API: Ticket {pk} partially updated")

            return json_response(
                success=True,
                data=_ticket_data(updated)
            )

        except Exception as e:
            return self.handle_exception(e)

    def delete(self, request: HttpRequest, pk: int) -> HttpResponse:
        """Remove ticket (idempotente)."""
        try:
            self.get_service('ticket_service').delete(pk)

            logger.info(f"API: Ticket {pk} deleted")

            return HttpResponse(status=204)

        except Exception as e:
            return self.handle_exception(e)


# =============================================================================
# Category / Priority API Views
# =============================================================================

class ReferenceAPIListView(BaseAPIView):
    """
    API para listar e criar registros de referência.

    Subclasses definem registry_name (provider do container).
    """

    registry_name: str = ''

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            registry = self.get_service(self.registry_name)
            return json_response(
                success=True,
                data=[r.to_dict() for r in registry.list_all()]
            )

        except Exception as e:
            return self.handle_exception(e)

    def post(self, request: HttpRequest) -> JsonResponse:
        """
        Cria registro.

        Body JSON:
        {
            "name": "string (obrigatório)"
        }
        """
        try:
            data = self.parse_body(request)
            if data.get('id') is not None:
                raise BadRequest("Um novo registro não pode já ter ID", "idexists")

            input_dto = ReferenceInputDTO.from_dict(data)
            created = self.get_service(self.registry_name).create(input_dto.name)

            return json_response(
                success=True,
                data=created.to_dict(),
                status=201
            )

        except Exception as e:
            return self.handle_exception(e)


class CategoryAPIListView(ReferenceAPIListView):
    """GET|POST /tickets/api/categories/"""

    registry_name = 'category_registry'


class PriorityAPIListView(ReferenceAPIListView):
    """GET|POST /tickets/api/priorities/"""

    registry_name = 'priority_registry'


class ReferenceAPIDetailView(BaseAPIView):
    """
    API para operações em um registro de referência.

    GET - Obter registro
    PUT - Renomear (name obrigatório)
    PATCH - Renomear se name informado
    DELETE - Remover (409 se ainda referenciado por tickets)
    """

    registry_name: str = ''
    label: str = 'Registro'

    def _registry(self):
        return self.get_service(self.registry_name)

    def _not_found(self, pk: int) -> EntityNotFoundError:
        return EntityNotFoundError(
            f"{self.label} {pk} não encontrada",
            entity_type=self.label,
            entity_id=pk,
        )

    def _body_for(self, request: HttpRequest, pk: int) -> Dict:
        data = self.parse_body(request)
        if data.get('id') is not None and data.get('id') != pk:
            raise BadRequest("ID do corpo difere do ID da URL", "idinvalid")
        return data

    def _rename(self, pk: int, name: str) -> JsonResponse:
        updated = self._registry().update(pk, name)
        if updated is None:
            raise self._not_found(pk)

        logger.info(f"API: {self.label} {pk} updated")

        return json_response(success=True, data=updated.to_dict())

    def get(self, request: HttpRequest, pk: int) -> JsonResponse:
        try:
            ref = self._registry().get(pk)
            if ref is None:
                raise self._not_found(pk)
            return json_response(success=True, data=ref.to_dict())

        except Exception as e:
            return self.handle_exception(e)

    def put(self, request: HttpRequest, pk: int) -> JsonResponse:
        try:
            input_dto = ReferenceInputDTO.from_dict(self._body_for(request, pk))
            return self._rename(pk, input_dto.name)

        except Exception as e:
            return self.handle_exception(e)

    def patch(self, request: HttpRequest, pk: int) -> JsonResponse:
        try:
            data = self._body_for(request, pk)
            if data.get('name') is None:
                return self.get(request, pk)
            return self._rename(pk, ReferenceInputDTO.from_dict(data).name)

        except Exception as e:
            return self.handle_exception(e)

    def delete(self, request: HttpRequest, pk: int) -> HttpResponse:
        """Remove registro (idempotente)."""
        try:
            self._registry().delete(pk)

            logger.info(f"API: {self.label} {pk} deleted")

            return HttpResponse(status=204)

        except Exception as e:
            return self.handle_exception(e)


class CategoryAPIDetailView(ReferenceAPIDetailView):
    """GET|PUT|PATCH|DELETE /tickets/api/categories/<id>/"""

    registry_name = 'category_registry'
    label = 'Categoria'


class PriorityAPIDetailView(ReferenceAPIDetailView):
    """GET|PUT|PATCH|DELETE /tickets/api/priorities/<id>/"""

    registry_name = 'priority_registry'
    label = 'Prioridade'
