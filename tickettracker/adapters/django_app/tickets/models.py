"""
Django Models para o domínio de Tickets.

Estes models são ADAPTERS - implementam a persistência para as
entidades de domínio definidas em tickettracker/core/tickets/entities.py.

IMPORTANTE:
- Models NÃO contêm lógica de negócio
- Regras de admissão ficam na TicketValidationPolicy do Core
- Models são mapeados para/de Entities via Mappers

Tabelas:
- TicketCategoryModel: Registro de categorias (id, nome)
- TicketPriorityModel: Registro de prioridades (id, nome)
- TicketModel: Tabela principal de tickets
"""

from django.conf import settings
from django.db import models


class TicketStatusChoices(models.TextChoices):
    """Choices para status de ticket (espelha TicketStatus do Core)."""
    OPEN = 'OPEN', 'Aberto'
    IN_PROGRESS = 'IN_PROGRESS', 'Em Progresso'
    RESOLVED = 'RESOLVED', 'Resolvido'
    CLOSED = 'CLOSED', 'Fechado'


class ReferenceModel(models.Model):
    """Base para registros planos (id, nome)."""

    name = models.CharField(
        max_length=100,
        unique=True,
        help_text="Nome exibido"
    )

    class Meta:
        abstract = True
        ordering = ['id']

    def __str__(self):
        return self.name


class TicketCategoryModel(ReferenceModel):
    """Categoria de ticket (ex: Bug, Acesso, Hardware)."""

    class Meta(ReferenceModel.Meta):
        db_table = 'ticket_category'
        verbose_name = 'Categoria de Ticket'
        verbose_name_plural = 'Categorias de Ticket'


class TicketPriorityModel(ReferenceModel):
    """Prioridade de ticket (ex: Baixa, Alta)."""

    class Meta(ReferenceModel.Meta):
        db_table = 'ticket_priority'
        verbose_name = 'Prioridade de Ticket'
        verbose_name_plural = 'Prioridades de Ticket'


class TicketModel(models.Model):
    """
    Model Django para persistência de Tickets.

    Este model é um ADAPTER que persiste dados do Ticket do Core.
    NÃO contém lógica de negócio - apenas estrutura de dados.

    Fields:
        id: Auto-incremento atribuído pelo banco
        title: Título do ticket
        description: Descrição detalhada
        creation_date: Data/hora de criação
        status: Estado atual (choices)
        category: FK para categoria (PROTECT: ticket não apaga categoria)
        priority: FK para prioridade (PROTECT)
        user: FK para usuário que submeteu (SET_NULL)
    """

    id = models.BigAutoField(primary_key=True)

    # Dados principais
    title = models.CharField(
        max_length=255,
        help_text="Título descritivo do ticket"
    )

    description = models.TextField(
        help_text="Descrição detalhada do problema"
    )

    creation_date = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True,
        help_text="Data/hora de criação"
    )

    # Estado
    status = models.CharField(
        max_length=20,
        choices=TicketStatusChoices.choices,
        null=True,
        blank=True,
        db_index=True,
        help_text="Estado atual do ticket"
    )

    # Relacionamentos
    category = models.ForeignKey(
        TicketCategoryModel,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='tickets',
    )

    priority = models.ForeignKey(
        TicketPriorityModel,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='tickets',
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='tickets',
    )

    class Meta:
        db_table = 'ticket'
        verbose_name = 'Ticket'
        verbose_name_plural = 'Tickets'
        ordering = ['id']
        indexes = [
            models.Index(fields=['user', 'id'], name='ticket_user_id_idx'),
        ]

    def __str__(self):
        return f"[{self.id}] {self.title}"

    def __repr__(self):
        return f"<TicketModel id={self.id} status={self.status}>"
