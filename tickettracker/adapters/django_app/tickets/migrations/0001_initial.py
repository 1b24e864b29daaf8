"""
Migration inicial para o domínio de Tickets.

Cria as tabelas:
- ticket_category: Categorias
- ticket_priority: Prioridades
- ticket: Tabela principal de tickets
"""

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):
    """Migration inicial."""

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        # =================================================================
        # Tabela: ticket_category
        # =================================================================
        migrations.CreateModel(
            name='TicketCategoryModel',
            fields=[
                ('id', models.BigAutoField(
                    auto_created=True,
                    primary_key=True,
                    serialize=False,
                    verbose_name='ID'
                )),
                ('name', models.CharField(
                    max_length=100,
                    unique=True,
                    help_text='Nome exibido'
                )),
            ],
            options={
                'verbose_name': 'Categoria de Ticket',
                'verbose_name_plural': 'Categorias de Ticket',
                'db_table': 'ticket_category',
                'ordering': ['id'],
                'abstract': False,
            },
        ),

        # =================================================================
        # Tabela: ticket_priority
        # =================================================================
        migrations.CreateModel(
            name='TicketPriorityModel',
            fields=[
                ('id', models.BigAutoField(
                    auto_created=True,
                    primary_key=True,
                    serialize=False,
                    verbose_name='ID'
                )),
                ('name', models.CharField(
                    max_length=100,
                    unique=True,
                    help_text='Nome exibido'
                )),
            ],
            options={
                'verbose_name': 'Prioridade de Ticket',
                'verbose_name_plural': 'Prioridades de Ticket',
                'db_table': 'ticket_priority',
                'ordering': ['id'],
                'abstract': False,
            },
        ),

        # =================================================================
        # Tabela: ticket
        # =================================================================
        migrations.CreateModel(
            name='TicketModel',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('title', models.CharField(
                    max_length=255,
                    help_text='Título descritivo do ticket'
                )),
                ('description', models.TextField(
                    help_text='Descrição detalhada do problema'
                )),
                ('creation_date', models.DateTimeField(
                    blank=True,
                    null=True,
                    db_index=True,
                    help_text='Data/hora de criação'
                )),
                ('status', models.CharField(
                    blank=True,
                    null=True,
                    max_length=20,
                    db_index=True,
                    choices=[
                        ('OPEN', 'Aberto'),
                        ('IN_PROGRESS', 'Em Progresso'),
                        ('RESOLVED', 'Resolvido'),
                        ('CLOSED', 'Fechado'),
                    ],
                    help_text='Estado atual do ticket'
                )),
                ('category', models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='tickets',
                    to='tickets.ticketcategorymodel'
                )),
                ('priority', models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='tickets',
                    to='tickets.ticketprioritymodel'
                )),
                ('user', models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name='tickets',
                    to=settings.AUTH_USER_MODEL
                )),
            ],
            options={
                'verbose_name': 'Ticket',
                'verbose_name_plural': 'Tickets',
                'db_table': 'ticket',
                'ordering': ['id'],
                'indexes': [
                    models.Index(fields=['user', 'id'], name='ticket_user_id_idx'),
                ],
            },
        ),
    ]
