"""
Mappers para conversão entre Entities (Core) e Models (Django).

Responsabilidades:
- Converter Ticket → TicketModel (para persistência)
- Converter TicketModel → Ticket (para uso no Core)
- Converter models de categoria/prioridade/usuário → Reference

Princípios:
- Mappers são stateless
- Não contêm lógica de negócio
- Tratam apenas conversão de dados
"""

from typing import List, Optional

from tickettracker.core.tickets.entities import Reference, Ticket, TicketStatus

from .models import TicketModel


class ReferenceMapper:
    """Converte models planos (categoria, prioridade, usuário) em Reference."""

    @staticmethod
    def to_entity(model) -> Optional[Reference]:
        if model is None:
            return None
        name = getattr(model, 'name', None)
        if name is None:
            # Usuário: login
            name = model.get_username()
        return Reference(id=model.pk, name=name)


class TicketMapper:
    """
    Mapper para conversão entre Ticket e TicketModel.

    Responsável por:
    - to_model(): Entity → Model
    - to_entity(): Model → Entity (com relações quando eager=True)
    - update_model(): copia campos da Entity em Model existente
    """

    @staticmethod
    def to_model(entity: Ticket) -> TicketModel:
        """
        Converte Ticket para TicketModel.

        Note:
            Não chama .save() - deixa isso para o Repository
        """
        return TicketMapper.update_model(TicketModel(id=entity.id), entity)

    @staticmethod
    def update_model(model: TicketModel, entity: Ticket) -> TicketModel:
        """
        Atualiza Model com dados da Entity (substituição completa).

        Args:
            model: Model existente ou novo
            entity: Entity com dados atualizados

        Returns:
            Model atualizado (não salvo)
        """
        model.title = entity.title
        model.description = entity.description
        model.creation_date = entity.creation_date
        model.status = entity.status.value if entity.status else None
        model.category_id = entity.category_id
        model.priority_id = entity.priority_id
        model.user_id = entity.user_id
        return model

    @staticmethod
    def to_entity(model: TicketModel, eager: bool = False) -> Ticket:
        """
        Converte TicketModel para Ticket.

        Args:
            model: Model carregado do banco
            eager: Se True, preenche category/priority/user (o queryset
                deve ter usado select_related para evitar N+1)
        """
        entity = Ticket(
            id=model.id,
            title=model.title,
            description=model.description,
            status=TicketStatus(model.status) if model.status else None,
            creation_date=model.creation_date,
            category_id=model.category_id,
            priority_id=model.priority_id,
            user_id=model.user_id,
        )

        if eager:
            entity.category = ReferenceMapper.to_entity(model.category)
            entity.priority = ReferenceMapper.to_entity(model.priority)
            entity.user = ReferenceMapper.to_entity(model.user)

        return entity

    @staticmethod
    def to_entity_list(models: List[TicketModel], eager: bool = False) -> List[Ticket]:
        return [TicketMapper.to_entity(model, eager=eager) for model in models]
