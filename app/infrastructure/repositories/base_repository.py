"""
Common SQLAlchemy repository behaviour.
"""

from typing import Any, Optional, Tuple, List

from sqlalchemy.orm import Session, Query

from app.domain.models.base import EntityNotFoundError
from app.infrastructure.mappers.base_mapper import BaseMapper


class SQLAlchemyRepository:
    """Save/find/delete by primary key for one model and its mapper."""

    model: Any = None
    entity_name: str = "Entity"

    def __init__(self, session: Session, mapper: BaseMapper):
        self.session = session
        self.mapper = mapper

    def save(self, entity: Any) -> Any:
        """Insert new entities, update persisted ones, and flush."""
        if entity.is_new:
            model = self.mapper.domain_to_model(entity)
            self.session.add(model)
            self.session.flush()
            entity.id = model.id
            return entity

        model = self.session.get(self.model, entity.id)
        if not model:
            raise EntityNotFoundError(self.entity_name, entity.id)
        self.mapper.update_model(model, entity)
        self.session.flush()
        return entity

    def find_by_id(self, entity_id: Any) -> Optional[Any]:
        model = self.session.get(self.model, entity_id)
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def delete(self, entity_id: Any) -> bool:
        model = self.session.get(self.model, entity_id)
        if not model:
            return False
        self.session.delete(model)
        self.session.flush()
        return True

    def _first(self, query: Query) -> Optional[Any]:
        model = query.first()
        return self.mapper.model_to_domain(model) if model else None

    def _all(self, query: Query) -> List[Any]:
        return [self.mapper.model_to_domain(model) for model in query.all()]

    def _page(self, query: Query, offset: int, limit: int) -> Tuple[List[Any], int]:
        """One page of the query plus the total row count."""
        total = query.order_by(None).count()
        models = query.offset(offset).limit(limit).all()
        return [self.mapper.model_to_domain(model) for model in models], total
