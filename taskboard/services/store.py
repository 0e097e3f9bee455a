"""Entity store over a SQLAlchemy session.

The store only flushes. Committing, and therefore the boundary of a logical
operation, belongs to :class:`taskboard.services.operations.TaskBoardService`.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import delete as sql_delete
from sqlalchemy.orm import Session

from taskboard.errors import NotFoundError
from taskboard.models._timestamps import utcnow
from taskboard.utils.identifiers import is_valid_identifier

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT")


class EntityStore:
    """Authoritative holder of boards, columns and tasks keyed by identifier."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, model: Type[EntityT], entity_id: Any) -> Optional[EntityT]:
        if not is_valid_identifier(entity_id):
            return None
        return self.db.get(model, entity_id)

    def get_or_raise(self, model: Type[EntityT], entity_id: Any) -> EntityT:
        entity = self.get(model, entity_id)
        if entity is None:
            raise NotFoundError(model.__name__, entity_id)
        return entity

    def insert(self, entity: EntityT) -> EntityT:
        self.db.add(entity)
        self.db.flush()
        logger.debug("Inserted %s %s", type(entity).__name__, entity.id)
        return entity

    def update(self, model: Type[EntityT], entity_id: Any, fields: Dict[str, Any]) -> Optional[EntityT]:
        entity = self.get(model, entity_id)
        if entity is None:
            return None
        for field, value in fields.items():
            setattr(entity, field, value)
        entity.updated_at = utcnow()
        self.db.flush()
        return entity

    def delete(self, model: Type[EntityT], entity_id: Any) -> bool:
        entity = self.get(model, entity_id)
        if entity is None:
            return False
        self.db.delete(entity)
        self.db.flush()
        return True

    def delete_where(self, model: Type[EntityT], *criteria) -> int:
        """Bulk delete every row of ``model`` matching ``criteria``."""
        result = self.db.execute(
            sql_delete(model).where(*criteria).execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0

    def find_where(self, model: Type[EntityT], *criteria, order_by: Sequence = ()) -> List[EntityT]:
        query = self.db.query(model)
        if criteria:
            query = query.filter(*criteria)
        if order_by:
            query = query.order_by(*order_by)
        return query.all()

