"""Ordering engine.

Columns are ordered inside their board starting at 0, tasks inside their
column starting at 1. New siblings are appended through a persisted per-scope
counter (:class:`~taskboard.models.OrderSequence`) that is advanced with a
single atomic ``UPDATE``, so concurrent creations in one scope never receive
the same value and gaps left by deletions never cause collisions.

Explicit placement does not shift siblings; the integer is a sort key and the
last writer wins. Placement only raises the counter past the placed value.
"""
import logging
from dataclasses import dataclass
from typing import List, Sequence

from sqlalchemy import (
    DateTime,
    Integer,
    String,
    case,
    delete as sql_delete,
    func,
    insert,
    literal,
    select,
    update,
)

from taskboard.models import BoardColumn, OrderSequence, Task
from taskboard.models._timestamps import utcnow
from taskboard.services.store import EntityStore

logger = logging.getLogger(__name__)

BOARD_SCOPE = "board"
COLUMN_SCOPE = "column"

COLUMN_ORDER_BASE = 0
TASK_ORDER_BASE = 1


@dataclass(frozen=True)
class OrderScope:
    """The parent whose children share one order sequence."""

    kind: str
    scope_id: str

    @classmethod
    def board(cls, board_id: str) -> "OrderScope":
        return cls(BOARD_SCOPE, board_id)

    @classmethod
    def column(cls, column_id: str) -> "OrderScope":
        return cls(COLUMN_SCOPE, column_id)

    @property
    def model(self):
        return BoardColumn if self.kind == BOARD_SCOPE else Task

    @property
    def parent_field(self) -> str:
        return "board_id" if self.kind == BOARD_SCOPE else "column_id"

    @property
    def parent_column(self):
        return getattr(self.model, self.parent_field)

    @property
    def base(self) -> int:
        return COLUMN_ORDER_BASE if self.kind == BOARD_SCOPE else TASK_ORDER_BASE

    def __str__(self) -> str:
        return f"{self.kind}:{self.scope_id}"


class OrderingEngine:
    def __init__(self, store: EntityStore):
        self.store = store
        self.db = store.db

    def siblings(self, scope: OrderScope) -> List:
        """Children of ``scope`` by order, then creation time, then identifier."""
        model = scope.model
        return self.store.find_where(
            model,
            scope.parent_column == scope.scope_id,
            order_by=(model.order.asc(), model.created_at.asc(), model.id.asc()),
        )

    def next_order(self, scope: OrderScope) -> int:
        """Allocate the next append position in ``scope``."""
        self._ensure_sequence(scope)
        self.db.execute(
            update(OrderSequence)
            .where(*self._sequence_criteria(scope))
            .values(next_value=OrderSequence.next_value + 1, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        allocated = self._read_sequence(scope) - 1
        logger.debug("Allocated order %d in %s", allocated, scope)
        return allocated

    def reserve(self, scope: OrderScope, order: int) -> None:
        """Make sure later appends in ``scope`` land after ``order``."""
        self._ensure_sequence(scope)
        self.db.execute(
            update(OrderSequence)
            .where(*self._sequence_criteria(scope))
            .values(
                next_value=case(
                    (OrderSequence.next_value <= order, order + 1),
                    else_=OrderSequence.next_value,
                ),
                updated_at=utcnow(),
            )
            .execution_options(synchronize_session=False)
        )

    def place(self, entity, scope: OrderScope, target_order: int):
        """Put ``entity`` into ``scope`` at ``target_order`` without renumbering siblings."""
        setattr(entity, scope.parent_field, scope.scope_id)
        entity.order = target_order
        entity.updated_at = utcnow()
        self.db.flush()
        self.reserve(scope, target_order)
        return entity

    def compact(self, scope: OrderScope) -> List:
        """Renumber the siblings of ``scope`` densely from its base."""
        siblings = self.siblings(scope)
        changed = 0
        for position, entity in enumerate(siblings, start=scope.base):
            if entity.order != position:
                entity.order = position
                entity.updated_at = utcnow()
                changed += 1
        self.db.flush()
        self._ensure_sequence(scope)
        self.db.execute(
            update(OrderSequence)
            .where(*self._sequence_criteria(scope))
            .values(next_value=scope.base + len(siblings), updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        if changed:
            logger.info("Renumbered %d of %d entries in %s", changed, len(siblings), scope)
        return siblings

    def drop_sequences(self, kind: str, scope_ids: Sequence[str]) -> int:
        if not scope_ids:
            return 0
        result = self.db.execute(
            sql_delete(OrderSequence)
            .where(OrderSequence.scope_kind == kind, OrderSequence.scope_id.in_(list(scope_ids)))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    def _sequence_criteria(self, scope: OrderScope):
        return (OrderSequence.scope_kind == scope.kind, OrderSequence.scope_id == scope.scope_id)

    def _read_sequence(self, scope: OrderScope) -> int:
        return self.db.execute(
            select(OrderSequence.next_value).where(*self._sequence_criteria(scope))
        ).scalar_one()

    def _seed_value(self, scope: OrderScope) -> int:
        highest = self.db.execute(
            select(func.max(scope.model.order)).where(scope.parent_column == scope.scope_id)
        ).scalar_one_or_none()
        if highest is None:
            return scope.base
        return max(scope.base, highest + 1)

    def _ensure_sequence(self, scope: OrderScope) -> None:
        criteria = self._sequence_criteria(scope)
        if self.db.execute(select(OrderSequence.id).where(*criteria)).first() is not None:
            return

        self.db.flush()
        start = self._seed_value(scope)
        # Insert-unless-exists in one statement so a concurrent seed is not duplicated.
        seed_row = select(
            literal(scope.kind, String),
            literal(scope.scope_id, String),
            literal(start, Integer),
            literal(utcnow(), DateTime(timezone=True)),
        ).where(~select(OrderSequence.id).where(*criteria).correlate(None).exists())
        self.db.execute(
            insert(OrderSequence).from_select(
                ["scope_kind", "scope_id", "next_value", "updated_at"], seed_row
            )
        )
        logger.debug("Seeded order sequence for %s at %d", scope, start)
