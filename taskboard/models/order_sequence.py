"""
Order Sequence Model

One row per ordering scope (a board for its columns, a column for its tasks)
holding the next order value to hand out.
"""
from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint

from taskboard.database import Base
from taskboard.models._timestamps import utcnow


class OrderSequence(Base):
    __tablename__ = "order_sequences"

    id = Column(Integer, primary_key=True, autoincrement=True)
    scope_kind = Column(String(16), nullable=False)
    scope_id = Column(String(32), nullable=False)
    next_value = Column(Integer, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("scope_kind", "scope_id", name="unique_order_scope"),
    )
