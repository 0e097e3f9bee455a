"""
Board Column Model
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from taskboard.database import Base
from taskboard.models._timestamps import utcnow

DEFAULT_COLUMN_TITLE = "New Column"
DEFAULT_COLUMN_COLOR = "#4ECDC4"


class BoardColumn(Base):
    __tablename__ = "board_columns"

    id = Column(String(32), primary_key=True, index=True)
    title = Column(String(255), nullable=False, default=DEFAULT_COLUMN_TITLE)
    board_id = Column(String(32), ForeignKey("boards.id"), nullable=False)
    order = Column(Integer, default=0, nullable=False)
    color = Column(String(32), default=DEFAULT_COLUMN_COLOR, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    board = relationship("Board", back_populates="columns")
    tasks = relationship("Task", back_populates="column", order_by="Task.order", passive_deletes=True)

    __table_args__ = (
        Index("ix_board_columns_board_order", "board_id", "order"),
    )

    @classmethod
    def build(cls, board_id: str, order: int, title=None, color=None) -> "BoardColumn":
        now = utcnow()
        clean_title = (title or "").strip()
        return cls(
            title=clean_title or DEFAULT_COLUMN_TITLE,
            board_id=board_id,
            order=order,
            color=color or DEFAULT_COLUMN_COLOR,
            created_at=now,
            updated_at=now,
        )
