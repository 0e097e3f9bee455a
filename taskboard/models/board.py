"""
Board Model
"""
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import relationship

from taskboard.database import Base
from taskboard.models._timestamps import utcnow

DEFAULT_BOARD_TITLE = "Untitled Board"


class Board(Base):
    __tablename__ = "boards"

    id = Column(String(32), primary_key=True, index=True)
    title = Column(String(255), nullable=False, default=DEFAULT_BOARD_TITLE)
    description = Column(Text, nullable=True)
    owner_id = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    columns = relationship("BoardColumn", back_populates="board", order_by="BoardColumn.order", passive_deletes=True)

    @classmethod
    def build(cls, title=None, description=None, owner_id=None) -> "Board":
        """Return a fully populated board with every default applied."""
        now = utcnow()
        clean_title = (title or "").strip()
        return cls(
            title=clean_title or DEFAULT_BOARD_TITLE,
            description=description,
            owner_id=owner_id or None,
            created_at=now,
            updated_at=now,
        )
