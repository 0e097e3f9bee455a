"""
Task Model
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, Enum as SQLEnum
from sqlalchemy.orm import relationship
import enum

from taskboard.database import Base
from taskboard.models._timestamps import utcnow

DEFAULT_TASK_TITLE = "New Task"


class TaskStatus(str, enum.Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class TaskPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String(32), primary_key=True, index=True)
    title = Column(String(255), nullable=False, default=DEFAULT_TASK_TITLE)
    description = Column(Text, nullable=True)
    status = Column(SQLEnum(TaskStatus), default=TaskStatus.TODO, nullable=False)
    priority = Column(SQLEnum(TaskPriority), default=TaskPriority.MEDIUM, nullable=False)
    column_id = Column(String(32), ForeignKey("board_columns.id"), nullable=False)
    # Derived from the column; recomputed whenever column_id changes
    board_id = Column(String(32), ForeignKey("boards.id"), nullable=False, index=True)
    order = Column(Integer, default=1, nullable=False)
    owner = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    column = relationship("BoardColumn", back_populates="tasks")

    __table_args__ = (
        Index("ix_tasks_column_order", "column_id", "order"),
    )

    @classmethod
    def build(
        cls,
        column_id: str,
        board_id: str,
        order: int,
        title=None,
        description=None,
        status=None,
        priority=None,
        owner=None,
    ) -> "Task":
        now = utcnow()
        clean_title = (title or "").strip()
        return cls(
            title=clean_title or DEFAULT_TASK_TITLE,
            description=description,
            status=TaskStatus(status) if status else TaskStatus.TODO,
            priority=TaskPriority(priority) if priority else TaskPriority.MEDIUM,
            column_id=column_id,
            board_id=board_id,
            order=order,
            owner=owner or None,
            created_at=now,
            updated_at=now,
        )
