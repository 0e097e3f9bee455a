"""
Pydantic schemas for request/response validation
"""
from taskboard.schemas.board import BoardCreate, BoardResponse, BoardUpdate, MessageResponse
from taskboard.schemas.column import ColumnCreate, ColumnResponse, ColumnUpdate
from taskboard.schemas.task import TaskCreate, TaskMove, TaskResponse, TaskUpdate

__all__ = [
    "BoardCreate",
    "BoardResponse",
    "BoardUpdate",
    "MessageResponse",
    "ColumnCreate",
    "ColumnResponse",
    "ColumnUpdate",
    "TaskCreate",
    "TaskMove",
    "TaskResponse",
    "TaskUpdate",
]
