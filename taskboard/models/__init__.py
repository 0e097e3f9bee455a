"""Taskboard Database Models"""
from taskboard.models.board import Board
from taskboard.models.board_column import BoardColumn
from taskboard.models.task import Task, TaskPriority, TaskStatus
from taskboard.models.order_sequence import OrderSequence
from taskboard.utils.identifiers import register_identifier_listener

__all__ = [
    "Board",
    "BoardColumn",
    "Task",
    "TaskPriority",
    "TaskStatus",
    "OrderSequence",
]


for _model in (
    Board,
    BoardColumn,
    Task,
):
    register_identifier_listener(_model)
