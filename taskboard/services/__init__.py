"""Ordering, cascade and operation services for boards, columns and tasks."""
from taskboard.services.operations import TaskBoardService

__all__ = ["TaskBoardService"]
