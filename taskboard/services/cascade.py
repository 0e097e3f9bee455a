"""Parent to child deletion rules.

Deleting a board removes its columns and their tasks; deleting a column
removes its tasks. Every cascade runs inside the caller's transaction, so a
failure part way rolls the whole cascade back instead of leaving orphans.
"""
import logging
from dataclasses import dataclass

from sqlalchemy import or_

from taskboard.models import Board, BoardColumn, Task
from taskboard.services.ordering import BOARD_SCOPE, COLUMN_SCOPE, OrderingEngine
from taskboard.services.store import EntityStore

logger = logging.getLogger(__name__)


@dataclass
class CascadeResult:
    boards: int = 0
    columns: int = 0
    tasks: int = 0


class CascadeEngine:
    def __init__(self, store: EntityStore, ordering: OrderingEngine):
        self.store = store
        self.ordering = ordering

    def delete_board(self, board_id: str) -> CascadeResult:
        """Delete a board, its columns and every task under them.

        Raises :class:`~taskboard.errors.NotFoundError` when the board does not exist.
        """
        board = self.store.get_or_raise(Board, board_id)
        column_ids = [column.id for column in self.store.find_where(BoardColumn, BoardColumn.board_id == board.id)]

        result = CascadeResult()
        task_criteria = [Task.board_id == board.id]
        if column_ids:
            task_criteria.append(Task.column_id.in_(column_ids))
        result.tasks = self.store.delete_where(Task, or_(*task_criteria))
        result.columns = self.store.delete_where(BoardColumn, BoardColumn.board_id == board.id)
        self.ordering.drop_sequences(COLUMN_SCOPE, column_ids)
        self.ordering.drop_sequences(BOARD_SCOPE, [board.id])
        self.store.delete(Board, board.id)
        result.boards = 1

        logger.info(
            "Deleted board %s with %d columns and %d tasks", board.id, result.columns, result.tasks
        )
        return result

    def delete_column(self, column_id: str) -> CascadeResult:
        """Delete a column together with its tasks.

        Raises :class:`~taskboard.errors.NotFoundError` when the column does not exist.
        """
        column = self.store.get_or_raise(BoardColumn, column_id)

        result = CascadeResult()
        result.tasks = self.store.delete_where(Task, Task.column_id == column.id)
        self.ordering.drop_sequences(COLUMN_SCOPE, [column.id])
        self.store.delete(BoardColumn, column.id)
        result.columns = 1

        logger.info("Deleted column %s with %d tasks", column.id, result.tasks)
        return result

    def delete_task(self, task_id: str) -> bool:
        # Leaf entity; the gap it leaves in its column is not closed.
        return self.store.delete(Task, task_id)
