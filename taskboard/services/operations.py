"""Board, column and task operations.

Every mutating operation is one unit of work: it commits when it succeeds and
rolls back when anything inside it raises. Expected misses (unknown or
malformed identifiers) are answered with ``None``, ``False`` or an empty list
rather than an exception; the HTTP layer turns those into 404s or empty
responses.
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from taskboard.errors import (
    ConsistencyError,
    InvalidReferenceError,
    NotFoundError,
    TaskBoardError,
    ValidationFailure,
)
from taskboard.models import Board, BoardColumn, Task, TaskPriority, TaskStatus
from taskboard.services.cascade import CascadeEngine
from taskboard.services.ordering import OrderingEngine, OrderScope
from taskboard.services.store import EntityStore
from taskboard.utils.identifiers import is_valid_identifier

logger = logging.getLogger(__name__)

SEED_COLUMN_TITLES = ("To Do", "In Progress", "Done")

BOARD_FIELDS = frozenset({"title", "description", "owner_id"})
COLUMN_FIELDS = frozenset({"title", "order", "color", "board_id"})
TASK_FIELDS = frozenset({"title", "description", "status", "priority", "order", "owner", "column_id", "board_id"})


def _clean_fields(fields: Dict[str, Any], allowed: Iterable[str], kind: str) -> Dict[str, Any]:
    unknown = set(fields) - set(allowed)
    if unknown:
        raise ValidationFailure(f"Unknown {kind} fields: {', '.join(sorted(unknown))}")
    clean = dict(fields)
    if "title" in clean:
        title = (clean["title"] or "").strip()
        if not title:
            raise ValidationFailure(f"{kind.capitalize()} title cannot be blank")
        clean["title"] = title
    if "order" in clean:
        clean["order"] = _check_order(clean["order"])
    return clean


def _check_order(order: Any) -> int:
    if isinstance(order, bool) or not isinstance(order, int) or order < 0:
        raise ValidationFailure(f"Order must be a non-negative integer, got {order!r}")
    return order


def _enum_value(enum_cls, value, field: str):
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationFailure(f"Invalid {field} {value!r}; expected one of: {allowed}")


class TaskBoardService:
    """The public operation set over boards, columns and tasks."""

    def __init__(self, db: Session):
        self.db = db
        self.store = EntityStore(db)
        self.ordering = OrderingEngine(self.store)
        self.cascade = CascadeEngine(self.store, self.ordering)

    @contextmanager
    def _unit_of_work(self, operation: str):
        try:
            yield
            self.db.commit()
        except TaskBoardError:
            self.db.rollback()
            raise
        except Exception:
            self.db.rollback()
            logger.exception("%s failed; transaction rolled back", operation)
            raise

    def _require_parent(self, model, parent_id):
        parent = self.store.get(model, parent_id)
        if parent is None:
            raise InvalidReferenceError(model.__name__, parent_id)
        return parent

    def _check_consistency(self, task: Task) -> None:
        column = self.store.get(BoardColumn, task.column_id)
        if column is None or column.board_id != task.board_id:
            raise ConsistencyError(
                f"Task {task.id} has board {task.board_id!r} but column {task.column_id!r} "
                f"belongs to {column.board_id if column else None!r}"
            )

    # Boards

    def create_board(self, title=None, description=None, owner_id=None) -> Board:
        with self._unit_of_work("create_board"):
            board = self.store.insert(Board.build(title=title, description=description, owner_id=owner_id))
            scope = OrderScope.board(board.id)
            for column_title in SEED_COLUMN_TITLES:
                self.store.insert(
                    BoardColumn.build(board.id, self.ordering.next_order(scope), title=column_title)
                )
        logger.info("Created board %s (%r) with %d columns", board.id, board.title, len(SEED_COLUMN_TITLES))
        return board

    def list_boards(self) -> List[Board]:
        return self.store.find_where(Board, order_by=(Board.created_at.asc(), Board.id.asc()))

    def get_board(self, board_id) -> Optional[Board]:
        return self.store.get(Board, board_id)

    def update_board(self, board_id, fields: Dict[str, Any]) -> Optional[Board]:
        clean = _clean_fields(fields, BOARD_FIELDS, "board")
        if "owner_id" in clean:
            clean["owner_id"] = clean["owner_id"] or None
        with self._unit_of_work("update_board"):
            board = self.store.update(Board, board_id, clean)
        return board

    def delete_board(self, board_id) -> bool:
        try:
            with self._unit_of_work("delete_board"):
                self.cascade.delete_board(board_id)
        except NotFoundError:
            return False
        return True

    # Columns

    def create_column(self, board_id, title=None, order=None, color=None) -> Optional[BoardColumn]:
        if not is_valid_identifier(board_id):
            logger.debug("Ignoring column creation for malformed board id %r", board_id)
            return None
        if order is not None:
            order = _check_order(order)
        try:
            with self._unit_of_work("create_column"):
                board = self._require_parent(Board, board_id)
                scope = OrderScope.board(board.id)
                if order is None:
                    order = self.ordering.next_order(scope)
                else:
                    self.ordering.reserve(scope, order)
                column = self.store.insert(BoardColumn.build(board.id, order, title=title, color=color))
        except InvalidReferenceError as exc:
            logger.info("Column not created: %s", exc)
            return None
        return column

    def list_columns(self, board_id) -> List[BoardColumn]:
        if not is_valid_identifier(board_id):
            return []
        return self.ordering.siblings(OrderScope.board(board_id))

    def get_column(self, column_id) -> Optional[BoardColumn]:
        return self.store.get(BoardColumn, column_id)

    def update_column(self, column_id, fields: Dict[str, Any]) -> Optional[BoardColumn]:
        clean = _clean_fields(fields, COLUMN_FIELDS, "column")
        with self._unit_of_work("update_column"):
            column = self.store.get(BoardColumn, column_id)
            if column is None:
                return None
            if "board_id" in clean:
                if clean.pop("board_id") != column.board_id:
                    raise ValidationFailure("A column cannot be moved to another board")
            if "order" in clean:
                self.ordering.place(column, OrderScope.board(column.board_id), clean.pop("order"))
            if "color" in clean:
                clean["color"] = clean["color"] or column.color
            column = self.store.update(BoardColumn, column.id, clean)
        return column

    def delete_column(self, column_id) -> bool:
        try:
            with self._unit_of_work("delete_column"):
                self.cascade.delete_column(column_id)
        except NotFoundError:
            return False
        return True

    def compact_board_columns(self, board_id) -> Optional[List[BoardColumn]]:
        """Close the gaps in a board's column order."""
        with self._unit_of_work("compact_board_columns"):
            board = self.store.get(Board, board_id)
            if board is None:
                return None
            columns = self.ordering.compact(OrderScope.board(board.id))
        return columns

    # Tasks

    def create_task(
        self,
        column_id,
        board_id=None,
        title=None,
        description=None,
        status=None,
        priority=None,
        order=None,
        owner=None,
    ) -> Optional[Task]:
        status = _enum_value(TaskStatus, status, "status")
        priority = _enum_value(TaskPriority, priority, "priority")
        if order is not None:
            order = _check_order(order)
        try:
            with self._unit_of_work("create_task"):
                column = self._require_parent(BoardColumn, column_id)
                if board_id is not None and board_id != column.board_id:
                    raise InvalidReferenceError(Board.__name__, board_id)
                scope = OrderScope.column(column.id)
                if order is None:
                    order = self.ordering.next_order(scope)
                else:
                    self.ordering.reserve(scope, order)
                task = self.store.insert(
                    Task.build(
                        column.id,
                        column.board_id,
                        order,
                        title=title,
                        description=description,
                        status=status,
                        priority=priority,
                        owner=owner,
                    )
                )
                self._check_consistency(task)
        except InvalidReferenceError as exc:
            logger.info("Task not created: %s", exc)
            return None
        return task

    def list_all_tasks(self) -> List[Task]:
        return self.store.find_where(Task, order_by=(Task.created_at.asc(), Task.id.asc()))

    def list_tasks_by_board(self, board_id) -> List[Task]:
        if not is_valid_identifier(board_id):
            return []
        return self.store.find_where(
            Task,
            Task.board_id == board_id,
            order_by=(Task.order.asc(), Task.created_at.asc(), Task.id.asc()),
        )

    def list_tasks_by_column(self, column_id) -> List[Task]:
        if not is_valid_identifier(column_id):
            return []
        return self.ordering.siblings(OrderScope.column(column_id))

    def get_task(self, task_id) -> Optional[Task]:
        return self.store.get(Task, task_id)

    def update_task(self, task_id, fields: Dict[str, Any]) -> Optional[Task]:
        clean = _clean_fields(fields, TASK_FIELDS, "task")
        if "status" in clean:
            clean["status"] = _enum_value(TaskStatus, clean["status"], "status") or TaskStatus.TODO
        if "priority" in clean:
            clean["priority"] = _enum_value(TaskPriority, clean["priority"], "priority") or TaskPriority.MEDIUM
        if "owner" in clean:
            clean["owner"] = clean["owner"] or None
        try:
            with self._unit_of_work("update_task"):
                task = self.store.get(Task, task_id)
                if task is None:
                    return None
                requested_board = clean.pop("board_id", None)
                target_column = clean.pop("column_id", None)
                if target_column is not None and target_column != task.column_id:
                    self._move(task, target_column, clean.pop("order", None))
                if requested_board is not None and requested_board != task.board_id:
                    raise ValidationFailure("A task's board follows its column; move the task instead")
                if "order" in clean:
                    self.ordering.place(task, OrderScope.column(task.column_id), clean.pop("order"))
                task = self.store.update(Task, task.id, clean)
                self._check_consistency(task)
        except InvalidReferenceError as exc:
            logger.info("Task %s not updated: %s", task_id, exc)
            return None
        return task

    def move_task(self, task_id, target_column_id, target_order: int) -> Optional[Task]:
        target_order = _check_order(target_order)
        try:
            with self._unit_of_work("move_task"):
                task = self.store.get(Task, task_id)
                if task is None:
                    return None
                self._move(task, target_column_id, target_order)
                self._check_consistency(task)
        except InvalidReferenceError as exc:
            logger.info("Task %s not moved: %s", task_id, exc)
            return None
        return task

    def _move(self, task: Task, target_column_id, target_order: Optional[int]) -> Task:
        column = self._require_parent(BoardColumn, target_column_id)
        if column.board_id != task.board_id:
            logger.info("Task %s moves from board %s to board %s", task.id, task.board_id, column.board_id)
        task.board_id = column.board_id
        scope = OrderScope.column(column.id)
        if target_order is None:
            target_order = task.order if column.id == task.column_id else self.ordering.next_order(scope)
        self.ordering.place(task, scope, target_order)
        logger.info("Moved task %s to column %s at order %d", task.id, column.id, target_order)
        return task

    def delete_task(self, task_id) -> bool:
        with self._unit_of_work("delete_task"):
            deleted = self.cascade.delete_task(task_id)
        return deleted

    def compact_column_tasks(self, column_id) -> Optional[List[Task]]:
        """Close the gaps in a column's task order."""
        with self._unit_of_work("compact_column_tasks"):
            column = self.store.get(BoardColumn, column_id)
            if column is None:
                return None
            tasks = self.ordering.compact(OrderScope.column(column.id))
        return tasks
