from sqlalchemy.orm import Session

from taskboard.models import OrderSequence
from taskboard.services import TaskBoardService
from taskboard.services.ordering import COLUMN_SCOPE, OrderScope


def _sequence_value(db: Session, scope: OrderScope):
    row = (
        db.query(OrderSequence)
        .filter(OrderSequence.scope_kind == scope.kind, OrderSequence.scope_id == scope.scope_id)
        .first()
    )
    return row.next_value if row else None


def test_scope_bases_and_models():
    board_scope = OrderScope.board("b" * 32)
    column_scope = OrderScope.column("c" * 32)

    assert board_scope.base == 0
    assert column_scope.base == 1
    assert board_scope.parent_field == "board_id"
    assert column_scope.parent_field == "column_id"
    assert str(column_scope) == f"{COLUMN_SCOPE}:{'c' * 32}"


def test_next_order_allocates_monotonically(service: TaskBoardService, db_session: Session, columns):
    scope = OrderScope.column(columns["To Do"].id)

    allocated = [service.ordering.next_order(scope) for _ in range(3)]
    db_session.commit()

    assert allocated == [1, 2, 3]
    assert _sequence_value(db_session, scope) == 4


def test_board_sequence_follows_seed_columns(db_session: Session, board):
    assert _sequence_value(db_session, OrderScope.board(board.id)) == 3


def test_reserve_only_raises_the_counter(service: TaskBoardService, db_session: Session, columns):
    scope = OrderScope.column(columns["Done"].id)

    service.ordering.reserve(scope, 9)
    assert _sequence_value(db_session, scope) == 10

    service.ordering.reserve(scope, 2)
    assert _sequence_value(db_session, scope) == 10
    assert service.ordering.next_order(scope) == 10


def test_siblings_break_order_ties_by_creation(service: TaskBoardService, columns):
    todo = columns["To Do"]
    early = service.create_task(todo.id, title="early", order=3)
    late = service.create_task(todo.id, title="late", order=3)
    first = service.create_task(todo.id, title="first", order=1)

    siblings = service.ordering.siblings(OrderScope.column(todo.id))

    assert [task.id for task in siblings] == [first.id, early.id, late.id]


def test_compact_resets_the_counter(service: TaskBoardService, db_session: Session, columns):
    todo = columns["To Do"]
    service.create_task(todo.id, title="a", order=4)
    service.create_task(todo.id, title="b", order=9)
    scope = OrderScope.column(todo.id)

    compacted = service.ordering.compact(scope)
    db_session.commit()

    assert [task.order for task in compacted] == [1, 2]
    assert _sequence_value(db_session, scope) == 3


def test_drop_sequences(service: TaskBoardService, db_session: Session, columns):
    scope = OrderScope.column(columns["To Do"].id)
    service.ordering.next_order(scope)

    assert service.ordering.drop_sequences(scope.kind, [scope.scope_id]) == 1
    assert service.ordering.drop_sequences(scope.kind, []) == 0
    assert _sequence_value(db_session, scope) is None
