import threading

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from taskboard.database import Base
from taskboard.services import TaskBoardService

WORKERS = 8


@pytest.fixture
def file_sessions(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'taskboard.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        engine.dispose()


def test_concurrent_appends_get_distinct_orders(file_sessions):
    setup = file_sessions()
    try:
        board = TaskBoardService(setup).create_board(title="Sprint 1")
        column_id = TaskBoardService(setup).list_columns(board.id)[0].id
    finally:
        setup.close()

    barrier = threading.Barrier(WORKERS)
    orders = []
    errors = []

    def worker(n):
        db = file_sessions()
        try:
            barrier.wait()
            task = TaskBoardService(db).create_task(column_id, title=f"Task {n}")
            orders.append(task.order)
        except Exception as exc:  # collected for the assertion below
            errors.append(exc)
        finally:
            db.close()

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(WORKERS)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert sorted(orders) == list(range(1, WORKERS + 1))

    check = file_sessions()
    try:
        listed = TaskBoardService(check).list_tasks_by_column(column_id)
        assert [task.order for task in listed] == list(range(1, WORKERS + 1))
    finally:
        check.close()
