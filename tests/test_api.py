import logging

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

import taskboard.api.v1.boards as boards_routes
import taskboard.api.v1.tasks as tasks_routes
import taskboard.schemas as schemas
from taskboard.database import get_db
from taskboard.logging_config import configure_logging
from taskboard.main import app
from taskboard.services import TaskBoardService
from taskboard.utils.identifiers import new_identifier


def _create_board(service: TaskBoardService, title: str = "Sprint 1"):
    return boards_routes.create_board(schemas.BoardCreate(title=title), service)


def _columns_by_title(service: TaskBoardService, board_id: str):
    return {column.title: column for column in boards_routes.list_columns(board_id, service)}


def test_board_routes_round_trip(service: TaskBoardService):
    board = _create_board(service)
    assert boards_routes.get_board(board.id, service).title == "Sprint 1"

    updated = boards_routes.update_board(board.id, schemas.BoardUpdate(description="Two weeks"), service)
    assert updated.description == "Two weeks"
    assert updated.title == "Sprint 1"

    assert [board.id] == [b.id for b in boards_routes.list_boards(service)]

    message = boards_routes.delete_board(board.id, service)
    assert message.message == "Board deleted successfully"
    assert boards_routes.list_columns(board.id, service) == []


def test_board_routes_not_found(service: TaskBoardService):
    missing = new_identifier()
    for call in (
        lambda: boards_routes.get_board(missing, service),
        lambda: boards_routes.update_board(missing, schemas.BoardUpdate(title="x"), service),
        lambda: boards_routes.delete_board(missing, service),
        lambda: boards_routes.create_column(missing, schemas.ColumnCreate(title="x"), service),
        lambda: boards_routes.update_column(missing, schemas.ColumnUpdate(title="x"), service),
        lambda: boards_routes.delete_column(missing, service),
        lambda: boards_routes.compact_columns(missing, service),
    ):
        with pytest.raises(HTTPException) as exc:
            call()
        assert exc.value.status_code == 404


def test_update_board_with_null_title_is_bad_request(service: TaskBoardService):
    board = _create_board(service)

    with pytest.raises(HTTPException) as exc:
        boards_routes.update_board(board.id, schemas.BoardUpdate(title=None), service)
    assert exc.value.status_code == 400


def test_column_routes(service: TaskBoardService):
    board = _create_board(service)
    column = boards_routes.create_column(board.id, schemas.ColumnCreate(title="Review"), service)
    assert column.order == 3

    renamed = boards_routes.update_column(column.id, schemas.ColumnUpdate(title="QA", color="#000000"), service)
    assert renamed.title == "QA"
    assert renamed.color == "#000000"

    assert boards_routes.delete_column(column.id, service).message == "Column deleted successfully"
    assert [c.order for c in boards_routes.compact_columns(board.id, service)] == [0, 1, 2]


def test_task_routes_scenario(service: TaskBoardService):
    board = _create_board(service)
    columns = _columns_by_title(service, board.id)

    task = tasks_routes.create_task(
        schemas.TaskCreate(column_id=columns["To Do"].id, board_id=board.id, title="Write spec"),
        service,
    )
    assert task.order == 1
    assert task.status == "todo"
    assert task.priority == "medium"

    moved = tasks_routes.move_task(task.id, schemas.TaskMove(column_id=columns["Done"].id, order=1), service)
    assert moved.column_id == columns["Done"].id

    done = tasks_routes.list_tasks_by_column(columns["Done"].id, service)
    assert [(t.id, t.order) for t in done] == [(task.id, 1)]
    assert [t.id for t in tasks_routes.list_tasks_by_board(board.id, service)] == [task.id]
    assert [t.id for t in tasks_routes.list_all_tasks(service)] == [task.id]

    updated = tasks_routes.update_task(task.id, schemas.TaskUpdate(status="done", owner="dana"), service)
    assert updated.status == "done"
    assert updated.owner == "dana"

    assert tasks_routes.delete_task(task.id, service).message == "Task deleted successfully"
    with pytest.raises(HTTPException) as exc:
        tasks_routes.get_task(task.id, service)
    assert exc.value.status_code == 404


def test_task_routes_not_found(service: TaskBoardService):
    board = _create_board(service)
    columns = _columns_by_title(service, board.id)
    task = tasks_routes.create_task(schemas.TaskCreate(column_id=columns["To Do"].id), service)

    with pytest.raises(HTTPException) as exc:
        tasks_routes.create_task(schemas.TaskCreate(column_id=new_identifier()), service)
    assert exc.value.status_code == 404

    with pytest.raises(HTTPException) as exc:
        tasks_routes.move_task(new_identifier(), schemas.TaskMove(column_id=columns["Done"].id, order=1), service)
    assert exc.value.detail == "Task not found"

    with pytest.raises(HTTPException) as exc:
        tasks_routes.move_task(task.id, schemas.TaskMove(column_id=new_identifier(), order=1), service)
    assert exc.value.detail == "Column not found"

    with pytest.raises(HTTPException) as exc:
        tasks_routes.compact_tasks(new_identifier(), service)
    assert exc.value.status_code == 404


@pytest.fixture
def client(db_session: Session):
    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_http_wiring(client: TestClient):
    response = client.post("/api/boards", json={"title": "Sprint 1"})
    assert response.status_code == 201
    board = response.json()
    assert board["owner_id"] is None

    columns = client.get(f"/api/boards/{board['id']}/columns").json()
    assert [(c["title"], c["order"]) for c in columns] == [("To Do", 0), ("In Progress", 1), ("Done", 2)]

    response = client.post("/api/tasks", json={"column_id": columns[0]["id"], "title": "Write spec"})
    assert response.status_code == 201
    task = response.json()
    assert (task["order"], task["status"], task["priority"]) == (1, "todo", "medium")

    response = client.put(f"/api/tasks/{task['id']}/move", json={"column_id": columns[2]["id"], "order": 1})
    assert response.status_code == 200
    assert response.json()["column_id"] == columns[2]["id"]

    response = client.post("/api/tasks", json={"column_id": columns[0]["id"], "status": "blocked"})
    assert response.status_code == 422

    assert client.get("/api/boards/not-a-board/columns").json() == []
    assert client.get(f"/api/boards/{new_identifier()}").status_code == 404

    response = client.delete(f"/api/boards/{board['id']}")
    assert response.json() == {"message": "Board deleted successfully"}
    assert client.get(f"/api/tasks/board/{board['id']}").json() == []


def test_update_task_to_missing_column_is_column_not_found(service: TaskBoardService):
    board = _create_board(service)
    columns = _columns_by_title(service, board.id)
    task = tasks_routes.create_task(schemas.TaskCreate(column_id=columns["To Do"].id), service)

    with pytest.raises(HTTPException) as exc:
        tasks_routes.update_task(task.id, schemas.TaskUpdate(column_id=new_identifier()), service)
    assert exc.value.status_code == 404
    assert exc.value.detail == "Column not found"

    with pytest.raises(HTTPException) as exc:
        tasks_routes.update_task(new_identifier(), schemas.TaskUpdate(title="x"), service)
    assert exc.value.detail == "Task not found"


def test_configure_logging_adds_one_handler():
    logger = configure_logging("DEBUG")
    handlers = list(logger.handlers)

    assert configure_logging("WARNING") is logger
    assert logger.handlers == handlers
    assert logger.level == logging.WARNING
    configure_logging("INFO")
