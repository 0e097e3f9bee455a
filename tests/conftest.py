import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import taskboard.models  # noqa: F401 - register the mappers on Base
from taskboard.database import Base
from taskboard.services import TaskBoardService

TEST_DATABASE_URL = "sqlite://"
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def db_session() -> Session:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def service(db_session: Session) -> TaskBoardService:
    return TaskBoardService(db_session)


@pytest.fixture
def board(service: TaskBoardService):
    return service.create_board(title="Sprint 1")


@pytest.fixture
def columns(service: TaskBoardService, board):
    return {column.title: column for column in service.list_columns(board.id)}
