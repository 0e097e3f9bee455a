"""Shared FastAPI dependencies."""
from contextlib import contextmanager

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from taskboard.database import get_db
from taskboard.errors import ValidationFailure
from taskboard.services import TaskBoardService


def get_board_service(db: Session = Depends(get_db)) -> TaskBoardService:
    return TaskBoardService(db)


@contextmanager
def validation_as_bad_request():
    """Translate :class:`ValidationFailure` raised by an operation into a 400."""
    try:
        yield
    except ValidationFailure as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
