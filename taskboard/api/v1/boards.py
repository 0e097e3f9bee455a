"""Board and column endpoints"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from taskboard.dependencies import get_board_service, validation_as_bad_request
from taskboard.schemas import (
    BoardCreate,
    BoardResponse,
    BoardUpdate,
    ColumnCreate,
    ColumnResponse,
    ColumnUpdate,
    MessageResponse,
)
from taskboard.services import TaskBoardService

router = APIRouter()


def _board_not_found():
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Board not found")


def _column_not_found():
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Column not found")


@router.get("", response_model=List[BoardResponse])
def list_boards(service: TaskBoardService = Depends(get_board_service)):
    return service.list_boards()


@router.post("", response_model=BoardResponse, status_code=status.HTTP_201_CREATED)
def create_board(board_in: BoardCreate, service: TaskBoardService = Depends(get_board_service)):
    """Create a board seeded with the To Do / In Progress / Done columns."""
    return service.create_board(
        title=board_in.title,
        description=board_in.description,
        owner_id=board_in.owner_id,
    )


@router.get("/{board_id}", response_model=BoardResponse)
def get_board(board_id: str, service: TaskBoardService = Depends(get_board_service)):
    board = service.get_board(board_id)
    if not board:
        raise _board_not_found()
    return board


@router.put("/{board_id}", response_model=BoardResponse)
def update_board(
    board_id: str,
    board_update: BoardUpdate,
    service: TaskBoardService = Depends(get_board_service),
):
    with validation_as_bad_request():
        board = service.update_board(board_id, board_update.model_dump(exclude_unset=True))
    if not board:
        raise _board_not_found()
    return board


@router.delete("/{board_id}", response_model=MessageResponse)
def delete_board(board_id: str, service: TaskBoardService = Depends(get_board_service)):
    if not service.delete_board(board_id):
        raise _board_not_found()
    return MessageResponse(message="Board deleted successfully")


# Column endpoints

@router.get("/{board_id}/columns", response_model=List[ColumnResponse])
def list_columns(board_id: str, service: TaskBoardService = Depends(get_board_service)):
    return service.list_columns(board_id)


@router.post("/{board_id}/columns", response_model=ColumnResponse, status_code=status.HTTP_201_CREATED)
def create_column(
    board_id: str,
    column_in: ColumnCreate,
    service: TaskBoardService = Depends(get_board_service),
):
    with validation_as_bad_request():
        column = service.create_column(
            board_id,
            title=column_in.title,
            order=column_in.order,
            color=column_in.color,
        )
    if not column:
        raise _board_not_found()
    return column


@router.post("/{board_id}/columns/compact", response_model=List[ColumnResponse])
def compact_columns(board_id: str, service: TaskBoardService = Depends(get_board_service)):
    """Renumber a board's columns densely from 0."""
    columns = service.compact_board_columns(board_id)
    if columns is None:
        raise _board_not_found()
    return columns


@router.put("/columns/{column_id}", response_model=ColumnResponse)
def update_column(
    column_id: str,
    column_update: ColumnUpdate,
    service: TaskBoardService = Depends(get_board_service),
):
    with validation_as_bad_request():
        column = service.update_column(column_id, column_update.model_dump(exclude_unset=True))
    if not column:
        raise _column_not_found()
    return column


@router.delete("/columns/{column_id}", response_model=MessageResponse)
def delete_column(column_id: str, service: TaskBoardService = Depends(get_board_service)):
    """Delete a column and every task in it."""
    if not service.delete_column(column_id):
        raise _column_not_found()
    return MessageResponse(message="Column deleted successfully")
