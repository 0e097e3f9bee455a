"""Task endpoints"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from taskboard.dependencies import get_board_service, validation_as_bad_request
from taskboard.schemas import MessageResponse, TaskCreate, TaskMove, TaskResponse, TaskUpdate
from taskboard.services import TaskBoardService

router = APIRouter()


def _task_not_found():
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")


def _column_not_found():
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Column not found")


@router.get("", response_model=List[TaskResponse])
def list_all_tasks(service: TaskBoardService = Depends(get_board_service)):
    return service.list_all_tasks()


@router.get("/board/{board_id}", response_model=List[TaskResponse])
def list_tasks_by_board(board_id: str, service: TaskBoardService = Depends(get_board_service)):
    return service.list_tasks_by_board(board_id)


@router.get("/column/{column_id}", response_model=List[TaskResponse])
def list_tasks_by_column(column_id: str, service: TaskBoardService = Depends(get_board_service)):
    return service.list_tasks_by_column(column_id)


@router.post("/column/{column_id}/compact", response_model=List[TaskResponse])
def compact_tasks(column_id: str, service: TaskBoardService = Depends(get_board_service)):
    """Renumber a column's tasks densely from 1."""
    tasks = service.compact_column_tasks(column_id)
    if tasks is None:
        raise _column_not_found()
    return tasks


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: str, service: TaskBoardService = Depends(get_board_service)):
    task = service.get_task(task_id)
    if not task:
        raise _task_not_found()
    return task


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(task_in: TaskCreate, service: TaskBoardService = Depends(get_board_service)):
    with validation_as_bad_request():
        task = service.create_task(
            task_in.column_id,
            board_id=task_in.board_id,
            title=task_in.title,
            description=task_in.description,
            status=task_in.status,
            priority=task_in.priority,
            order=task_in.order,
            owner=task_in.owner,
        )
    if not task:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Column not found on the given board",
        )
    return task


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    task_update: TaskUpdate,
    service: TaskBoardService = Depends(get_board_service),
):
    """Update task fields; a new column_id moves the task to that column."""
    if not service.get_task(task_id):
        raise _task_not_found()
    with validation_as_bad_request():
        task = service.update_task(task_id, task_update.model_dump(exclude_unset=True))
    if not task:
        raise _column_not_found()
    return task


@router.put("/{task_id}/move", response_model=TaskResponse)
def move_task(
    task_id: str,
    move_in: TaskMove,
    service: TaskBoardService = Depends(get_board_service),
):
    if not service.get_task(task_id):
        raise _task_not_found()
    with validation_as_bad_request():
        task = service.move_task(task_id, move_in.column_id, move_in.order)
    if not task:
        raise _column_not_found()
    return task


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(task_id: str, service: TaskBoardService = Depends(get_board_service)):
    if not service.delete_task(task_id):
        raise _task_not_found()
    return MessageResponse(message="Task deleted successfully")
