"""Schemas for tasks"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from taskboard.models.task import TaskPriority, TaskStatus


class TaskCreate(BaseModel):
    column_id: str
    board_id: Optional[str] = None
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    order: Optional[int] = Field(None, ge=0)
    owner: Optional[str] = Field(None, max_length=255)


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    column_id: Optional[str] = None
    board_id: Optional[str] = None
    order: Optional[int] = Field(None, ge=0)
    owner: Optional[str] = Field(None, max_length=255)


class TaskMove(BaseModel):
    column_id: str
    order: int = Field(..., ge=0)


class TaskResponse(BaseModel):
    id: str
    title: str
    description: Optional[str]
    status: TaskStatus
    priority: TaskPriority
    column_id: str
    board_id: str
    order: int
    owner: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
