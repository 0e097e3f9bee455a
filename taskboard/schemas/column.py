"""Schemas for board columns"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ColumnCreate(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    order: Optional[int] = Field(None, ge=0)
    color: Optional[str] = Field(None, max_length=32)


class ColumnUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    order: Optional[int] = Field(None, ge=0)
    color: Optional[str] = Field(None, max_length=32)


class ColumnResponse(BaseModel):
    id: str
    title: str
    board_id: str
    order: int
    color: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
