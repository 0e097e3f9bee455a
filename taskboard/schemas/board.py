"""Schemas for boards"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class BoardCreate(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    owner_id: Optional[str] = Field(None, max_length=255)


class BoardUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    owner_id: Optional[str] = Field(None, max_length=255)


class BoardResponse(BaseModel):
    id: str
    title: str
    description: Optional[str]
    owner_id: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    message: str
