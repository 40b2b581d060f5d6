"""
Task Manager - List/Task Request and Response Schemas
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, validator


def clean_title(v: Optional[str]) -> str:
    """Titles are required, trimmed, and at least one character long."""
    v = (v or "").strip()
    if not v:
        raise ValueError("Title must not be empty")
    return v


class ListCreate(BaseModel):
    """Request body for POST /lists."""
    title: str
    
    @validator("title")
    def title_not_empty(cls, v):
        return clean_title(v)


class ListUpdate(BaseModel):
    """Request body for PATCH /lists/{id}; only sent fields change."""
    title: Optional[str] = None
    
    @validator("title")
    def title_not_empty(cls, v):
        return clean_title(v)


class ListResponse(BaseModel):
    id: UUID = Field(..., alias="_id")
    title: str
    user_id: UUID = Field(..., alias="_userId")
    
    class Config:
        from_attributes = True
        populate_by_name = True


class TaskCreate(BaseModel):
    """Request body for POST /lists/{list_id}/tasks."""
    title: str
    
    @validator("title")
    def title_not_empty(cls, v):
        return clean_title(v)


class TaskUpdate(BaseModel):
    """Request body for PATCH /lists/{list_id}/tasks/{task_id}."""
    title: Optional[str] = None
    completed: Optional[bool] = None
    
    @validator("title")
    def title_not_empty(cls, v):
        return clean_title(v)


class TaskResponse(BaseModel):
    id: UUID = Field(..., alias="_id")
    title: str
    list_id: UUID = Field(..., alias="_listId")
    completed: bool
    
    class Config:
        from_attributes = True
        populate_by_name = True
