from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from personal_manager.entities import (
    TodoPriority,
    TodoStatus,
    WorkTaskPriority,
    WorkTaskStatus,
)

from .common import IDModel, Timestamps


# --- CalendarEvent -----------------------------------------------------------

class CalendarEventRead(IDModel, Timestamps):
    """Calendar event read model."""
    user_id: int
    title: str
    description: str
    start_time: datetime
    end_time: datetime
    is_all_day: bool
    is_public: bool
    color: str

    class Config:
        from_attributes = True


class CalendarEventCreate(BaseModel):
    user_id: Optional[int] = None
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    start_time: datetime = Field(..., description="Event start")
    end_time: datetime = Field(..., description="Event end (not before start)")
    is_all_day: bool = False
    is_public: bool = False
    color: str = Field(default="", max_length=20)

    @model_validator(mode="after")
    def _check_range(self) -> "CalendarEventCreate":
        if self.end_time < self.start_time:
            raise ValueError("end_time must not be earlier than start_time")
        return self


class CalendarEventUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    is_all_day: Optional[bool] = None
    is_public: Optional[bool] = None
    color: Optional[str] = Field(None, max_length=20)


# --- TodoItem ----------------------------------------------------------------

class TodoItemRead(IDModel, Timestamps):
    user_id: int
    title: str
    description: str
    priority: TodoPriority
    status: TodoStatus
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TodoItemCreate(BaseModel):
    user_id: Optional[int] = None
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    priority: TodoPriority = TodoPriority.MEDIUM
    status: TodoStatus = TodoStatus.PENDING
    due_date: Optional[datetime] = None


class TodoItemUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    priority: Optional[TodoPriority] = None
    status: Optional[TodoStatus] = None
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None


# --- WorkTask ----------------------------------------------------------------

class WorkTaskRead(IDModel, Timestamps):
    user_id: int
    title: str
    description: str
    project: str
    priority: WorkTaskPriority
    status: WorkTaskStatus
    estimated_hours: float
    actual_hours: float
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    tags: str

    class Config:
        from_attributes = True


class WorkTaskCreate(BaseModel):
    user_id: Optional[int] = None
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    project: str = Field(default="", max_length=200)
    priority: WorkTaskPriority = WorkTaskPriority.MEDIUM
    status: WorkTaskStatus = WorkTaskStatus.PENDING
    estimated_hours: float = Field(default=0.0, ge=0)
    actual_hours: float = Field(default=0.0, ge=0)
    due_date: Optional[datetime] = None
    tags: str = ""


class WorkTaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    project: Optional[str] = Field(None, max_length=200)
    priority: Optional[WorkTaskPriority] = None
    status: Optional[WorkTaskStatus] = None
    estimated_hours: Optional[float] = Field(None, ge=0)
    actual_hours: Optional[float] = Field(None, ge=0)
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    tags: Optional[str] = None
