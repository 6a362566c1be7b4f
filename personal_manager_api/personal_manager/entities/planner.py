from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from .base import Entity, utcnow


class TodoPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class TodoStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"


class WorkTaskPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"


class WorkTaskStatus(str, Enum):
    PENDING = "Pending"
    PLANNING = "Planning"
    IN_PROGRESS = "InProgress"
    TESTING = "Testing"
    COMPLETED = "Completed"
    ON_HOLD = "OnHold"
    CANCELLED = "Cancelled"


# Declaration order doubles as rank for "highest priority first" listings.
TODO_PRIORITY_RANK = {p: i for i, p in enumerate(TodoPriority)}
WORK_TASK_PRIORITY_RANK = {p: i for i, p in enumerate(WorkTaskPriority)}


class CalendarEvent(Entity):
    user_id: int = 0
    title: str = ""
    description: str = ""
    start_time: datetime = Field(default_factory=utcnow)
    end_time: datetime = Field(default_factory=utcnow)
    is_all_day: bool = False
    is_public: bool = False
    color: str = ""


class TodoItem(Entity):
    user_id: int = 0
    title: str = ""
    description: str = ""
    priority: TodoPriority = TodoPriority.MEDIUM
    status: TodoStatus = TodoStatus.PENDING
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class WorkTask(Entity):
    """Work item tracked against a project with hour estimates."""

    user_id: int = 0
    title: str = ""
    description: str = ""
    project: str = ""
    priority: WorkTaskPriority = WorkTaskPriority.MEDIUM
    status: WorkTaskStatus = WorkTaskStatus.PENDING
    estimated_hours: float = Field(default=0.0, ge=0)
    actual_hours: float = Field(default=0.0, ge=0)
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    tags: str = ""
