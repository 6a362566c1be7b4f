from __future__ import annotations

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from personal_manager.core.deps import get_current_user_id, service_dependency
from personal_manager.entities import TodoStatus, WorkTaskStatus
from personal_manager.schemas.common import ApiResponse
from personal_manager.schemas.planner import (
    CalendarEventCreate,
    CalendarEventRead,
    CalendarEventUpdate,
    TodoItemCreate,
    TodoItemRead,
    TodoItemUpdate,
    WorkTaskCreate,
    WorkTaskRead,
    WorkTaskUpdate,
)
from personal_manager.services.planner import (
    CalendarEventService,
    TodoItemService,
    WorkTaskService,
)

from .crud import register_crud_routes, register_public_route

# --- Calendar events ---------------------------------------------------------

calendar_events_router = APIRouter(prefix="/calendarevents", tags=["Calendar Events"])


# PUBLIC_INTERFACE
@calendar_events_router.get(
    "/user/{user_id}/range",
    response_model=ApiResponse[List[CalendarEventRead]],
    summary="List a user's events inside a time window",
    dependencies=[Depends(get_current_user_id)],
)
async def list_events_in_range(
    user_id: int = Path(..., ge=1),
    start: datetime = Query(..., description="Window start (inclusive)"),
    end: datetime = Query(..., description="Window end (inclusive)"),
    service: CalendarEventService = Depends(service_dependency(CalendarEventService)),
) -> ApiResponse[List[CalendarEventRead]]:
    if end < start:
        raise HTTPException(status_code=400, detail="end must not be earlier than start")
    return ApiResponse.ok(await service.get_by_date_range(user_id, start, end))


register_public_route(
    calendar_events_router,
    service_cls=CalendarEventService,
    read_schema=CalendarEventRead,
    label="Calendar event",
)
register_crud_routes(
    calendar_events_router,
    service_cls=CalendarEventService,
    create_schema=CalendarEventCreate,
    update_schema=CalendarEventUpdate,
    read_schema=CalendarEventRead,
    label="Calendar event",
    protect_reads=True,
)

# --- Todo items --------------------------------------------------------------

todo_items_router = APIRouter(prefix="/todoitems", tags=["Todo Items"])


# PUBLIC_INTERFACE
@todo_items_router.get(
    "/user/{user_id}/status/{todo_status}",
    response_model=ApiResponse[List[TodoItemRead]],
    summary="List a user's to-dos in one status",
    dependencies=[Depends(get_current_user_id)],
)
async def list_todos_by_status(
    todo_status: TodoStatus,
    user_id: int = Path(..., ge=1),
    service: TodoItemService = Depends(service_dependency(TodoItemService)),
) -> ApiResponse[List[TodoItemRead]]:
    return ApiResponse.ok(await service.get_by_status(user_id, todo_status))


register_crud_routes(
    todo_items_router,
    service_cls=TodoItemService,
    create_schema=TodoItemCreate,
    update_schema=TodoItemUpdate,
    read_schema=TodoItemRead,
    label="Todo item",
    protect_reads=True,
)

# --- Work tasks --------------------------------------------------------------

work_tasks_router = APIRouter(prefix="/worktasks", tags=["Work Tasks"])


# PUBLIC_INTERFACE
@work_tasks_router.get(
    "/user/{user_id}/project/{project}",
    response_model=ApiResponse[List[WorkTaskRead]],
    summary="List a user's tasks for one project",
    dependencies=[Depends(get_current_user_id)],
)
async def list_tasks_by_project(
    project: str,
    user_id: int = Path(..., ge=1),
    service: WorkTaskService = Depends(service_dependency(WorkTaskService)),
) -> ApiResponse[List[WorkTaskRead]]:
    return ApiResponse.ok(await service.get_by_project(user_id, project))


# PUBLIC_INTERFACE
@work_tasks_router.get(
    "/user/{user_id}/status/{task_status}",
    response_model=ApiResponse[List[WorkTaskRead]],
    summary="List a user's tasks in one status",
    dependencies=[Depends(get_current_user_id)],
)
async def list_tasks_by_status(
    task_status: WorkTaskStatus,
    user_id: int = Path(..., ge=1),
    service: WorkTaskService = Depends(service_dependency(WorkTaskService)),
) -> ApiResponse[List[WorkTaskRead]]:
    return ApiResponse.ok(await service.get_by_status(user_id, task_status))


register_crud_routes(
    work_tasks_router,
    service_cls=WorkTaskService,
    create_schema=WorkTaskCreate,
    update_schema=WorkTaskUpdate,
    read_schema=WorkTaskRead,
    label="Work task",
    protect_reads=True,
)
