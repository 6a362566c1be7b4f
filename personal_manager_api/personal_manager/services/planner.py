from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional, Tuple, TypeVar, Union

from personal_manager.entities import (
    CalendarEvent,
    TodoItem,
    TodoStatus,
    WorkTask,
    WorkTaskStatus,
    utcnow,
)
from personal_manager.entities.planner import TODO_PRIORITY_RANK, WORK_TASK_PRIORITY_RANK
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

from .base import EntityCrudService, apply_patch


def _as_utc(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


def _due_date_key(due: Optional[datetime]) -> Tuple[int, datetime]:
    # Items without a due date sort after every dated item.
    if due is None:
        return 1, datetime.max.replace(tzinfo=timezone.utc)
    return 0, _as_utc(due)


Completable = TypeVar("Completable", TodoItem, WorkTask)


def _stamp_completion(
    entity: Completable,
    patch: Union[TodoItemUpdate, WorkTaskUpdate],
    completed_status: Union[TodoStatus, WorkTaskStatus],
) -> Completable:
    """
    Apply patch and set completed_at when it moves the entity into its
    completed status without supplying a completion time.
    """
    was_completed = entity.status == completed_status
    updated = apply_patch(entity, patch)
    if (
        not was_completed
        and updated.status == completed_status
        and patch.completed_at is None
    ):
        updated.completed_at = utcnow()
    return updated


class CalendarEventService(
    EntityCrudService[CalendarEvent, CalendarEventCreate, CalendarEventUpdate, CalendarEventRead]
):
    entity_type = CalendarEvent
    read_schema = CalendarEventRead

    def _ordered(self, items: List[CalendarEvent]) -> List[CalendarEventRead]:
        return self._map_all(sorted(items, key=lambda e: e.start_time))

    # PUBLIC_INTERFACE
    async def get_by_user_id(self, user_id: int) -> List[CalendarEventRead]:
        return self._ordered(await self._find(lambda e: e.user_id == user_id))

    # PUBLIC_INTERFACE
    async def get_public_by_user_id(self, user_id: int) -> List[CalendarEventRead]:
        return self._ordered(await self._find(lambda e: e.user_id == user_id and e.is_public))

    # PUBLIC_INTERFACE
    async def get_by_date_range(
        self, user_id: int, start: datetime, end: datetime
    ) -> List[CalendarEventRead]:
        """Events of the user lying entirely inside [start, end]."""
        start, end = _as_utc(start), _as_utc(end)
        return self._ordered(
            await self._find(
                lambda e: e.user_id == user_id and e.start_time >= start and e.end_time <= end
            )
        )


class TodoItemService(EntityCrudService[TodoItem, TodoItemCreate, TodoItemUpdate, TodoItemRead]):
    entity_type = TodoItem
    read_schema = TodoItemRead

    def map_to_entity(self, dto: TodoItemCreate) -> TodoItem:
        entity = super().map_to_entity(dto)
        if entity.status == TodoStatus.COMPLETED:
            entity.completed_at = utcnow()
        return entity

    def apply_update(self, entity: TodoItem, patch: TodoItemUpdate) -> TodoItem:
        return _stamp_completion(entity, patch, TodoStatus.COMPLETED)

    # PUBLIC_INTERFACE
    async def get_by_user_id(self, user_id: int) -> List[TodoItemRead]:
        """Highest priority first, then earliest due date; undated items last."""
        items = await self._find(lambda t: t.user_id == user_id)
        items.sort(key=lambda t: (-TODO_PRIORITY_RANK[t.priority], _due_date_key(t.due_date)))
        return self._map_all(items)

    # PUBLIC_INTERFACE
    async def get_by_status(self, user_id: int, status: TodoStatus) -> List[TodoItemRead]:
        items = await self._find(lambda t: t.user_id == user_id and t.status == status)
        items.sort(key=lambda t: -TODO_PRIORITY_RANK[t.priority])
        return self._map_all(items)


class WorkTaskService(EntityCrudService[WorkTask, WorkTaskCreate, WorkTaskUpdate, WorkTaskRead]):
    entity_type = WorkTask
    read_schema = WorkTaskRead

    def map_to_entity(self, dto: WorkTaskCreate) -> WorkTask:
        entity = super().map_to_entity(dto)
        if entity.status == WorkTaskStatus.COMPLETED:
            entity.completed_at = utcnow()
        return entity

    def apply_update(self, entity: WorkTask, patch: WorkTaskUpdate) -> WorkTask:
        return _stamp_completion(entity, patch, WorkTaskStatus.COMPLETED)

    def _by_priority(self, items: List[WorkTask]) -> List[WorkTask]:
        return sorted(items, key=lambda w: -WORK_TASK_PRIORITY_RANK[w.priority])

    # PUBLIC_INTERFACE
    async def get_by_user_id(self, user_id: int) -> List[WorkTaskRead]:
        items = await self._find(lambda w: w.user_id == user_id)
        items.sort(
            key=lambda w: (-WORK_TASK_PRIORITY_RANK[w.priority], _due_date_key(w.due_date))
        )
        return self._map_all(items)

    # PUBLIC_INTERFACE
    async def get_by_project(self, user_id: int, project: str) -> List[WorkTaskRead]:
        items = await self._find(lambda w: w.user_id == user_id and w.project == project)
        return self._map_all(self._by_priority(items))

    # PUBLIC_INTERFACE
    async def get_by_status(self, user_id: int, status: WorkTaskStatus) -> List[WorkTaskRead]:
        items = await self._find(lambda w: w.user_id == user_id and w.status == status)
        return self._map_all(self._by_priority(items))
