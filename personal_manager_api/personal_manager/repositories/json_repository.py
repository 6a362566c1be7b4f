from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import List, Optional, Type, Union

from pydantic import ValidationError

from personal_manager.entities import (
    BlogPost,
    CalendarEvent,
    ContactMethod,
    Education,
    GuestBookEntry,
    Portfolio,
    Profile,
    Skill,
    TodoItem,
    User,
    WorkExperience,
    WorkTask,
)

from .base import EntityNotFoundError, Repository, RepositoryError, T

logger = logging.getLogger(__name__)

# Collection file per entity type; kept stable so existing data directories load.
FILE_NAMES = {
    Profile: "personalProfiles.json",
    Education: "educations.json",
    WorkExperience: "workExperiences.json",
    Skill: "skills.json",
    Portfolio: "portfolios.json",
    CalendarEvent: "calendarEvents.json",
    TodoItem: "todoItems.json",
    WorkTask: "workTasks.json",
    BlogPost: "blogPosts.json",
    GuestBookEntry: "guestBookEntries.json",
    ContactMethod: "contactMethods.json",
    User: "users.json",
}


# PUBLIC_INTERFACE
def file_name_for(entity_type: type) -> str:
    """Return the collection file name for an entity type."""
    return FILE_NAMES.get(entity_type, f"{entity_type.__name__.lower()}s.json")


class JsonRepository(Repository[T]):
    """
    Repository keeping one entity collection in a single JSON file.

    The file is read on first access and mirrored in memory afterwards; every
    mutation rewrites the whole file. One asyncio.Lock per instance serialises
    the first load and each load-mutate-save, so only one instance per file
    should exist in a process (see RepositoryFactory).
    """

    def __init__(
        self,
        entity_type: Type[T],
        data_dir: Union[str, Path],
        file_name: Optional[str] = None,
    ) -> None:
        super().__init__(entity_type)
        self.file_path = Path(data_dir) / (file_name or file_name_for(entity_type))
        # Sidecar holding the highest id ever assigned, so ids freed by a
        # delete stay retired across restarts.
        self.meta_path = self.file_path.with_suffix(".meta.json")
        self._cache: Optional[List[T]] = None
        self._high_water = 0
        self._lock = asyncio.Lock()

    # --- file access -------------------------------------------------------

    def _read_file(self) -> List[T]:
        if not self.file_path.exists():
            logger.debug("No %s file at %s; starting empty", self.entity_name, self.file_path)
            return []
        text = self.file_path.read_text(encoding="utf-8")
        if not text.strip():
            return []
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise RepositoryError(f"{self.file_path} is not valid JSON: {exc}") from exc
        if not isinstance(raw, list):
            raise RepositoryError(f"{self.file_path} does not contain a JSON array")
        try:
            items = [self.entity_type.model_validate(item) for item in raw]
        except ValidationError as exc:
            raise RepositoryError(f"{self.file_path} holds an invalid {self.entity_name}: {exc}") from exc
        logger.debug("Loaded %d %s records from %s", len(items), self.entity_name, self.file_path)
        return items

    def _write_file(self, items: List[T]) -> None:
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        payload = [item.model_dump(mode="json") for item in items]
        self.file_path.write_text(
            json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8"
        )
        logger.debug("Wrote %d %s records to %s", len(items), self.entity_name, self.file_path)

    def _read_last_id(self) -> int:
        if not self.meta_path.exists():
            return 0
        try:
            last_id = json.loads(self.meta_path.read_text(encoding="utf-8")).get("last_id", 0)
        except (json.JSONDecodeError, AttributeError) as exc:
            raise RepositoryError(f"{self.meta_path} is not a valid id counter") from exc
        if not isinstance(last_id, int) or last_id < 0:
            raise RepositoryError(f"{self.meta_path} holds an invalid last_id: {last_id!r}")
        return last_id

    def _write_last_id(self, last_id: int) -> None:
        self.meta_path.parent.mkdir(parents=True, exist_ok=True)
        self.meta_path.write_text(json.dumps({"last_id": last_id}), encoding="utf-8")

    def _ensure_loaded(self) -> List[T]:
        # Caller holds self._lock.
        if self._cache is None:
            self._cache = self._read_file()
            self._high_water = max(
                [self._high_water, self._read_last_id()]
                + [item.get_id() for item in self._cache]
            )
        return self._cache

    def _commit(self, items: List[T], last_id: Optional[int] = None) -> None:
        # The cache only changes once the file write succeeded.
        self._write_file(items)
        if last_id is not None:
            self._write_last_id(last_id)
            self._high_water = last_id
        self._cache = items

    @staticmethod
    def _copy(entity: T) -> T:
        return entity.model_copy(deep=True)

    # --- Repository --------------------------------------------------------

    async def get_all(self) -> List[T]:
        async with self._lock:
            return [self._copy(item) for item in self._ensure_loaded()]

    async def get_by_id(self, entity_id: int) -> Optional[T]:
        async with self._lock:
            for item in self._ensure_loaded():
                if item.get_id() == entity_id:
                    return self._copy(item)
        return None

    async def add(self, entity: T) -> T:
        async with self._lock:
            items = self._ensure_loaded()
            current_max = max([item.get_id() for item in items], default=0)
            new_id = max(current_max, self._high_water) + 1

            stored = self._copy(entity)
            stored.set_id(new_id)
            stored.stamp_created()
            self._commit(items + [stored], last_id=new_id)
            return self._copy(stored)

    async def update(self, entity: T) -> T:
        async with self._lock:
            items = self._ensure_loaded()
            entity_id = entity.get_id()
            for index, existing in enumerate(items):
                if existing.get_id() == entity_id:
                    break
            else:
                raise EntityNotFoundError(self.entity_name, entity_id)

            stored = self._copy(entity)
            stored.created_at = existing.created_at
            stored.touch()
            updated = list(items)
            updated[index] = stored
            self._commit(updated)
            return self._copy(stored)

    async def delete(self, entity_id: int) -> bool:
        async with self._lock:
            items = self._ensure_loaded()
            remaining = [item for item in items if item.get_id() != entity_id]
            if len(remaining) == len(items):
                return False
            self._commit(remaining)
            return True
