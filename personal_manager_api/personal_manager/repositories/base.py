from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Generic, List, Optional, Type, TypeVar

from personal_manager.entities import Entity

T = TypeVar("T", bound=Entity)

Predicate = Callable[[T], bool]


class RepositoryError(Exception):
    """Raised when a backing store cannot be read as a collection."""


class EntityNotFoundError(LookupError):
    """Raised by update when no stored entity carries the given id."""

    def __init__(self, entity_name: str, entity_id: int) -> None:
        super().__init__(f"{entity_name} with id {entity_id} was not found")
        self.entity_name = entity_name
        self.entity_id = entity_id


class Repository(ABC, Generic[T]):
    """
    Storage contract shared by the JSON and SQL backends.

    Entities handed out are copies: changing one does not change what is stored
    until it is passed back to update().
    """

    def __init__(self, entity_type: Type[T]) -> None:
        self.entity_type = entity_type

    @property
    def entity_name(self) -> str:
        return self.entity_type.__name__

    @abstractmethod
    async def get_all(self) -> List[T]:
        """Return every entity of the collection."""

    @abstractmethod
    async def get_by_id(self, entity_id: int) -> Optional[T]:
        """Return the entity with the given id, or None."""

    async def find(self, predicate: Predicate) -> List[T]:
        """Return entities for which predicate(entity) is true."""
        return [entity for entity in await self.get_all() if predicate(entity)]

    @abstractmethod
    async def add(self, entity: T) -> T:
        """Store a new entity; the repository assigns id and timestamps."""

    @abstractmethod
    async def update(self, entity: T) -> T:
        """Replace the stored entity with the same id; raises EntityNotFoundError."""

    @abstractmethod
    async def delete(self, entity_id: int) -> bool:
        """Remove by id; True if something was removed."""
