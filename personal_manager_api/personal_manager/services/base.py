from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel

from personal_manager.entities import Entity
from personal_manager.repositories import EntityNotFoundError, Repository

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Entity)
C = TypeVar("C", bound=BaseModel)
U = TypeVar("U", bound=BaseModel)
R = TypeVar("R", bound=BaseModel)


# PUBLIC_INTERFACE
def apply_patch(entity: T, patch: BaseModel) -> T:
    """
    Return a copy of entity with every field the patch sets overwritten.

    Patch fields left as None are treated as "not supplied" and keep the
    current value. The input entity is not modified.
    """
    return entity.model_copy(update=patch.model_dump(exclude_none=True), deep=True)


class CrudService(ABC, Generic[T, C, U, R]):
    """
    Create/read/update/delete over one repository, mapping between entities
    and request/response schemas through the three hooks below.
    """

    def __init__(self, repository: Repository[T]) -> None:
        self.repository = repository

    @abstractmethod
    def map_to_entity(self, dto: C) -> T:
        """Build a new (unsaved) entity from a create payload."""

    @abstractmethod
    def map_to_response(self, entity: T) -> R:
        """Build the public response model for an entity."""

    @abstractmethod
    def apply_update(self, entity: T, patch: U) -> T:
        """Return the entity with the patch applied."""

    def _map_all(self, entities: List[T]) -> List[R]:
        return [self.map_to_response(entity) for entity in entities]

    async def _find(self, predicate: Callable[[T], bool]) -> List[T]:
        return await self.repository.find(predicate)

    # PUBLIC_INTERFACE
    async def get_all(self) -> List[R]:
        return self._map_all(await self.repository.get_all())

    # PUBLIC_INTERFACE
    async def get_by_id(self, entity_id: int) -> Optional[R]:
        entity = await self.repository.get_by_id(entity_id)
        return self.map_to_response(entity) if entity is not None else None

    # PUBLIC_INTERFACE
    async def create(self, dto: C) -> R:
        entity = await self.repository.add(self.map_to_entity(dto))
        return self.map_to_response(entity)

    # PUBLIC_INTERFACE
    async def update(self, entity_id: int, dto: U) -> Optional[R]:
        """Apply dto to the stored entity; None when no entity has entity_id."""
        entity = await self.repository.get_by_id(entity_id)
        if entity is None:
            return None
        try:
            updated = await self.repository.update(self.apply_update(entity, dto))
        except EntityNotFoundError:
            # Deleted between the read and the write.
            logger.info("%s %s vanished before update", self.repository.entity_name, entity_id)
            return None
        return self.map_to_response(updated)

    # PUBLIC_INTERFACE
    async def delete(self, entity_id: int) -> bool:
        return await self.repository.delete(entity_id)


class EntityCrudService(CrudService[T, C, U, R]):
    """
    CrudService whose hooks are driven by class attributes: the create payload
    fields become entity fields, the read schema is validated from the entity
    and updates use apply_patch. Subclasses override hooks where a field needs
    special handling.
    """

    entity_type: Type[T]
    read_schema: Type[R]

    def map_to_entity(self, dto: C) -> T:
        return self.entity_type(**dto.model_dump(exclude_none=True))

    def map_to_response(self, entity: T) -> R:
        return self.read_schema.model_validate(entity, from_attributes=True)

    def apply_update(self, entity: T, patch: U) -> T:
        return apply_patch(entity, patch)


class UserOwnedMixin:
    """Per-user listings for entities carrying user_id, is_public and sort_order."""

    # PUBLIC_INTERFACE
    async def get_by_user_id(self, user_id: int):
        items = await self._find(lambda e: e.user_id == user_id)
        return self._map_all(sorted(items, key=lambda e: e.sort_order))

    # PUBLIC_INTERFACE
    async def get_public_by_user_id(self, user_id: int):
        items = await self._find(lambda e: e.user_id == user_id and e.is_public)
        return self._map_all(sorted(items, key=lambda e: e.sort_order))
