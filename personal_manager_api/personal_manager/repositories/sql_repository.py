from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Type

from sqlalchemy import Executable, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from personal_manager.db.models import MODEL_BY_ENTITY

from .base import EntityNotFoundError, Repository, T

logger = logging.getLogger(__name__)


class SqlRepository(Repository[T]):
    """
    Repository storing one entity type in its ORM table.

    Each call runs in its own session from the factory and commits before
    returning. Ids come from the table's autoincrement column; timestamps are
    stamped here so both backends agree on them.
    """

    def __init__(
        self,
        entity_type: Type[T],
        session_maker: async_sessionmaker[AsyncSession],
        model: Optional[type] = None,
    ) -> None:
        super().__init__(entity_type)
        self.session_maker = session_maker
        self.model = model or MODEL_BY_ENTITY[entity_type]

    # --- helpers -----------------------------------------------------------

    def _to_entity(self, row: Any) -> T:
        return self.entity_type.model_validate(row, from_attributes=True)

    def _to_columns(self, entity: T) -> Dict[str, Any]:
        """Entity fields as column values; enums are stored by value."""
        values = entity.model_dump()
        return {
            key: (value.value if isinstance(value, Enum) else value)
            for key, value in values.items()
        }

    async def _scalars(self, session: AsyncSession, statement: Executable):
        """Execute and return scalars."""
        result = await session.execute(statement)
        return result.scalars()

    # --- Repository --------------------------------------------------------

    async def get_all(self) -> List[T]:
        async with self.session_maker() as session:
            rows = await self._scalars(session, select(self.model).order_by(self.model.id))
            return [self._to_entity(row) for row in rows]

    async def get_by_id(self, entity_id: int) -> Optional[T]:
        async with self.session_maker() as session:
            row = await session.get(self.model, entity_id)
            return self._to_entity(row) if row is not None else None

    async def add(self, entity: T) -> T:
        stored = entity.model_copy(deep=True)
        stored.stamp_created()
        columns = self._to_columns(stored)
        columns.pop("id", None)
        async with self.session_maker() as session:
            row = self.model(**columns)
            session.add(row)
            await session.commit()
            logger.debug("Inserted %s id=%s", self.entity_name, row.id)
            return self._to_entity(row)

    async def update(self, entity: T) -> T:
        entity_id = entity.get_id()
        async with self.session_maker() as session:
            row = await session.get(self.model, entity_id)
            if row is None:
                raise EntityNotFoundError(self.entity_name, entity_id)
            stored = entity.model_copy(deep=True)
            stored.touch()
            columns = self._to_columns(stored)
            for key in ("id", "created_at"):
                columns.pop(key, None)
            for key, value in columns.items():
                setattr(row, key, value)
            await session.commit()
            logger.debug("Updated %s id=%s", self.entity_name, entity_id)
            return self._to_entity(row)

    async def delete(self, entity_id: int) -> bool:
        async with self.session_maker() as session:
            row = await session.get(self.model, entity_id)
            if row is None:
                return False
            await session.delete(row)
            await session.commit()
            logger.debug("Deleted %s id=%s", self.entity_name, entity_id)
            return True
