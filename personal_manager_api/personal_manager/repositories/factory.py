from __future__ import annotations

import logging
from typing import Dict, Optional, Type

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from personal_manager.core.settings import AppSettings, get_app_settings

from .base import Repository, T
from .json_repository import JsonRepository
from .sql_repository import SqlRepository

logger = logging.getLogger(__name__)


class RepositoryFactory:
    """
    Hands out one repository per entity type for the configured backend.

    The same instance is returned for repeated requests, so every service in
    the process shares the JSON cache and lock of a collection.
    """

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        session_maker: Optional[async_sessionmaker[AsyncSession]] = None,
    ) -> None:
        self.settings = settings or get_app_settings()
        self._session_maker = session_maker
        self._repositories: Dict[type, Repository] = {}

    @property
    def backend(self) -> str:
        return self.settings.STORAGE_BACKEND

    def _get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        if self._session_maker is None:
            from personal_manager.db.session import get_session_maker

            self._session_maker = get_session_maker()
        return self._session_maker

    # PUBLIC_INTERFACE
    def get(self, entity_type: Type[T]) -> Repository[T]:
        """Return the repository for entity_type, creating it on first use."""
        repo = self._repositories.get(entity_type)
        if repo is None:
            if self.backend == "sql":
                repo = SqlRepository(entity_type, self._get_session_maker())
            else:
                repo = JsonRepository(entity_type, self.settings.DATA_DIR)
            self._repositories[entity_type] = repo
            logger.debug("Created %s repository for %s", self.backend, entity_type.__name__)
        return repo
