"""
Database package initializer exposing key public interfaces for configuration
and engine/session management.
"""

from .base import Base
from .config import get_settings, Settings
from .session import (
    build_engine,
    build_session_maker,
    create_tables,
    dispose_engine,
    get_async_session,
    get_engine,
    get_session_maker,
)

# Import models to ensure they are registered with SQLAlchemy metadata
# when the db package is imported.
from . import models as models  # noqa: F401

__all__ = [
    "Base",
    "Settings",
    "get_settings",
    "build_engine",
    "build_session_maker",
    "create_tables",
    "dispose_engine",
    "get_engine",
    "get_async_session",
    "get_session_maker",
    "models",
]
