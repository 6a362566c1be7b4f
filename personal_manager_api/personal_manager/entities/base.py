from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import BaseModel, Field, model_validator


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(tz=timezone.utc)


def _normalize_key(name: str) -> str:
    return name.replace("_", "").replace("-", "").lower()


class Entity(BaseModel):
    """
    Base class for every persisted record.

    Repositories never look attributes up by name; they go through the
    capability methods below (get_id/set_id/touch/stamp_created), which each
    entity inherits.
    """

    id: int = Field(default=0, ge=0, description="Identity assigned by the repository")
    created_at: datetime = Field(default_factory=utcnow, description="Creation timestamp (UTC)")
    updated_at: datetime = Field(default_factory=utcnow, description="Last update timestamp (UTC)")

    @model_validator(mode="before")
    @classmethod
    def _match_keys_case_insensitively(cls, data: Any) -> Any:
        """
        Map incoming keys onto field names ignoring case and underscores.

        Lets collections written as PascalCase (``UserId``) or camelCase
        (``userId``) load into ``user_id``. Unknown keys are dropped.
        """
        if not isinstance(data, dict):
            return data
        lookup = {_normalize_key(name): name for name in cls.model_fields}
        normalized: Dict[str, Any] = {}
        for key, value in data.items():
            field_name = lookup.get(_normalize_key(str(key)))
            if field_name is not None:
                normalized[field_name] = value
        return normalized

    @model_validator(mode="after")
    def _assume_utc(self) -> "Entity":
        """Naive datetimes (older files, SQLite) are taken to be UTC."""
        for name, value in self.__dict__.items():
            if isinstance(value, datetime) and value.tzinfo is None:
                self.__dict__[name] = value.replace(tzinfo=timezone.utc)
        return self

    # capability interface used by the repositories
    def get_id(self) -> int:
        return self.id

    def set_id(self, value: int) -> None:
        self.id = value

    def stamp_created(self, now: datetime | None = None) -> None:
        now = now or utcnow()
        self.created_at = now
        self.updated_at = now

    def touch(self, now: datetime | None = None) -> None:
        self.updated_at = now or utcnow()
