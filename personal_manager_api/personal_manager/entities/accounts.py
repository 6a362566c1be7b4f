from __future__ import annotations

from pydantic import Field

from .base import Entity

DEFAULT_ROLE = "User"
ADMIN_ROLE = "Admin"


class User(Entity):
    """Account that owns every other record through user_id."""

    username: str = Field(default="", max_length=50)
    email: str = Field(default="", max_length=100)
    password_hash: str = Field(default="")
    full_name: str = Field(default="", max_length=100)
    role: str = Field(default=DEFAULT_ROLE, max_length=20)
    is_active: bool = Field(default=True)
