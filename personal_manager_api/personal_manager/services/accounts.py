from __future__ import annotations

from typing import Optional

from personal_manager.core.security import get_password_hash
from personal_manager.entities import User
from personal_manager.schemas.auth import UserCreate, UserRead, UserUpdate

from .base import EntityCrudService


class UserService(EntityCrudService[User, UserCreate, UserUpdate, UserRead]):
    """Admin-facing account management; the password hash never leaves this layer."""

    entity_type = User
    read_schema = UserRead

    def map_to_entity(self, dto: UserCreate) -> User:
        return User(
            username=dto.username,
            email=str(dto.email),
            password_hash=get_password_hash(dto.password),
            full_name=dto.full_name,
            role=dto.role,
        )

    def apply_update(self, entity: User, patch: UserUpdate) -> User:
        updated = super().apply_update(entity, patch)
        if patch.email is not None:
            updated.email = str(patch.email)
        return updated

    # PUBLIC_INTERFACE
    async def get_by_username(self, username: str) -> Optional[UserRead]:
        found = await self._find(lambda u: u.username == username)
        return self.map_to_response(found[0]) if found else None
