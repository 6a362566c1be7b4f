from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from personal_manager.core.security import (
    create_access_token,
    get_password_hash,
    verify_password,
)
from personal_manager.core.settings import AppSettings, get_app_settings
from personal_manager.entities import DEFAULT_ROLE, User
from personal_manager.repositories import Repository
from personal_manager.schemas.auth import AuthResponse, UserRead

logger = logging.getLogger(__name__)


class AuthService:
    """
    Login, registration and token issuing over the user repository.

    Tokens are stateless; verifying them is left to the HTTP dependency layer
    (core.deps), so nothing here keeps a session.
    """

    def __init__(self, users: Repository[User], settings: Optional[AppSettings] = None) -> None:
        self.users = users
        self.settings = settings or get_app_settings()

    async def _find_by_username(self, username: str) -> Optional[User]:
        found = await self.users.find(lambda u: u.username == username)
        return found[0] if found else None

    # PUBLIC_INTERFACE
    async def login(self, username: str, password: str) -> Optional[AuthResponse]:
        """Return a token for valid credentials of an active user, else None."""
        user = await self._find_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login for username=%s", username)
            return None
        if not user.is_active:
            logger.warning("Login refused for inactive user id=%s", user.id)
            return None
        logger.info("User id=%s logged in", user.id)
        return self.generate_token(user)

    # PUBLIC_INTERFACE
    async def register(
        self, username: str, email: str, password: str, full_name: str = ""
    ) -> Optional[AuthResponse]:
        """
        Create a User-role account and return its token.

        Returns None, without writing anything, when the username or the email
        is already taken.
        """
        existing = await self.users.find(lambda u: u.username == username or u.email == email)
        if existing:
            logger.info("Registration refused for username=%s: username or email taken", username)
            return None

        user = await self.users.add(
            User(
                username=username,
                email=email,
                password_hash=get_password_hash(password),
                full_name=full_name,
                role=DEFAULT_ROLE,
            )
        )
        logger.info("Registered user id=%s username=%s", user.id, user.username)
        return self.generate_token(user)

    # PUBLIC_INTERFACE
    def generate_token(self, user: User) -> AuthResponse:
        """Sign an access token for user and wrap it with the user's public identity."""
        token, expires_at = create_access_token(
            subject=str(user.id),
            claims={"name": user.username, "email": user.email, "role": user.role},
            settings=self.settings,
        )
        return AuthResponse(
            user_id=user.id,
            token=token,
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            role=user.role,
            expires_at=expires_at,
        )

    # PUBLIC_INTERFACE
    async def get_current_user(self, user_id: int) -> Optional[UserRead]:
        user = await self.users.get_by_id(user_id)
        if user is None:
            return None
        return UserRead.model_validate(user, from_attributes=True)

    # PUBLIC_INTERFACE
    @staticmethod
    def get_user_id_from_claims(claims: Dict[str, Any]) -> Optional[int]:
        """Parse the 'sub' claim as an integer user id; None when absent or malformed."""
        subject = claims.get("sub")
        try:
            return int(subject) if subject is not None else None
        except (TypeError, ValueError):
            return None
