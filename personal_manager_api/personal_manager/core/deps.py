from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Type

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from personal_manager.core.logging import role_var, user_id_var
from personal_manager.core.security import decode_token
from personal_manager.core.settings import AppSettings
from personal_manager.entities import User
from personal_manager.repositories import RepositoryFactory
from personal_manager.services.auth import AuthService

logger = logging.getLogger(__name__)

# OAuth2 bearer (used by docs); login endpoint path referenced here
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


# PUBLIC_INTERFACE
def get_settings(request: Request) -> AppSettings:
    """Settings the running application was built with."""
    return request.app.state.settings


# PUBLIC_INTERFACE
def get_repository_factory(request: Request) -> RepositoryFactory:
    """Process-wide repository factory stored on the application."""
    return request.app.state.repositories


# PUBLIC_INTERFACE
def get_auth_service(
    factory: RepositoryFactory = Depends(get_repository_factory),
    settings: AppSettings = Depends(get_settings),
) -> AuthService:
    return AuthService(factory.get(User), settings)


# PUBLIC_INTERFACE
def service_dependency(service_cls: Type[Any]) -> Callable[..., Any]:
    """
    Build a dependency providing service_cls over the repository of its
    entity_type.
    """

    def _provide(factory: RepositoryFactory = Depends(get_repository_factory)):
        return service_cls(factory.get(service_cls.entity_type))

    _provide.__name__ = f"get_{service_cls.__name__}"
    return _provide


# PUBLIC_INTERFACE
async def get_current_claims(
    token: str = Depends(oauth2_scheme),
    settings: AppSettings = Depends(get_settings),
) -> Dict[str, Any]:
    """
    Decode the bearer token (signature, expiry, issuer, audience).

    Raises:
        HTTPException: 401 if the token is missing, malformed or expired.
    """
    try:
        return decode_token(token, settings)
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")


# PUBLIC_INTERFACE
async def get_current_user_id(claims: Dict[str, Any] = Depends(get_current_claims)) -> int:
    """Return the caller's user id from the token subject and tag log records with it."""
    user_id = AuthService.get_user_id_from_claims(claims)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    user_id_var.set(str(user_id))
    role_var.set(claims.get("role"))
    return user_id


# PUBLIC_INTERFACE
def require_roles(*required: str):
    """
    Create a dependency that requires the token's role claim to be one of the
    specified roles.
    """

    async def _dep(
        claims: Dict[str, Any] = Depends(get_current_claims),
        user_id: int = Depends(get_current_user_id),
    ) -> int:
        if claims.get("role") not in set(required):
            logger.warning("User id=%s lacks role %s", user_id, "/".join(required))
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient role")
        return user_id

    return _dep
