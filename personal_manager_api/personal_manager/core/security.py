from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

from jose import JWTError, jwt
from passlib.context import CryptContext

from personal_manager.core.settings import AppSettings, get_app_settings

_pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# PUBLIC_INTERFACE
def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password using bcrypt."""
    if not hashed_password:
        return False
    try:
        return _pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # Unrecognised or corrupted hash in storage
        return False


# PUBLIC_INTERFACE
def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt (salted, one-way)."""
    return _pwd_context.hash(password)


# PUBLIC_INTERFACE
def create_access_token(
    subject: str,
    claims: Optional[Dict[str, Any]] = None,
    expires_hours: Optional[int] = None,
    settings: Optional[AppSettings] = None,
) -> Tuple[str, datetime]:
    """
    Create a signed access token.

    The token carries the subject (user id), issuer, audience, issue time and
    expiry, plus any extra claims (name, email, role).

    Returns:
        (encoded token, expiry timestamp in UTC)
    """
    settings = settings or get_app_settings()
    now = datetime.now(tz=timezone.utc)
    expire = now + timedelta(hours=expires_hours or settings.JWT_EXPIRY_HOURS)
    to_encode: Dict[str, Any] = dict(claims or {})
    to_encode.update(
        {
            "sub": subject,
            "iss": settings.JWT_ISSUER,
            "aud": settings.JWT_AUDIENCE,
            "iat": now,
            "exp": expire,
        }
    )
    encoded_jwt = jwt.encode(
        to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM
    )
    return encoded_jwt, expire


# PUBLIC_INTERFACE
def decode_token(token: str, settings: Optional[AppSettings] = None) -> Dict[str, Any]:
    """Decode and validate a JWT (signature, expiry, issuer, audience); raises JWTError."""
    settings = settings or get_app_settings()
    return jwt.decode(
        token,
        settings.JWT_SECRET_KEY,
        algorithms=[settings.JWT_ALGORITHM],
        audience=settings.JWT_AUDIENCE,
        issuer=settings.JWT_ISSUER,
    )


# PUBLIC_INTERFACE
def get_token_subject(token: str, settings: Optional[AppSettings] = None) -> Optional[str]:
    """Return 'sub' from a token or None when token is invalid."""
    try:
        payload = decode_token(token, settings)
        return payload.get("sub")
    except JWTError:
        return None
