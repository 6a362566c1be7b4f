from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class LoginRequest(BaseModel):
    """Credentials for obtaining an access token."""
    username: str = Field(..., min_length=1, description="Username")
    password: str = Field(..., min_length=1, description="Password")


class RegisterRequest(BaseModel):
    """Registration details for creating a new user."""
    username: str = Field(..., min_length=3, max_length=50, description="Unique username")
    email: EmailStr = Field(..., description="User email")
    password: str = Field(..., min_length=6, max_length=100, description="User password")
    full_name: str = Field(default="", max_length=100, description="Full name")


class AuthResponse(BaseModel):
    """Issued access token together with the public identity of its owner."""
    user_id: int = Field(..., description="User ID (also the token subject)")
    token: str = Field(..., description="JWT access token")
    username: str = Field(...)
    email: str = Field(...)
    full_name: str = Field(default="")
    role: str = Field(...)
    expires_at: datetime = Field(..., description="Token expiry (UTC)")


class UserRead(BaseModel):
    """User read model; never carries the password hash."""
    id: int = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    email: str = Field(..., description="User email")
    full_name: str = Field(default="")
    role: str = Field(..., description="Role name")
    is_active: bool = Field(..., description="Active flag")
    created_at: datetime = Field(..., description="Created timestamp")
    updated_at: datetime = Field(..., description="Updated timestamp")

    class Config:
        from_attributes = True


class UserCreate(BaseModel):
    """Admin create user payload."""
    username: str = Field(..., min_length=1, max_length=50, description="Username")
    email: EmailStr = Field(..., description="Email")
    password: str = Field(..., min_length=6, description="Password")
    full_name: str = Field(default="", max_length=100)
    role: str = Field(default="User", max_length=20)


class UserUpdate(BaseModel):
    """Admin update user payload."""
    email: Optional[EmailStr] = Field(None)
    full_name: Optional[str] = Field(None, max_length=100)
    role: Optional[str] = Field(None, max_length=20)
    is_active: Optional[bool] = Field(None)
