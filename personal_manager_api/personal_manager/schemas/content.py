from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from personal_manager.entities import BlogPostStatus

from .common import IDModel, Timestamps


# --- BlogPost ----------------------------------------------------------------

class BlogPostRead(IDModel, Timestamps):
    """Blog post read model."""
    user_id: int
    title: str
    slug: str
    content: str
    summary: str
    category: str
    tags: str
    status: BlogPostStatus
    is_public: bool
    view_count: int
    published_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BlogPostCreate(BaseModel):
    """Create blog post payload; the slug is derived from the title."""
    user_id: Optional[int] = None
    title: str = Field(..., min_length=1, max_length=200)
    content: str = ""
    summary: str = ""
    category: str = Field(default="", max_length=100)
    tags: str = ""
    status: BlogPostStatus = BlogPostStatus.DRAFT
    is_public: bool = True


class BlogPostUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = None
    summary: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    tags: Optional[str] = None
    status: Optional[BlogPostStatus] = None
    is_public: Optional[bool] = None


# --- GuestBookEntry ----------------------------------------------------------

class GuestBookEntryRead(IDModel, Timestamps):
    name: str
    email: str
    message: str
    target_user_id: Optional[int] = None
    is_approved: bool
    admin_reply: str

    class Config:
        from_attributes = True


class GuestBookEntryCreate(BaseModel):
    """Anonymous visitor message."""
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr = Field(...)
    message: str = Field(..., min_length=1, max_length=2000)
    target_user_id: Optional[int] = None


class GuestBookEntryUpdate(BaseModel):
    """Moderation payload: approval and owner reply only."""
    is_approved: Optional[bool] = None
    admin_reply: Optional[str] = None
