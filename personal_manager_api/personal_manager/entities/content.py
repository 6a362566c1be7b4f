from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from .base import Entity


class BlogPostStatus(str, Enum):
    DRAFT = "Draft"
    PUBLISHED = "Published"
    ARCHIVED = "Archived"


class BlogPost(Entity):
    user_id: int = 0
    title: str = ""
    slug: str = ""
    content: str = ""
    summary: str = ""
    category: str = ""
    tags: str = ""
    status: BlogPostStatus = BlogPostStatus.DRAFT
    is_public: bool = True
    view_count: int = Field(default=0, ge=0)
    published_at: Optional[datetime] = None


class GuestBookEntry(Entity):
    """Visitor message; hidden until approved."""

    name: str = ""
    email: str = ""
    message: str = ""
    target_user_id: Optional[int] = None
    is_approved: bool = False
    admin_reply: str = ""
