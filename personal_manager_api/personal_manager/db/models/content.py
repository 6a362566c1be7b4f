from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from personal_manager.db.base import Base, IntPkMixin, TimestampMixin, UTCDateTime


class BlogPostModel(IntPkMixin, TimestampMixin, Base):
    __tablename__ = "blog_posts"
    __table_args__ = {"sqlite_autoincrement": True}

    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    slug: Mapped[str] = mapped_column(String(250), nullable=False, default="", index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    summary: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    tags: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="Draft")
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    published_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)


class GuestBookEntryModel(IntPkMixin, TimestampMixin, Base):
    """Visitor message, shown once approved."""
    __tablename__ = "guest_book_entries"
    __table_args__ = {"sqlite_autoincrement": True}

    name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    email: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    message: Mapped[str] = mapped_column(Text, nullable=False, default="")
    target_user_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    is_approved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    admin_reply: Mapped[str] = mapped_column(Text, nullable=False, default="")
