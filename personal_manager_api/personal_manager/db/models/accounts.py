from __future__ import annotations

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from personal_manager.db.base import Base, IntPkMixin, TimestampMixin


class UserModel(IntPkMixin, TimestampMixin, Base):
    """Application user account."""
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    username: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False, default="")
    full_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="User")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
