"""
Domain records persisted by the repositories.

Every entity derives from Entity, which carries the integer identity and the
created/updated timestamps together with the capability methods the
repositories use to assign them.
"""

from .accounts import ADMIN_ROLE, DEFAULT_ROLE, User  # noqa: F401
from .base import Entity, utcnow  # noqa: F401
from .content import BlogPost, BlogPostStatus, GuestBookEntry  # noqa: F401
from .planner import (  # noqa: F401
    CalendarEvent,
    TodoItem,
    TodoPriority,
    TodoStatus,
    WorkTask,
    WorkTaskPriority,
    WorkTaskStatus,
)
from .portfolio import (  # noqa: F401
    ContactMethod,
    ContactType,
    Education,
    Portfolio,
    Profile,
    Skill,
    SkillLevel,
    WorkExperience,
)

ALL_ENTITIES = (
    User,
    Profile,
    Education,
    WorkExperience,
    Skill,
    Portfolio,
    CalendarEvent,
    TodoItem,
    WorkTask,
    BlogPost,
    GuestBookEntry,
    ContactMethod,
)
