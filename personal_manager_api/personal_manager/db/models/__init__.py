"""
ORM models backing the relational storage option, one table per entity.

Importing this package ensures model classes are registered with the Base
metadata so create_all can build the schema.
"""

from personal_manager.entities import (
    BlogPost,
    CalendarEvent,
    ContactMethod,
    Education,
    GuestBookEntry,
    Portfolio,
    Profile,
    Skill,
    TodoItem,
    User,
    WorkExperience,
    WorkTask,
)

from .accounts import UserModel  # noqa: F401
from .content import BlogPostModel, GuestBookEntryModel  # noqa: F401
from .planner import CalendarEventModel, TodoItemModel, WorkTaskModel  # noqa: F401
from .portfolio import (  # noqa: F401
    ContactMethodModel,
    EducationModel,
    PortfolioModel,
    ProfileModel,
    SkillModel,
    WorkExperienceModel,
)

# Entity class -> mapped class used by SqlRepository.
MODEL_BY_ENTITY = {
    User: UserModel,
    Profile: ProfileModel,
    Education: EducationModel,
    WorkExperience: WorkExperienceModel,
    Skill: SkillModel,
    Portfolio: PortfolioModel,
    CalendarEvent: CalendarEventModel,
    TodoItem: TodoItemModel,
    WorkTask: WorkTaskModel,
    BlogPost: BlogPostModel,
    GuestBookEntry: GuestBookEntryModel,
    ContactMethod: ContactMethodModel,
}
