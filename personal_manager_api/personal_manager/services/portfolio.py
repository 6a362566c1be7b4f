from __future__ import annotations

from typing import List, Optional

from personal_manager.entities import (
    ContactMethod,
    Education,
    Portfolio,
    Profile,
    Skill,
    WorkExperience,
)
from personal_manager.schemas.portfolio import (
    ContactMethodCreate,
    ContactMethodRead,
    ContactMethodUpdate,
    EducationCreate,
    EducationRead,
    EducationUpdate,
    PortfolioCreate,
    PortfolioRead,
    PortfolioUpdate,
    ProfileCreate,
    ProfileRead,
    ProfileUpdate,
    SkillCreate,
    SkillRead,
    SkillUpdate,
    WorkExperienceCreate,
    WorkExperienceRead,
    WorkExperienceUpdate,
)

from .base import EntityCrudService, UserOwnedMixin


class ProfileService(EntityCrudService[Profile, ProfileCreate, ProfileUpdate, ProfileRead]):
    entity_type = Profile
    read_schema = ProfileRead

    # PUBLIC_INTERFACE
    async def get_by_user_id(self, user_id: int) -> Optional[ProfileRead]:
        """Return the user's profile (the first one, should several exist)."""
        found = await self._find(lambda p: p.user_id == user_id)
        return self.map_to_response(found[0]) if found else None


class EducationService(
    UserOwnedMixin, EntityCrudService[Education, EducationCreate, EducationUpdate, EducationRead]
):
    entity_type = Education
    read_schema = EducationRead


class WorkExperienceService(
    UserOwnedMixin,
    EntityCrudService[WorkExperience, WorkExperienceCreate, WorkExperienceUpdate, WorkExperienceRead],
):
    entity_type = WorkExperience
    read_schema = WorkExperienceRead


class SkillService(UserOwnedMixin, EntityCrudService[Skill, SkillCreate, SkillUpdate, SkillRead]):
    entity_type = Skill
    read_schema = SkillRead

    # PUBLIC_INTERFACE
    async def get_by_category(self, user_id: int, category: str) -> List[SkillRead]:
        items = await self._find(lambda s: s.user_id == user_id and s.category == category)
        return self._map_all(sorted(items, key=lambda s: s.sort_order))


class PortfolioService(
    UserOwnedMixin, EntityCrudService[Portfolio, PortfolioCreate, PortfolioUpdate, PortfolioRead]
):
    entity_type = Portfolio
    read_schema = PortfolioRead

    # PUBLIC_INTERFACE
    async def get_featured(self, user_id: int) -> List[PortfolioRead]:
        """Featured projects that are also public."""
        items = await self._find(
            lambda p: p.user_id == user_id and p.is_featured and p.is_public
        )
        return self._map_all(sorted(items, key=lambda p: p.sort_order))


class ContactMethodService(
    UserOwnedMixin,
    EntityCrudService[ContactMethod, ContactMethodCreate, ContactMethodUpdate, ContactMethodRead],
):
    entity_type = ContactMethod
    read_schema = ContactMethodRead
