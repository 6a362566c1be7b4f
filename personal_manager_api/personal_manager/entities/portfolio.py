from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from .base import Entity


class SkillLevel(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"


class ContactType(str, Enum):
    EMAIL = "Email"
    PHONE = "Phone"
    LINKEDIN = "LinkedIn"
    GITHUB = "GitHub"
    FACEBOOK = "Facebook"
    TWITTER = "Twitter"
    INSTAGRAM = "Instagram"
    OTHER = "Other"


class Profile(Entity):
    """Public personal profile (one per user)."""

    user_id: int = 0
    title: str = ""
    summary: str = ""
    description: str = ""
    profile_image_url: str = ""
    website: str = ""
    location: str = ""
    theme_color: str = "blue"


class Education(Entity):
    user_id: int = 0
    school: str = ""
    degree: str = ""
    field_of_study: str = ""
    start_year: Optional[int] = None
    end_year: Optional[int] = None
    description: str = ""
    is_public: bool = True
    sort_order: int = 0


class WorkExperience(Entity):
    user_id: int = 0
    company: str = ""
    position: str = ""
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_current: bool = False
    description: str = ""
    is_public: bool = True
    sort_order: int = 0


class Skill(Entity):
    user_id: int = 0
    name: str = ""
    category: str = ""
    level: SkillLevel = SkillLevel.BEGINNER
    years_of_experience: int = Field(default=0, ge=0)
    is_public: bool = True
    sort_order: int = 0


class Portfolio(Entity):
    """Showcased project."""

    user_id: int = 0
    title: str = ""
    description: str = ""
    image_url: str = ""
    project_url: str = ""
    repository_url: str = ""
    technologies: str = ""
    is_featured: bool = False
    is_public: bool = True
    sort_order: int = 0


class ContactMethod(Entity):
    user_id: int = 0
    type: ContactType = ContactType.EMAIL
    label: str = ""
    value: str = ""
    icon: str = ""
    is_public: bool = True
    sort_order: int = 0
