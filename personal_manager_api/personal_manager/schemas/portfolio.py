from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from personal_manager.entities import ContactType, SkillLevel

from .common import IDModel, Timestamps


# --- Profile -----------------------------------------------------------------

class ProfileRead(IDModel, Timestamps):
    """Personal profile read model."""
    user_id: int
    title: str
    summary: str
    description: str
    profile_image_url: str
    website: str
    location: str
    theme_color: str

    class Config:
        from_attributes = True


class ProfileCreate(BaseModel):
    """Create profile payload; user_id defaults to the caller."""
    user_id: Optional[int] = Field(None, description="Owner; defaults to the authenticated user")
    title: str = Field(default="", max_length=200)
    summary: str = Field(default="")
    description: str = Field(default="")
    profile_image_url: str = Field(default="")
    website: str = Field(default="")
    location: str = Field(default="", max_length=200)
    theme_color: str = Field(default="blue", max_length=20)


class ProfileUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=200)
    summary: Optional[str] = None
    description: Optional[str] = None
    profile_image_url: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = Field(None, max_length=200)
    theme_color: Optional[str] = Field(None, max_length=20)


# --- Education ---------------------------------------------------------------

class EducationRead(IDModel, Timestamps):
    user_id: int
    school: str
    degree: str
    field_of_study: str
    start_year: Optional[int] = None
    end_year: Optional[int] = None
    description: str
    is_public: bool
    sort_order: int

    class Config:
        from_attributes = True


class EducationCreate(BaseModel):
    user_id: Optional[int] = None
    school: str = Field(..., min_length=1, max_length=200)
    degree: str = Field(default="", max_length=200)
    field_of_study: str = Field(default="", max_length=200)
    start_year: Optional[int] = None
    end_year: Optional[int] = None
    description: str = ""
    is_public: bool = True
    sort_order: int = 0


class EducationUpdate(BaseModel):
    school: Optional[str] = Field(None, min_length=1, max_length=200)
    degree: Optional[str] = Field(None, max_length=200)
    field_of_study: Optional[str] = Field(None, max_length=200)
    start_year: Optional[int] = None
    end_year: Optional[int] = None
    description: Optional[str] = None
    is_public: Optional[bool] = None
    sort_order: Optional[int] = None


# --- WorkExperience ----------------------------------------------------------

class WorkExperienceRead(IDModel, Timestamps):
    user_id: int
    company: str
    position: str
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_current: bool
    description: str
    is_public: bool
    sort_order: int

    class Config:
        from_attributes = True


class WorkExperienceCreate(BaseModel):
    user_id: Optional[int] = None
    company: str = Field(..., min_length=1, max_length=200)
    position: str = Field(..., min_length=1, max_length=200)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_current: bool = False
    description: str = ""
    is_public: bool = True
    sort_order: int = 0


class WorkExperienceUpdate(BaseModel):
    company: Optional[str] = Field(None, min_length=1, max_length=200)
    position: Optional[str] = Field(None, min_length=1, max_length=200)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_current: Optional[bool] = None
    description: Optional[str] = None
    is_public: Optional[bool] = None
    sort_order: Optional[int] = None


# --- Skill -------------------------------------------------------------------

class SkillRead(IDModel, Timestamps):
    user_id: int
    name: str
    category: str
    level: SkillLevel
    years_of_experience: int
    is_public: bool
    sort_order: int

    class Config:
        from_attributes = True


class SkillCreate(BaseModel):
    user_id: Optional[int] = None
    name: str = Field(..., min_length=1, max_length=100)
    category: str = Field(default="", max_length=100)
    level: SkillLevel = SkillLevel.BEGINNER
    years_of_experience: int = Field(default=0, ge=0)
    is_public: bool = True
    sort_order: int = 0


class SkillUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    category: Optional[str] = Field(None, max_length=100)
    level: Optional[SkillLevel] = None
    years_of_experience: Optional[int] = Field(None, ge=0)
    is_public: Optional[bool] = None
    sort_order: Optional[int] = None


# --- Portfolio ---------------------------------------------------------------

class PortfolioRead(IDModel, Timestamps):
    user_id: int
    title: str
    description: str
    image_url: str
    project_url: str
    repository_url: str
    technologies: str
    is_featured: bool
    is_public: bool
    sort_order: int

    class Config:
        from_attributes = True


class PortfolioCreate(BaseModel):
    user_id: Optional[int] = None
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    image_url: str = ""
    project_url: str = ""
    repository_url: str = ""
    technologies: str = ""
    is_featured: bool = False
    is_public: bool = True
    sort_order: int = 0


class PortfolioUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    image_url: Optional[str] = None
    project_url: Optional[str] = None
    repository_url: Optional[str] = None
    technologies: Optional[str] = None
    is_featured: Optional[bool] = None
    is_public: Optional[bool] = None
    sort_order: Optional[int] = None


# --- ContactMethod -----------------------------------------------------------

class ContactMethodRead(IDModel, Timestamps):
    user_id: int
    type: ContactType
    label: str
    value: str
    icon: str
    is_public: bool
    sort_order: int

    class Config:
        from_attributes = True


class ContactMethodCreate(BaseModel):
    user_id: Optional[int] = None
    type: ContactType = ContactType.EMAIL
    label: str = Field(default="", max_length=100)
    value: str = Field(..., min_length=1)
    icon: str = Field(default="", max_length=100)
    is_public: bool = True
    sort_order: int = 0


class ContactMethodUpdate(BaseModel):
    type: Optional[ContactType] = None
    label: Optional[str] = Field(None, max_length=100)
    value: Optional[str] = Field(None, min_length=1)
    icon: Optional[str] = Field(None, max_length=100)
    is_public: Optional[bool] = None
    sort_order: Optional[int] = None
