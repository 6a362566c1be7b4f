from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path

from personal_manager.core.deps import service_dependency
from personal_manager.schemas.common import ApiResponse
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
from personal_manager.services.portfolio import (
    ContactMethodService,
    EducationService,
    PortfolioService,
    ProfileService,
    SkillService,
    WorkExperienceService,
)

from .crud import not_found, register_crud_routes, register_public_route

# --- Profiles ----------------------------------------------------------------

profiles_router = APIRouter(prefix="/profiles", tags=["Profiles"])


# PUBLIC_INTERFACE
@profiles_router.get(
    "/user/{user_id}",
    response_model=ApiResponse[ProfileRead],
    summary="Get a user's profile",
)
async def get_profile_by_user(
    user_id: int = Path(..., ge=1),
    service: ProfileService = Depends(service_dependency(ProfileService)),
) -> ApiResponse[ProfileRead]:
    profile = await service.get_by_user_id(user_id)
    if profile is None:
        raise not_found("Profile")
    return ApiResponse.ok(profile)


register_crud_routes(
    profiles_router,
    service_cls=ProfileService,
    create_schema=ProfileCreate,
    update_schema=ProfileUpdate,
    read_schema=ProfileRead,
    label="Profile",
    by_user=False,
)

# --- Educations --------------------------------------------------------------

educations_router = APIRouter(prefix="/educations", tags=["Educations"])
register_public_route(
    educations_router, service_cls=EducationService, read_schema=EducationRead, label="Education"
)
register_crud_routes(
    educations_router,
    service_cls=EducationService,
    create_schema=EducationCreate,
    update_schema=EducationUpdate,
    read_schema=EducationRead,
    label="Education",
)

# --- Work experiences --------------------------------------------------------

work_experiences_router = APIRouter(prefix="/workexperiences", tags=["Work Experiences"])
register_public_route(
    work_experiences_router,
    service_cls=WorkExperienceService,
    read_schema=WorkExperienceRead,
    label="Work experience",
)
register_crud_routes(
    work_experiences_router,
    service_cls=WorkExperienceService,
    create_schema=WorkExperienceCreate,
    update_schema=WorkExperienceUpdate,
    read_schema=WorkExperienceRead,
    label="Work experience",
)

# --- Skills ------------------------------------------------------------------

skills_router = APIRouter(prefix="/skills", tags=["Skills"])


# PUBLIC_INTERFACE
@skills_router.get(
    "/user/{user_id}/category/{category}",
    response_model=ApiResponse[List[SkillRead]],
    summary="List a user's skills in one category",
)
async def list_skills_by_category(
    category: str,
    user_id: int = Path(..., ge=1),
    service: SkillService = Depends(service_dependency(SkillService)),
) -> ApiResponse[List[SkillRead]]:
    return ApiResponse.ok(await service.get_by_category(user_id, category))


register_public_route(skills_router, service_cls=SkillService, read_schema=SkillRead, label="Skill")
register_crud_routes(
    skills_router,
    service_cls=SkillService,
    create_schema=SkillCreate,
    update_schema=SkillUpdate,
    read_schema=SkillRead,
    label="Skill",
)

# --- Portfolios --------------------------------------------------------------

portfolios_router = APIRouter(prefix="/portfolios", tags=["Portfolios"])


# PUBLIC_INTERFACE
@portfolios_router.get(
    "/user/{user_id}/featured",
    response_model=ApiResponse[List[PortfolioRead]],
    summary="List a user's featured public projects",
)
async def list_featured_portfolios(
    user_id: int = Path(..., ge=1),
    service: PortfolioService = Depends(service_dependency(PortfolioService)),
) -> ApiResponse[List[PortfolioRead]]:
    return ApiResponse.ok(await service.get_featured(user_id))


register_public_route(
    portfolios_router, service_cls=PortfolioService, read_schema=PortfolioRead, label="Portfolio"
)
register_crud_routes(
    portfolios_router,
    service_cls=PortfolioService,
    create_schema=PortfolioCreate,
    update_schema=PortfolioUpdate,
    read_schema=PortfolioRead,
    label="Portfolio",
)

# --- Contact methods ---------------------------------------------------------

contact_methods_router = APIRouter(prefix="/contactmethods", tags=["Contact Methods"])
register_public_route(
    contact_methods_router,
    service_cls=ContactMethodService,
    read_schema=ContactMethodRead,
    label="Contact method",
)
register_crud_routes(
    contact_methods_router,
    service_cls=ContactMethodService,
    create_schema=ContactMethodCreate,
    update_schema=ContactMethodUpdate,
    read_schema=ContactMethodRead,
    label="Contact method",
)
