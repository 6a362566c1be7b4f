from __future__ import annotations

from fastapi import APIRouter, Depends

from personal_manager.core.deps import require_roles
from personal_manager.entities import ADMIN_ROLE
from personal_manager.schemas.auth import UserCreate, UserRead, UserUpdate
from personal_manager.services.accounts import UserService

from .crud import register_crud_routes

router = APIRouter(prefix="/users", tags=["Users"])

register_crud_routes(
    router,
    service_cls=UserService,
    create_schema=UserCreate,
    update_schema=UserUpdate,
    read_schema=UserRead,
    label="User",
    by_user=False,
    extra_dependencies=[Depends(require_roles(ADMIN_ROLE))],
)
