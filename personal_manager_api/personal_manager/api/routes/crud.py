# Annotations here reference the schema classes passed in, so they must be
# evaluated eagerly for FastAPI to see them (no postponed evaluation).
from typing import Any, List, Sequence, Type

from fastapi import APIRouter, Depends, HTTPException, Path, status
from pydantic import BaseModel

from personal_manager.core.deps import get_current_user_id, service_dependency
from personal_manager.schemas.common import ApiResponse


def not_found(label: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} not found")


# PUBLIC_INTERFACE
def register_crud_routes(
    router: APIRouter,
    *,
    service_cls: Type[Any],
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    read_schema: Type[BaseModel],
    label: str,
    protect_reads: bool = False,
    by_user: bool = True,
    extra_dependencies: Sequence[Any] = (),
) -> APIRouter:
    """
    Attach list/get/by-user/create/update/delete endpoints for one resource.

    Call this after registering any resource-specific GET routes with a
    single static segment (e.g. /published) so they take precedence over
    /{entity_id}.

    Parameters:
        service_cls: EntityCrudService subclass serving the resource
        label: human readable resource name used in messages
        protect_reads: require a bearer token for GET endpoints too
        by_user: add GET /user/{user_id} (service must offer get_by_user_id)
        extra_dependencies: dependencies applied to every endpoint (e.g. role checks)
    """
    provider = service_dependency(service_cls)
    read_deps = [Depends(get_current_user_id)] if protect_reads else []
    read_deps += list(extra_dependencies)
    write_deps = list(extra_dependencies)

    @router.get(
        "",
        response_model=ApiResponse[List[read_schema]],
        summary=f"List {label} records",
        dependencies=read_deps,
    )
    async def list_items(service=Depends(provider)):
        return ApiResponse.ok(await service.get_all())

    if by_user:

        @router.get(
            "/user/{user_id}",
            response_model=ApiResponse[List[read_schema]],
            summary=f"List {label} records of a user",
            dependencies=read_deps,
        )
        async def list_by_user(user_id: int = Path(..., ge=1), service=Depends(provider)):
            return ApiResponse.ok(await service.get_by_user_id(user_id))

    @router.get(
        "/{entity_id}",
        response_model=ApiResponse[read_schema],
        summary=f"Get {label}",
        dependencies=read_deps,
    )
    async def get_item(entity_id: int = Path(..., ge=1), service=Depends(provider)):
        item = await service.get_by_id(entity_id)
        if item is None:
            raise not_found(label)
        return ApiResponse.ok(item)

    @router.post(
        "",
        response_model=ApiResponse[read_schema],
        status_code=status.HTTP_201_CREATED,
        summary=f"Create {label}",
        dependencies=write_deps,
    )
    async def create_item(
        payload: create_schema,
        current_user_id: int = Depends(get_current_user_id),
        service=Depends(provider),
    ):
        # Owned records default to the caller.
        if "user_id" in type(payload).model_fields and getattr(payload, "user_id") is None:
            payload = payload.model_copy(update={"user_id": current_user_id})
        return ApiResponse.ok(await service.create(payload), message=f"{label} created")

    @router.put(
        "/{entity_id}",
        response_model=ApiResponse[read_schema],
        summary=f"Update {label}",
        dependencies=[Depends(get_current_user_id)] + write_deps,
    )
    async def update_item(
        payload: update_schema,
        entity_id: int = Path(..., ge=1),
        service=Depends(provider),
    ):
        item = await service.update(entity_id, payload)
        if item is None:
            raise not_found(label)
        return ApiResponse.ok(item, message=f"{label} updated")

    @router.delete(
        "/{entity_id}",
        response_model=ApiResponse[Any],
        summary=f"Delete {label}",
        dependencies=[Depends(get_current_user_id)] + write_deps,
    )
    async def delete_item(entity_id: int = Path(..., ge=1), service=Depends(provider)):
        if not await service.delete(entity_id):
            raise not_found(label)
        return ApiResponse.ok(message=f"{label} deleted")

    return router


# PUBLIC_INTERFACE
def register_public_route(
    router: APIRouter,
    *,
    service_cls: Type[Any],
    read_schema: Type[BaseModel],
    label: str,
) -> APIRouter:
    """Attach GET /user/{user_id}/public listing the user's public records."""
    provider = service_dependency(service_cls)

    @router.get(
        "/user/{user_id}/public",
        response_model=ApiResponse[List[read_schema]],
        summary=f"List public {label} records of a user",
    )
    async def list_public_by_user(user_id: int = Path(..., ge=1), service=Depends(provider)):
        return ApiResponse.ok(await service.get_public_by_user_id(user_id))

    return router
