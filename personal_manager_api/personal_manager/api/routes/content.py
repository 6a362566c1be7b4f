from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path, status

from personal_manager.core.deps import get_current_user_id, service_dependency
from personal_manager.schemas.common import ApiResponse
from personal_manager.schemas.content import (
    BlogPostCreate,
    BlogPostRead,
    BlogPostUpdate,
    GuestBookEntryCreate,
    GuestBookEntryRead,
    GuestBookEntryUpdate,
)
from personal_manager.services.content import BlogPostService, GuestBookEntryService

from .crud import not_found, register_crud_routes, register_public_route

# --- Blog posts --------------------------------------------------------------

blog_posts_router = APIRouter(prefix="/blogposts", tags=["Blog Posts"])
get_blog_service = service_dependency(BlogPostService)


# PUBLIC_INTERFACE
@blog_posts_router.get(
    "/published",
    response_model=ApiResponse[List[BlogPostRead]],
    summary="List published posts",
    description="Published, public posts, most recently published first.",
)
async def list_published_posts(
    service: BlogPostService = Depends(get_blog_service),
) -> ApiResponse[List[BlogPostRead]]:
    return ApiResponse.ok(await service.get_published())


# PUBLIC_INTERFACE
@blog_posts_router.get(
    "/slug/{slug}",
    response_model=ApiResponse[BlogPostRead],
    summary="Read a post by slug",
    description="Returns the post and counts the read as one view.",
)
async def read_post_by_slug(
    slug: str,
    service: BlogPostService = Depends(get_blog_service),
) -> ApiResponse[BlogPostRead]:
    post = await service.get_by_slug(slug)
    if post is None:
        raise not_found("Blog post")
    viewed = await service.increment_view_count(post.id)
    return ApiResponse.ok(viewed or post)


register_public_route(
    blog_posts_router, service_cls=BlogPostService, read_schema=BlogPostRead, label="Blog post"
)
register_crud_routes(
    blog_posts_router,
    service_cls=BlogPostService,
    create_schema=BlogPostCreate,
    update_schema=BlogPostUpdate,
    read_schema=BlogPostRead,
    label="Blog post",
)

# --- Guestbook ---------------------------------------------------------------
# Visitors post anonymously; entries stay hidden until the owner approves them.

guestbook_router = APIRouter(prefix="/guestbookentries", tags=["Guestbook"])
get_guestbook_service = service_dependency(GuestBookEntryService)


# PUBLIC_INTERFACE
@guestbook_router.get(
    "",
    response_model=ApiResponse[List[GuestBookEntryRead]],
    summary="List approved entries",
)
async def list_approved_entries(
    service: GuestBookEntryService = Depends(get_guestbook_service),
) -> ApiResponse[List[GuestBookEntryRead]]:
    return ApiResponse.ok(await service.get_approved())


# PUBLIC_INTERFACE
@guestbook_router.get(
    "/all",
    response_model=ApiResponse[List[GuestBookEntryRead]],
    summary="List every entry, including unapproved ones",
    dependencies=[Depends(get_current_user_id)],
)
async def list_all_entries(
    service: GuestBookEntryService = Depends(get_guestbook_service),
) -> ApiResponse[List[GuestBookEntryRead]]:
    return ApiResponse.ok(await service.get_all())


# PUBLIC_INTERFACE
@guestbook_router.get(
    "/user/{user_id}",
    response_model=ApiResponse[List[GuestBookEntryRead]],
    summary="List approved entries addressed to a user",
)
async def list_entries_for_user(
    user_id: int = Path(..., ge=1),
    service: GuestBookEntryService = Depends(get_guestbook_service),
) -> ApiResponse[List[GuestBookEntryRead]]:
    return ApiResponse.ok(await service.get_approved_by_target_user_id(user_id))


# PUBLIC_INTERFACE
@guestbook_router.get(
    "/{entity_id}",
    response_model=ApiResponse[GuestBookEntryRead],
    summary="Get entry",
)
async def get_entry(
    entity_id: int = Path(..., ge=1),
    service: GuestBookEntryService = Depends(get_guestbook_service),
) -> ApiResponse[GuestBookEntryRead]:
    entry = await service.get_by_id(entity_id)
    if entry is None:
        raise not_found("Guestbook entry")
    return ApiResponse.ok(entry)


# PUBLIC_INTERFACE
@guestbook_router.post(
    "",
    response_model=ApiResponse[GuestBookEntryRead],
    status_code=status.HTTP_201_CREATED,
    summary="Leave a message",
)
async def create_entry(
    payload: GuestBookEntryCreate,
    service: GuestBookEntryService = Depends(get_guestbook_service),
) -> ApiResponse[GuestBookEntryRead]:
    return ApiResponse.ok(
        await service.create(payload), message="Thank you, your message awaits approval"
    )


# PUBLIC_INTERFACE
@guestbook_router.put(
    "/{entity_id}",
    response_model=ApiResponse[GuestBookEntryRead],
    summary="Approve or reply to an entry",
    dependencies=[Depends(get_current_user_id)],
)
async def moderate_entry(
    payload: GuestBookEntryUpdate,
    entity_id: int = Path(..., ge=1),
    service: GuestBookEntryService = Depends(get_guestbook_service),
) -> ApiResponse[GuestBookEntryRead]:
    entry = await service.update(entity_id, payload)
    if entry is None:
        raise not_found("Guestbook entry")
    return ApiResponse.ok(entry, message="Guestbook entry updated")


# PUBLIC_INTERFACE
@guestbook_router.delete(
    "/{entity_id}",
    summary="Delete entry",
    dependencies=[Depends(get_current_user_id)],
)
async def delete_entry(
    entity_id: int = Path(..., ge=1),
    service: GuestBookEntryService = Depends(get_guestbook_service),
) -> ApiResponse:
    if not await service.delete(entity_id):
        raise not_found("Guestbook entry")
    return ApiResponse.ok(message="Guestbook entry deleted")
