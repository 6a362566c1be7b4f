from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import List, Optional

from personal_manager.entities import BlogPost, BlogPostStatus, GuestBookEntry, utcnow
from personal_manager.schemas.content import (
    BlogPostCreate,
    BlogPostRead,
    BlogPostUpdate,
    GuestBookEntryCreate,
    GuestBookEntryRead,
    GuestBookEntryUpdate,
)

from .base import EntityCrudService, apply_patch

# \w is Unicode-aware, so CJK characters survive.
_SLUG_STRIP = re.compile(r"[^\w\-]+")
_SLUG_DASHES = re.compile(r"-{2,}")

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


# PUBLIC_INTERFACE
def slugify(title: str) -> str:
    """Turn a title into a URL slug: lower-case words joined by single dashes."""
    slug = title.lower().strip().replace(" ", "-")
    slug = _SLUG_STRIP.sub("", slug).replace("_", "-")
    slug = _SLUG_DASHES.sub("-", slug)
    return slug.strip("-")


class BlogPostService(EntityCrudService[BlogPost, BlogPostCreate, BlogPostUpdate, BlogPostRead]):
    """Blog posts with generated slugs and publication stamping."""

    entity_type = BlogPost
    read_schema = BlogPostRead

    def map_to_entity(self, dto: BlogPostCreate) -> BlogPost:
        entity = super().map_to_entity(dto)
        entity.slug = slugify(entity.title)
        if entity.status == BlogPostStatus.PUBLISHED:
            entity.published_at = utcnow()
        return entity

    def apply_update(self, entity: BlogPost, patch: BlogPostUpdate) -> BlogPost:
        updated = apply_patch(entity, patch)
        if patch.title is not None and patch.title != entity.title:
            updated.slug = slugify(updated.title)
        if (
            entity.status != BlogPostStatus.PUBLISHED
            and updated.status == BlogPostStatus.PUBLISHED
            and updated.published_at is None
        ):
            updated.published_at = utcnow()
        return updated

    @staticmethod
    def _newest_first(items: List[BlogPost]) -> List[BlogPost]:
        return sorted(items, key=lambda p: p.created_at, reverse=True)

    # PUBLIC_INTERFACE
    async def get_by_user_id(self, user_id: int) -> List[BlogPostRead]:
        return self._map_all(self._newest_first(await self._find(lambda p: p.user_id == user_id)))

    # PUBLIC_INTERFACE
    async def get_public_by_user_id(self, user_id: int) -> List[BlogPostRead]:
        items = await self._find(
            lambda p: p.user_id == user_id
            and p.status == BlogPostStatus.PUBLISHED
            and p.is_public
        )
        return self._map_all(self._newest_first(items))

    # PUBLIC_INTERFACE
    async def get_published(self) -> List[BlogPostRead]:
        """Published public posts, most recently published first."""
        items = await self._find(
            lambda p: p.status == BlogPostStatus.PUBLISHED and p.is_public
        )
        items.sort(key=lambda p: p.published_at or _OLDEST, reverse=True)
        return self._map_all(items)

    # PUBLIC_INTERFACE
    async def get_by_slug(self, slug: str) -> Optional[BlogPostRead]:
        found = await self._find(lambda p: p.slug == slug)
        return self.map_to_response(found[0]) if found else None

    # PUBLIC_INTERFACE
    async def increment_view_count(self, entity_id: int) -> Optional[BlogPostRead]:
        entity = await self.repository.get_by_id(entity_id)
        if entity is None:
            return None
        entity.view_count += 1
        return self.map_to_response(await self.repository.update(entity))


class GuestBookEntryService(
    EntityCrudService[GuestBookEntry, GuestBookEntryCreate, GuestBookEntryUpdate, GuestBookEntryRead]
):
    entity_type = GuestBookEntry
    read_schema = GuestBookEntryRead

    def map_to_entity(self, dto: GuestBookEntryCreate) -> GuestBookEntry:
        # New entries always wait for moderation.
        return GuestBookEntry(
            name=dto.name,
            email=str(dto.email),
            message=dto.message,
            target_user_id=dto.target_user_id,
        )

    @staticmethod
    def _newest_first(items: List[GuestBookEntry]) -> List[GuestBookEntry]:
        return sorted(items, key=lambda g: g.created_at, reverse=True)

    # PUBLIC_INTERFACE
    async def get_approved(self) -> List[GuestBookEntryRead]:
        return self._map_all(self._newest_first(await self._find(lambda g: g.is_approved)))

    # PUBLIC_INTERFACE
    async def get_approved_by_target_user_id(self, user_id: int) -> List[GuestBookEntryRead]:
        items = await self._find(lambda g: g.is_approved and g.target_user_id == user_id)
        return self._map_all(self._newest_first(items))
