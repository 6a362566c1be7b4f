from datetime import datetime, timedelta, timezone

import pytest

from personal_manager.entities import (
    BlogPost,
    BlogPostStatus,
    CalendarEvent,
    GuestBookEntry,
    Portfolio,
    Profile,
    TodoItem,
    TodoPriority,
    TodoStatus,
    User,
    WorkTask,
    WorkTaskPriority,
    WorkTaskStatus,
)
from personal_manager.schemas.auth import UserCreate, UserUpdate
from personal_manager.schemas.content import (
    BlogPostCreate,
    BlogPostUpdate,
    GuestBookEntryCreate,
    GuestBookEntryUpdate,
)
from personal_manager.schemas.planner import (
    CalendarEventCreate,
    TodoItemCreate,
    TodoItemUpdate,
    WorkTaskCreate,
    WorkTaskUpdate,
)
from personal_manager.schemas.portfolio import PortfolioCreate, ProfileCreate
from personal_manager.services.accounts import UserService
from personal_manager.services.content import BlogPostService, GuestBookEntryService, slugify
from personal_manager.services.planner import (
    CalendarEventService,
    TodoItemService,
    WorkTaskService,
)
from personal_manager.services.portfolio import PortfolioService, ProfileService

T0 = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "title, expected",
    [
        ("Hello World", "hello-world"),
        ("Hello, World!  Again", "hello-world-again"),
        ("  --Trim me-- ", "trim-me"),
        ("你好 世界", "你好-世界"),
        ("C# and .NET 8", "c-and-net-8"),
    ],
)
def test_slugify(title, expected):
    assert slugify(title) == expected


@pytest.mark.asyncio
async def test_blog_slug_and_publication_stamping(factory):
    service = BlogPostService(factory.get(BlogPost))

    draft = await service.create(BlogPostCreate(user_id=1, title="First Post"))
    assert draft.slug == "first-post"
    assert draft.published_at is None

    renamed = await service.update(draft.id, BlogPostUpdate(title="Better Title"))
    assert renamed.slug == "better-title"

    published = await service.update(draft.id, BlogPostUpdate(status=BlogPostStatus.PUBLISHED))
    assert published.published_at is not None
    assert published.slug == "better-title"

    # Re-publishing keeps the first publication time.
    await service.update(draft.id, BlogPostUpdate(status=BlogPostStatus.DRAFT))
    again = await service.update(draft.id, BlogPostUpdate(status=BlogPostStatus.PUBLISHED))
    assert again.published_at == published.published_at

    direct = await service.create(
        BlogPostCreate(user_id=1, title="Straight Out", status=BlogPostStatus.PUBLISHED)
    )
    assert direct.published_at is not None


@pytest.mark.asyncio
async def test_blog_published_listing_slug_lookup_and_views(factory):
    service = BlogPostService(factory.get(BlogPost))
    await service.create(BlogPostCreate(user_id=1, title="Draft"))
    hidden = await service.create(
        BlogPostCreate(user_id=1, title="Hidden", status=BlogPostStatus.PUBLISHED, is_public=False)
    )
    shown = await service.create(
        BlogPostCreate(user_id=1, title="Shown", status=BlogPostStatus.PUBLISHED)
    )

    assert [p.id for p in await service.get_published()] == [shown.id]
    assert (await service.get_by_slug("hidden")).id == hidden.id
    assert await service.get_by_slug("missing") is None

    await service.increment_view_count(shown.id)
    viewed = await service.increment_view_count(shown.id)
    assert viewed.view_count == 2
    assert await service.increment_view_count(999) is None


@pytest.mark.asyncio
async def test_blog_public_listing_of_user_skips_unpublished(factory):
    service = BlogPostService(factory.get(BlogPost))
    await service.create(BlogPostCreate(user_id=1, title="Secret draft"))
    await service.create(
        BlogPostCreate(user_id=1, title="Old news", status=BlogPostStatus.ARCHIVED)
    )
    live = await service.create(
        BlogPostCreate(user_id=1, title="Live", status=BlogPostStatus.PUBLISHED)
    )
    await service.create(
        BlogPostCreate(user_id=2, title="Elsewhere", status=BlogPostStatus.PUBLISHED)
    )

    assert [p.id for p in await service.get_public_by_user_id(1)] == [live.id]
    assert len(await service.get_by_user_id(1)) == 3


@pytest.mark.asyncio
async def test_todo_completion_is_stamped_once(factory):
    service = TodoItemService(factory.get(TodoItem))
    todo = await service.create(TodoItemCreate(user_id=1, title="ship it"))
    assert todo.completed_at is None

    done = await service.update(todo.id, TodoItemUpdate(status=TodoStatus.COMPLETED))
    assert done.completed_at is not None

    retitled = await service.update(todo.id, TodoItemUpdate(title="shipped"))
    assert retitled.completed_at == done.completed_at

    supplied = await service.create(TodoItemCreate(user_id=1, title="other"))
    explicit = await service.update(
        supplied.id, TodoItemUpdate(status=TodoStatus.COMPLETED, completed_at=T0)
    )
    assert explicit.completed_at == T0


@pytest.mark.asyncio
async def test_todo_ordering_priority_then_due_date(factory):
    service = TodoItemService(factory.get(TodoItem))
    await service.create(TodoItemCreate(user_id=1, title="high-undated", priority=TodoPriority.HIGH))
    await service.create(
        TodoItemCreate(user_id=1, title="high-dated", priority=TodoPriority.HIGH, due_date=T0)
    )
    await service.create(
        TodoItemCreate(user_id=1, title="low", priority=TodoPriority.LOW, due_date=T0 - timedelta(days=3))
    )
    await service.create(TodoItemCreate(user_id=1, title="medium"))
    await service.create(TodoItemCreate(user_id=2, title="someone else", priority=TodoPriority.HIGH))

    titles = [t.title for t in await service.get_by_user_id(1)]
    assert titles == ["high-dated", "high-undated", "medium", "low"]

    pending = await service.get_by_status(1, TodoStatus.PENDING)
    assert len(pending) == 4
    assert await service.get_by_status(1, TodoStatus.COMPLETED) == []


@pytest.mark.asyncio
async def test_work_task_queries_and_completion(factory):
    service = WorkTaskService(factory.get(WorkTask))
    a = await service.create(
        WorkTaskCreate(user_id=1, title="api", project="site", priority=WorkTaskPriority.LOW)
    )
    await service.create(
        WorkTaskCreate(user_id=1, title="ui", project="site", priority=WorkTaskPriority.URGENT)
    )
    await service.create(WorkTaskCreate(user_id=1, title="taxes", project="home"))

    assert [t.title for t in await service.get_by_project(1, "site")] == ["ui", "api"]

    done = await service.update(a.id, WorkTaskUpdate(status=WorkTaskStatus.COMPLETED, actual_hours=3.5))
    assert done.completed_at is not None
    assert done.actual_hours == 3.5
    assert [t.id for t in await service.get_by_status(1, WorkTaskStatus.COMPLETED)] == [a.id]


@pytest.mark.asyncio
async def test_calendar_range_and_public_listing(factory):
    service = CalendarEventService(factory.get(CalendarEvent))
    inside = await service.create(
        CalendarEventCreate(
            user_id=1, title="inside", start_time=T0, end_time=T0 + timedelta(hours=1), is_public=True
        )
    )
    await service.create(
        CalendarEventCreate(
            user_id=1,
            title="spills over",
            start_time=T0 + timedelta(hours=23),
            end_time=T0 + timedelta(days=2),
        )
    )
    early = await service.create(
        CalendarEventCreate(
            user_id=1, title="early", start_time=T0 - timedelta(hours=2), end_time=T0 - timedelta(hours=1)
        )
    )

    window = await service.get_by_date_range(1, T0, T0 + timedelta(days=1))
    assert [e.id for e in window] == [inside.id]
    assert [e.id for e in await service.get_by_user_id(1)][0] == early.id
    assert [e.id for e in await service.get_public_by_user_id(1)] == [inside.id]


def test_calendar_create_rejects_inverted_range():
    with pytest.raises(ValueError):
        CalendarEventCreate(title="bad", start_time=T0, end_time=T0 - timedelta(minutes=1))


@pytest.mark.asyncio
async def test_guestbook_moderation(factory):
    service = GuestBookEntryService(factory.get(GuestBookEntry))
    first = await service.create(
        GuestBookEntryCreate(name="Bob", email="bob@example.com", message="Hi!", target_user_id=1)
    )
    await service.create(GuestBookEntryCreate(name="Eve", email="eve@example.com", message="Hello"))
    assert first.is_approved is False
    assert await service.get_approved() == []

    approved = await service.update(first.id, GuestBookEntryUpdate(is_approved=True, admin_reply="Thanks"))
    assert approved.admin_reply == "Thanks"
    assert approved.message == "Hi!"
    assert [e.id for e in await service.get_approved()] == [first.id]
    assert [e.id for e in await service.get_approved_by_target_user_id(1)] == [first.id]
    assert await service.get_approved_by_target_user_id(2) == []


@pytest.mark.asyncio
async def test_profile_and_featured_portfolios(factory):
    profiles = ProfileService(factory.get(Profile))
    assert await profiles.get_by_user_id(1) is None
    created = await profiles.create(ProfileCreate(user_id=1, title="Engineer"))
    assert (await profiles.get_by_user_id(1)).id == created.id
    assert created.theme_color == "blue"

    portfolios = PortfolioService(factory.get(Portfolio))
    await portfolios.create(PortfolioCreate(user_id=1, title="Hidden gem", is_featured=True, is_public=False))
    star = await portfolios.create(PortfolioCreate(user_id=1, title="Star", is_featured=True))
    await portfolios.create(PortfolioCreate(user_id=1, title="Plain"))
    assert [p.id for p in await portfolios.get_featured(1)] == [star.id]


@pytest.mark.asyncio
async def test_user_service_hashes_and_hides_password(factory):
    service = UserService(factory.get(User))
    created = await service.create(
        UserCreate(username="carol", email="carol@example.com", password="Secret123", role="Admin")
    )
    assert not hasattr(created, "password_hash")
    assert created.role == "Admin"

    stored = await factory.get(User).get_by_id(created.id)
    assert stored.password_hash and stored.password_hash != "Secret123"

    updated = await service.update(created.id, UserUpdate(is_active=False, full_name="Carol C"))
    assert updated.is_active is False
    assert updated.full_name == "Carol C"
    assert (await factory.get(User).get_by_id(created.id)).password_hash == stored.password_hash
    assert (await service.get_by_username("carol")).id == created.id
