import pytest
import pytest_asyncio

from personal_manager.db.config import Settings
from personal_manager.db.session import build_engine, build_session_maker, create_tables
from personal_manager.entities import Skill, SkillLevel, TodoItem, TodoStatus
from personal_manager.repositories import EntityNotFoundError, SqlRepository


@pytest_asyncio.fixture()
async def session_maker(tmp_path):
    """Temporary SQLite database with every table created."""
    db_settings = Settings(_env_file=None, DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}")
    engine = build_engine(db_settings)
    await create_tables(engine)
    yield build_session_maker(engine)
    await engine.dispose()


@pytest.mark.asyncio
async def test_add_and_get_round_trip(session_maker):
    repo = SqlRepository(Skill, session_maker)
    stored = await repo.add(Skill(user_id=3, name="SQL", level=SkillLevel.ADVANCED))

    assert stored.id == 1
    fetched = await repo.get_by_id(1)
    assert fetched.name == "SQL"
    assert fetched.level is SkillLevel.ADVANCED
    assert fetched.created_at.tzinfo is not None


@pytest.mark.asyncio
async def test_deleted_id_is_not_reused(session_maker):
    repo = SqlRepository(Skill, session_maker)
    for name in ("a", "b", "c"):
        await repo.add(Skill(user_id=1, name=name))

    assert await repo.delete(3) is True
    assert await repo.delete(3) is False
    assert (await repo.add(Skill(user_id=1, name="d"))).id == 4


@pytest.mark.asyncio
async def test_update_missing_raises(session_maker):
    repo = SqlRepository(TodoItem, session_maker)
    with pytest.raises(EntityNotFoundError):
        await repo.update(TodoItem(id=12, user_id=1, title="nope"))
    assert await repo.get_all() == []


@pytest.mark.asyncio
async def test_update_and_find(session_maker):
    repo = SqlRepository(TodoItem, session_maker)
    first = await repo.add(TodoItem(user_id=1, title="write tests"))
    await repo.add(TodoItem(user_id=2, title="other user"))

    first.status = TodoStatus.COMPLETED
    updated = await repo.update(first)
    assert updated.status is TodoStatus.COMPLETED
    assert updated.created_at == first.created_at

    done = await repo.find(lambda t: t.status == TodoStatus.COMPLETED)
    assert [t.id for t in done] == [first.id]


@pytest.mark.asyncio
async def test_factory_picks_backend_and_shares_instances(settings, session_maker):
    from personal_manager.repositories import JsonRepository, RepositoryFactory

    json_factory = RepositoryFactory(settings)
    assert isinstance(json_factory.get(Skill), JsonRepository)
    assert json_factory.get(Skill) is json_factory.get(Skill)

    sql_settings = settings.model_copy(update={"STORAGE_BACKEND": "sql"})
    sql_factory = RepositoryFactory(sql_settings, session_maker=session_maker)
    repo = sql_factory.get(Skill)
    assert isinstance(repo, SqlRepository)
    assert repo is sql_factory.get(Skill)
    assert (await repo.add(Skill(user_id=1, name="shared"))).id == 1
