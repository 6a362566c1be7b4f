import asyncio
import json

import pytest

from personal_manager.entities import BlogPost, Profile, Skill, SkillLevel, User
from personal_manager.repositories import (
    EntityNotFoundError,
    JsonRepository,
    RepositoryError,
    file_name_for,
)


@pytest.fixture()
def skills(data_dir):
    return JsonRepository(Skill, data_dir)


def test_file_names_follow_collection_table():
    assert file_name_for(Profile) == "personalProfiles.json"
    assert file_name_for(User) == "users.json"
    assert file_name_for(BlogPost) == "blogPosts.json"

    class Widget:
        pass

    assert file_name_for(Widget) == "widgets.json"


@pytest.mark.asyncio
async def test_missing_file_is_an_empty_collection(skills):
    assert await skills.get_all() == []
    assert await skills.get_by_id(1) is None
    assert not skills.file_path.exists()


@pytest.mark.asyncio
async def test_sequential_adds_get_increasing_ids_from_one(skills):
    ids = [(await skills.add(Skill(user_id=1, name=f"skill-{i}"))).id for i in range(3)]
    assert ids == [1, 2, 3]


@pytest.mark.asyncio
async def test_add_stamps_timestamps_and_ignores_caller_id(skills):
    stored = await skills.add(Skill(id=99, user_id=1, name="Python"))
    assert stored.id == 1
    assert stored.created_at == stored.updated_at
    assert stored.created_at.tzinfo is not None


@pytest.mark.asyncio
async def test_deleted_id_is_not_reused(skills, data_dir):
    for name in ("a", "b", "c"):
        await skills.add(Skill(user_id=1, name=name))

    assert await skills.delete(3) is True
    assert await skills.get_by_id(3) is None

    again = await skills.add(Skill(user_id=1, name="d"))
    assert again.id == 4

    assert await skills.delete(4) is True

    # A fresh repository over the same directory stands in for a restart.
    reopened = JsonRepository(Skill, data_dir)
    assert reopened.meta_path.exists()
    after_restart = await reopened.add(Skill(user_id=1, name="e"))
    assert after_restart.id == 5


@pytest.mark.asyncio
async def test_delete_missing_returns_false_without_writing(skills):
    assert await skills.delete(42) is False
    assert not skills.file_path.exists()


@pytest.mark.asyncio
async def test_update_missing_raises_and_leaves_file_untouched(skills):
    await skills.add(Skill(user_id=1, name="Python"))
    before = skills.file_path.read_text(encoding="utf-8")

    with pytest.raises(EntityNotFoundError):
        await skills.update(Skill(id=7, user_id=1, name="Ghost"))

    assert skills.file_path.read_text(encoding="utf-8") == before


@pytest.mark.asyncio
async def test_update_refreshes_updated_at_and_keeps_created_at(skills):
    stored = await skills.add(Skill(user_id=1, name="Python"))
    stored.name = "Python 3"
    updated = await skills.update(stored)

    assert updated.name == "Python 3"
    assert updated.created_at == stored.created_at
    assert updated.updated_at >= stored.updated_at
    assert (await skills.get_by_id(stored.id)).name == "Python 3"


@pytest.mark.asyncio
async def test_returned_entities_are_copies(skills):
    stored = await skills.add(Skill(user_id=1, name="Python"))
    stored.name = "changed locally"

    fetched = await skills.get_by_id(stored.id)
    assert fetched.name == "Python"

    everything = await skills.get_all()
    everything[0].name = "also local"
    assert (await skills.get_by_id(stored.id)).name == "Python"


@pytest.mark.asyncio
async def test_find_filters_with_predicate(skills):
    await skills.add(Skill(user_id=1, name="Python", category="Backend"))
    await skills.add(Skill(user_id=2, name="Go", category="Backend"))
    await skills.add(Skill(user_id=1, name="CSS", category="Frontend"))

    found = await skills.find(lambda s: s.user_id == 1 and s.category == "Backend")
    assert [s.name for s in found] == ["Python"]


@pytest.mark.asyncio
async def test_reload_from_disk_yields_identical_entities(skills, data_dir):
    await skills.add(Skill(user_id=1, name="Python", level=SkillLevel.EXPERT, years_of_experience=8))
    await skills.add(Skill(user_id=1, name="Rust", level=SkillLevel.BEGINNER))

    fresh = JsonRepository(Skill, data_dir)
    assert await fresh.get_all() == await skills.get_all()


@pytest.mark.asyncio
async def test_file_is_indented_array_with_enum_strings_and_unicode(skills):
    await skills.add(Skill(user_id=1, name="中文写作", level=SkillLevel.ADVANCED))

    text = skills.file_path.read_text(encoding="utf-8")
    assert "中文写作" in text
    assert text.startswith("[\n  {")
    raw = json.loads(text)
    assert raw[0]["level"] == "Advanced"
    assert raw[0]["user_id"] == 1


@pytest.mark.asyncio
async def test_pascal_case_records_load(data_dir):
    data_dir.mkdir(parents=True)
    (data_dir / "skills.json").write_text(
        json.dumps(
            [
                {
                    "Id": 5,
                    "UserId": 2,
                    "Name": "C#",
                    "Level": "Expert",
                    "YearsOfExperience": 10,
                    "IsPublic": False,
                    "CreatedAt": "2024-01-01T00:00:00",
                    "SomethingElse": "ignored",
                }
            ]
        ),
        encoding="utf-8",
    )

    repo = JsonRepository(Skill, data_dir)
    skill = await repo.get_by_id(5)
    assert skill.user_id == 2
    assert skill.level is SkillLevel.EXPERT
    assert skill.years_of_experience == 10
    assert skill.is_public is False
    assert skill.created_at.tzinfo is not None

    # Next id continues after the highest loaded one.
    assert (await repo.add(Skill(user_id=2, name="F#"))).id == 6


@pytest.mark.asyncio
async def test_non_array_file_is_rejected(data_dir):
    data_dir.mkdir(parents=True)
    (data_dir / "skills.json").write_text('{"Id": 1}', encoding="utf-8")

    with pytest.raises(RepositoryError):
        await JsonRepository(Skill, data_dir).get_all()


@pytest.mark.asyncio
async def test_concurrent_adds_get_distinct_ids(skills):
    added = await asyncio.gather(
        *(skills.add(Skill(user_id=1, name=f"s{i}")) for i in range(20))
    )
    ids = sorted(s.id for s in added)
    assert ids == list(range(1, 21))
    assert len(json.loads(skills.file_path.read_text(encoding="utf-8"))) == 20
