import pytest
from sqlalchemy import func, select

from core.database import Database
from repositories.tables import Section
from repositories.user import create_user
from services.seed_service import DEFAULT_SECTIONS, seed_default_sections


pytestmark = pytest.mark.anyio


@pytest.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'seed.db'}")
    await db.create_tables()
    yield db
    await db.dispose()


async def count_sections(database):
    async with database.session() as session:
        result = await session.execute(select(func.count()).select_from(Section))
        return result.scalar_one()


async def test_seed_skips_without_users(database):
    assert await seed_default_sections(database) == []
    assert await count_sections(database) == 0


async def test_seed_inserts_missing_sections_once(database):
    async with database.session() as session:
        await create_user(session, {"email": "owner@example.com", "firebase_uid": "uid-owner", "role": "admin"})

    inserted = await seed_default_sections(database)
    assert inserted == [section["name"] for section in DEFAULT_SECTIONS]
    assert len(inserted) == 7

    assert await seed_default_sections(database) == []
    assert await count_sections(database) == 7


async def test_seed_leaves_existing_sections_untouched(database):
    async with database.session() as session:
        owner = await create_user(session, {"email": "owner@example.com", "firebase_uid": "uid-owner", "role": "admin"})
        session.add(Section(name="hero-section", title="Custom", author_id=owner.id))
        await session.commit()

    inserted = await seed_default_sections(database)
    assert "hero-section" not in inserted

    async with database.session() as session:
        hero = (await session.execute(select(Section).where(Section.name == "hero-section"))).scalar_one()
        assert hero.title == "Custom"
        assert hero.metadata_ == {}
