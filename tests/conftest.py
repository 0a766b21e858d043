import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from groupsplit.main import app
from groupsplit.db.session import Base, get_db


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def client(engine):
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_person(client):
    async def _make(name, email=None):
        resp = await client.post("/api/v1/persons/", json={"name": name, "email": email})
        assert resp.status_code == 201, resp.text
        return resp.json()["id"]
    return _make


@pytest.fixture
def make_group(client):
    async def _make(name, member_ids):
        resp = await client.post("/api/v1/groups/", json={"name": name, "member_ids": member_ids})
        assert resp.status_code == 201, resp.text
        return resp.json()["id"]
    return _make
