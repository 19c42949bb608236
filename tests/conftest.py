import asyncio
import os
import uuid
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

# IMPORTANT:
# Set env vars BEFORE importing app.settings/app.main (pydantic settings load at import time)
os.environ["ENV"] = "test"
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_friendships.db")
os.environ.setdefault("CORS_ORIGINS", "http://localhost:5173")

from app.main import app as fastapi_app  # noqa: E402
from app.db.base_class import Base  # noqa: E402
import app.db.base  # noqa: F401,E402  (register models)
from app.db.session import engine, AsyncSessionLocal, get_db_session  # noqa: E402
from app.services import users as user_collection  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def _drop_test_schema():
    yield

    async def _drop():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await engine.dispose()

    asyncio.run(_drop())
    if engine.url.get_backend_name() == "sqlite" and engine.url.database:
        Path(engine.url.database).unlink(missing_ok=True)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def db_session(anyio_backend):
    # Fresh schema per test so friendship listings never leak between cases.
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
async def client(db_session):
    """
    Overrides app.db.session.get_db_session so routes and the test body
    share one session.
    """

    async def _override_get_db_session():
        yield db_session

    fastapi_app.dependency_overrides[get_db_session] = _override_get_db_session

    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    fastapi_app.dependency_overrides.pop(get_db_session, None)


def _unique(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:10]}"


@pytest.fixture
def unique_str():
    return _unique


@pytest.fixture
def user_factory(db_session, unique_str):
    async def _create(*, username: str | None = None, display_name: str | None = None):
        username = username or unique_str("user")
        user = await user_collection.add_one(
            db_session,
            email=f"{username}@example.com",
            username=username,
            display_name=display_name or username.upper(),
        )
        await db_session.commit()
        return user

    return _create
