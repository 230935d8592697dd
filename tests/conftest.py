"""
Shared fixtures: a fresh in-memory SQLite schema per test, a session on
it, and an HTTP client whose get_db dependency uses the same database.
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401  registers tables on Base.metadata
from app.db.database import Base, get_db
from app.main import app as fastapi_app
from app.services.identity_service import IdentityService
from app.services.quiz_service import QuizService
from tests.factories import make_draft


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    fastapi_app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def author(db):
    return await IdentityService(db).resolve("Author")


@pytest.fixture
async def taker(db):
    return await IdentityService(db).resolve("Taker")


@pytest.fixture
async def capitals_quiz(db, author):
    quiz = await QuizService(db).create_quiz(author.id, make_draft())
    return await QuizService(db).get_quiz(quiz.id)
