import os
from typing import AsyncGenerator, Dict

# Settings are read at import time; point them at SQLite before the app loads
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import classroom.auth.models  # noqa: F401
import classroom.core.models  # noqa: F401
from classroom.auth.models import User
from classroom.auth.schemas import CurrentUser
from classroom.auth.security import hash_password
from classroom.db.session import Base, get_db
from classroom.main import app


TEST_DATABASE_URL = "sqlite+aiosqlite://"
TEST_PASSWORD = "Secret123"

# bcrypt is slow; hash once and reuse for every fixture user
_PASSWORD_HASH = hash_password(TEST_PASSWORD)


@pytest.fixture()
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory SQLite database per test. StaticPool keeps one shared connection."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
async def db_session(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """Session for direct service calls, and override for the FastAPI dependency."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as request_session:
            yield request_session

    app.dependency_overrides[get_db] = override_get_db
    async with session_factory() as session:
        yield session
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture()
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the FastAPI app. Keeps the session cookie between calls."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def _make_user(db: AsyncSession, email: str, role: str, first_name: str) -> User:
    user = User(
        email=email,
        password_hash=_PASSWORD_HASH,
        first_name=first_name,
        last_name="Tester",
        role=role,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest.fixture()
async def users(db_session: AsyncSession) -> Dict[str, User]:
    return {
        "admin": await _make_user(db_session, "admin@example.com", "admin", "Ada"),
        "lecturer": await _make_user(db_session, "lecturer@example.com", "lecturer", "Lena"),
        "other_lecturer": await _make_user(db_session, "other.lecturer@example.com", "lecturer", "Otto"),
        "student": await _make_user(db_session, "student@example.com", "student", "Sam"),
        "other_student": await _make_user(db_session, "other.student@example.com", "student", "Sara"),
    }


async def login_as(client: AsyncClient, user: User) -> None:
    response = await client.post("/api/auth/login", json={"email": user.email, "password": TEST_PASSWORD})
    assert response.status_code == 200, response.text


def as_current_user(user: User) -> CurrentUser:
    return CurrentUser(
        id=user.id,
        email=user.email,
        role=user.role,
        first_name=user.first_name,
        last_name=user.last_name,
    )
