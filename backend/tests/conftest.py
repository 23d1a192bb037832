"""Shared fixtures.

Testing strategy:
1. Database: a throwaway SQLite file per session (aiosqlite), tables rebuilt per test
2. Authentication: single-user mode by default; API tests can opt into header
   mode through the indirect `auth_mode` parameter
3. HTTP: httpx.AsyncClient over ASGITransport, no network
"""

import os
import tempfile
from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path
from uuid import UUID, uuid4


_TEST_DB_DIR = Path(tempfile.mkdtemp(prefix="academy-tests-"))

# Must be set before anything imports academy settings
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR / 'academy.db'}"
os.environ["ENVIRONMENT"] = "test"
os.environ["AUTH_PROVIDER"] = "none"
os.environ["RECOMMENDATION_TRACK"] = "WEB"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from academy.auth.config import DEFAULT_USER_ID  # noqa: E402
from academy.config.settings import get_settings  # noqa: E402
from academy.curriculum.models import CurriculumLesson, CurriculumModule, LessonPrerequisite  # noqa: E402
from academy.database.engine import engine  # noqa: E402
from academy.database.init import drop_database, init_database  # noqa: E402
from academy.database.session import async_session_maker  # noqa: E402
from academy.main import app  # noqa: E402
from tests.fixtures.auth_modes import AuthMode, ModeAwareClient  # noqa: E402


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[None, None]:
    """Create all tables for one test and drop them afterwards."""
    await init_database(engine)
    yield
    await drop_database(engine)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(database: None) -> AsyncGenerator[AsyncSession, None]:
    async with async_session_maker() as session:
        yield session


@pytest.fixture
def auth_mode(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> AuthMode:
    """Switch AUTH_PROVIDER for one test. Parametrize indirectly to pick a mode."""
    mode = getattr(request, "param", AuthMode.SINGLE_USER)
    provider = "header" if mode == AuthMode.MULTI_USER else "none"
    monkeypatch.setattr(get_settings(), "AUTH_PROVIDER", provider)
    return mode


@pytest_asyncio.fixture
async def client_factory(
    database: None, auth_mode: AuthMode
) -> AsyncGenerator[Callable[..., Awaitable[ModeAwareClient]], None]:
    """Build API clients bound to the in-process app.

    In multi-user mode every client gets its own learner id unless one is given.
    """
    clients: list[ModeAwareClient] = []

    async def _factory(user_id: UUID | None = None) -> ModeAwareClient:
        headers: dict[str, str] = {}
        if auth_mode == AuthMode.MULTI_USER:
            expected_user_id = user_id or uuid4()
            headers[get_settings().AUTH_USER_HEADER] = str(expected_user_id)
        else:
            expected_user_id = DEFAULT_USER_ID

        client = ModeAwareClient(
            expected_user_id=expected_user_id,
            transport=ASGITransport(app=app),
            base_url="http://test",
            headers=headers,
        )
        clients.append(client)
        return client

    yield _factory

    for client in clients:
        await client.aclose()


@pytest_asyncio.fixture
async def web_module(db_session: AsyncSession) -> CurriculumModule:
    module = CurriculumModule(
        slug="web-basics",
        title="Web Basics",
        description="HTML, CSS and the browser",
        track="WEB",
        order_index=1,
        published=True,
    )
    db_session.add(module)
    await db_session.commit()
    return module


@pytest.fixture
def add_lesson(
    db_session: AsyncSession, web_module: CurriculumModule
) -> Callable[..., Awaitable[CurriculumLesson]]:
    """Insert a published lesson into the web module (or another module)."""

    async def _add(
        slug: str,
        *,
        order_index: int = 0,
        tags: list[str] | None = None,
        published: bool = True,
        module: CurriculumModule | None = None,
        requires: list[CurriculumLesson] | None = None,
    ) -> CurriculumLesson:
        lesson = CurriculumLesson(
            module_id=(module or web_module).id,
            slug=slug,
            title=slug.replace("-", " ").title(),
            summary=f"Lesson {slug}",
            order_index=order_index,
            tags=tags or [],
            published=published,
        )
        db_session.add(lesson)
        await db_session.flush()
        for prerequisite in requires or []:
            db_session.add(LessonPrerequisite(lesson_id=lesson.id, prerequisite_lesson_id=prerequisite.id))
        await db_session.commit()
        return lesson

    return _add
