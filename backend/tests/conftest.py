"""
Library Catalog — Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.

Fixture Hierarchy (all function-scoped):
    ├── genre_repo / book_repo: in-memory repositories
    ├── renderer: RecordingRenderer (template id + view model per call)
    ├── controller: GenreController wired to the three above
    ├── session_factory: async SQLAlchemy sessions on a temp SQLite file
    └── test_client: HTTPX AsyncClient over the real app, in-memory repos
"""

import os
import tempfile

# Override settings for testing BEFORE any catalog imports; catalog.config
# builds its settings singleton at import time
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(prefix="catalog_test_"), "test.db")
)
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine

import catalog.models  # noqa: F401  (registers tables on Base.metadata)
from catalog.controllers.genre_controller import GenreController
from catalog.database import Base, build_session_factory
from tests.fakes import InMemoryBookRepository, InMemoryGenreRepository, RecordingRenderer


@pytest.fixture
def genre_repo():
    return InMemoryGenreRepository()


@pytest.fixture
def book_repo(genre_repo):
    return InMemoryBookRepository(genre_repo)


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def controller(genre_repo, book_repo, renderer):
    return GenreController(genres=genre_repo, books=book_repo, renderer=renderer)


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """
    Session factory bound to a fresh SQLite database file.

    A file (not :memory:) so concurrent sessions get separate connections,
    as they would on PostgreSQL.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield build_session_factory(engine)
    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(genre_repo, book_repo):
    """
    HTTPX AsyncClient talking to the real app with in-memory repositories.

    raise_app_exceptions=False lets the catch-all 500 handler's response
    reach the test instead of the re-raised exception.
    """
    from catalog.dependencies import get_book_repository, get_genre_repository
    from catalog.main import app

    app.dependency_overrides[get_genre_repository] = lambda: genre_repo
    app.dependency_overrides[get_book_repository] = lambda: book_repo
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
