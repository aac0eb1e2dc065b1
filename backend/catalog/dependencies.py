"""
Library Catalog — Shared Dependencies
======================================

What:  FastAPI dependency providers that assemble a GenreController.
How:   Route handlers declare `controller: GenreControllerDep`; FastAPI
       builds the repositories and renderer and passes them in. Tests swap
       the repository providers through app.dependency_overrides.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from catalog.config import settings
from catalog.controllers.genre_controller import GenreController
from catalog.database import async_session_factory
from catalog.rendering import JinjaRenderer, Renderer
from catalog.repositories.base import BookRepository, GenreRepository
from catalog.repositories.sql import SqlBookRepository, SqlGenreRepository


@lru_cache
def get_renderer() -> Renderer:
    """One Jinja environment per process; it caches compiled templates."""
    return JinjaRenderer(settings.templates_dir)


def get_genre_repository() -> GenreRepository:
    return SqlGenreRepository(async_session_factory)


def get_book_repository() -> BookRepository:
    return SqlBookRepository(async_session_factory)


def get_genre_controller(
    genres: Annotated[GenreRepository, Depends(get_genre_repository)],
    books: Annotated[BookRepository, Depends(get_book_repository)],
    renderer: Annotated[Renderer, Depends(get_renderer)],
) -> GenreController:
    return GenreController(genres=genres, books=books, renderer=renderer)


# Type alias for dependency injection
GenreControllerDep = Annotated[GenreController, Depends(get_genre_controller)]
