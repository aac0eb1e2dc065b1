"""
Library Catalog — SQLAlchemy Repositories
==========================================

What:  GenreRepository and BookRepository over async SQLAlchemy.
How:   Each call opens its own session from the shared session factory.
       Reads use a plain session; writes run inside session.begin() so they
       commit on success and roll back on error.

Query plans:
    list_by_name:        SELECT * FROM genres ORDER BY name
    find_by_name:        SELECT ... WHERE lower(name) = lower(:name)
                         → served by uq_genres_name_lower
    summaries_for_genre: SELECT books.id, title, summary FROM books
                         JOIN book_genres ... WHERE genre_id = :id
                         → served by ix_book_genres_genre_id

Error translation:
    SQLAlchemyError → DatabaseError (details logged, never shown)
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog.exceptions import DatabaseError
from catalog.models.book import Book, book_genres
from catalog.models.genre import Genre
from catalog.repositories.base import BookRepository, GenreRepository
from catalog.schemas.genre import BookRecord, BookSummary, GenreRecord

logger = logging.getLogger(__name__)


def parse_id(value: str) -> Optional[uuid.UUID]:
    """Interpret an opaque id; None if it cannot name any stored record."""
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


class _SqlRepository:
    """Shared session handling for the SQL repositories."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self, operation: str, write: bool = False) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory() as session:
                if write:
                    async with session.begin():
                        yield session
                else:
                    yield session
        except SQLAlchemyError as e:
            logger.error("Database error during %s: %s", operation, str(e), exc_info=True)
            raise DatabaseError(
                context={"operation": operation, "error_type": type(e).__name__},
            ) from e


class SqlGenreRepository(_SqlRepository, GenreRepository):

    async def list_by_name(self) -> List[GenreRecord]:
        async with self._session("list genres") as session:
            result = await session.execute(select(Genre).order_by(Genre.name))
            genres = result.scalars().all()
        # ORDER BY follows the column collation, which is not always
        # code-point order (PostgreSQL locales fold case)
        return sorted((GenreRecord.from_model(g) for g in genres), key=lambda g: g.name)

    async def get(self, genre_id: str) -> Optional[GenreRecord]:
        uid = parse_id(genre_id)
        if uid is None:
            return None
        async with self._session("get genre") as session:
            genre = await session.get(Genre, uid)
            return GenreRecord.from_model(genre) if genre else None

    async def find_by_name(
        self, name: str, exclude_id: Optional[str] = None
    ) -> Optional[GenreRecord]:
        query = select(Genre).where(func.lower(Genre.name) == func.lower(name))
        excluded = parse_id(exclude_id) if exclude_id else None
        if excluded is not None:
            query = query.where(Genre.id != excluded)
        async with self._session("find genre by name") as session:
            result = await session.execute(query.limit(1))
            genre = result.scalar_one_or_none()
            return GenreRecord.from_model(genre) if genre else None

    async def add(self, name: str) -> GenreRecord:
        async with self._session("create genre", write=True) as session:
            genre = Genre(name=name)
            session.add(genre)
            await session.flush()  # assigns the id inside the transaction
            record = GenreRecord.from_model(genre)
        return record

    async def update(self, genre_id: str, name: str) -> Optional[GenreRecord]:
        uid = parse_id(genre_id)
        if uid is None:
            return None
        async with self._session("update genre", write=True) as session:
            genre = await session.get(Genre, uid)
            if genre is None:
                return None
            genre.name = name
            await session.flush()
            record = GenreRecord.from_model(genre)
        return record

    async def delete(self, genre_id: str) -> bool:
        uid = parse_id(genre_id)
        if uid is None:
            return False
        async with self._session("delete genre", write=True) as session:
            result = await session.execute(delete(Genre).where(Genre.id == uid))
            deleted = result.rowcount > 0
        return deleted


class SqlBookRepository(_SqlRepository, BookRepository):

    async def summaries_for_genre(self, genre_id: str) -> List[BookSummary]:
        uid = parse_id(genre_id)
        if uid is None:
            return []
        query = (
            select(Book.id, Book.title, Book.summary)
            .join(book_genres, book_genres.c.book_id == Book.id)
            .where(book_genres.c.genre_id == uid)
            .order_by(Book.title)
        )
        async with self._session("list books in genre") as session:
            result = await session.execute(query)
            rows = result.all()
        return [
            BookSummary(id=str(row.id), title=row.title, summary=row.summary or "")
            for row in rows
        ]

    async def books_for_genre(self, genre_id: str) -> List[BookRecord]:
        uid = parse_id(genre_id)
        if uid is None:
            return []
        query = (
            select(Book)
            .where(Book.genres.any(Genre.id == uid))
            .order_by(Book.title)
        )
        async with self._session("list books with genres") as session:
            result = await session.execute(query)
            return [BookRecord.from_model(b) for b in result.scalars().all()]
