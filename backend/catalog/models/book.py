"""
Library Catalog — Book SQLAlchemy Model
========================================

What:  ORM model for the `books` table and the `book_genres` association.
Who:   Read by SqlBookRepository to find books that reference a genre.

Books are written by the book pages, not by this application. Genres hold no
back-pointer to books; "which books use this genre" is always a query over
the association table.
"""

import uuid
from typing import List

from sqlalchemy import Column, ForeignKey, String, Table, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.database import Base
from catalog.models.genre import Genre


# No ON DELETE CASCADE on genre_id: a genre still referenced by a book must
# not disappear underneath it
book_genres = Table(
    "book_genres",
    Base.metadata,
    Column("book_id", Uuid, ForeignKey("books.id", ondelete="CASCADE"), primary_key=True),
    Column("genre_id", Uuid, ForeignKey("genres.id"), primary_key=True, index=True),
)


class Book(Base):
    """A catalog book; references zero or more genres."""

    __tablename__ = "books"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # selectin: async sessions cannot lazy-load, so genres are fetched eagerly
    genres: Mapped[List[Genre]] = relationship(
        secondary=book_genres,
        lazy="selectin",
    )

    @property
    def url(self) -> str:
        return f"/catalog/book/{self.id}"

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title='{self.title}')>"
