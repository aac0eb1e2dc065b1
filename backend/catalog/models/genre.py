"""
Library Catalog — Genre SQLAlchemy Model
=========================================

What:  ORM model for the `genres` table.
Who:   Used by SqlGenreRepository and by Alembic for schema management.

Table Design:
    - UUID primary key, exposed to pages as an opaque string id
    - name: unique under case-insensitive comparison, enforced by a unique
      index on lower(name) so concurrent creates cannot both succeed
"""

import uuid

from sqlalchemy import Index, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from catalog.database import Base

GENRE_URL_PREFIX = "/catalog/genre/"
NAME_MAX_LENGTH = 100


def genre_url(genre_id) -> str:
    """Detail page path for a genre id."""
    return f"{GENRE_URL_PREFIX}{genre_id}"


class Genre(Base):
    """A named classification referenced by books."""

    __tablename__ = "genres"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(
        String(NAME_MAX_LENGTH),
        nullable=False,
        comment="Display name (escaped); unique ignoring case",
    )

    @property
    def url(self) -> str:
        return genre_url(self.id)

    def __repr__(self) -> str:
        return f"<Genre(id={self.id}, name='{self.name}')>"


Index("uq_genres_name_lower", func.lower(Genre.name), unique=True)
