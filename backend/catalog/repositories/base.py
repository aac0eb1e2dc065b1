"""
Library Catalog — Repository Interfaces
========================================

What:  Abstract contracts for genre and book storage.
Why:   GenreController receives these at construction time instead of
       reaching for a process-wide database handle. Tests pass in-memory
       implementations; the application passes the SQL ones.

Identifiers are opaque strings. An id that the store cannot interpret is
treated exactly like an id that does not exist.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from catalog.schemas.genre import BookRecord, BookSummary, GenreRecord


class GenreRepository(ABC):
    """
    Storage for genres.

    Contract:
        - names are stored as given (callers sanitize first)
        - no two genres share a name ignoring case
        - update() never changes a genre's id
    """

    @abstractmethod
    async def list_by_name(self) -> List[GenreRecord]:
        """All genres, ordered by name in code-point order (case-sensitive)."""
        ...

    @abstractmethod
    async def get(self, genre_id: str) -> Optional[GenreRecord]:
        """The genre with this id, or None."""
        ...

    @abstractmethod
    async def find_by_name(
        self, name: str, exclude_id: Optional[str] = None
    ) -> Optional[GenreRecord]:
        """
        A genre whose name equals `name` ignoring case, or None.

        Args:
            exclude_id: skip this genre (used when renaming it)
        """
        ...

    @abstractmethod
    async def add(self, name: str) -> GenreRecord:
        """Insert a genre and return it with its newly assigned id."""
        ...

    @abstractmethod
    async def update(self, genre_id: str, name: str) -> Optional[GenreRecord]:
        """Rename the genre in place. Returns None if it does not exist."""
        ...

    @abstractmethod
    async def delete(self, genre_id: str) -> bool:
        """Delete the genre. Returns False if there was nothing to delete."""
        ...


class BookRepository(ABC):
    """Read-only view of books, queried by the genres they reference."""

    @abstractmethod
    async def summaries_for_genre(self, genre_id: str) -> List[BookSummary]:
        """Books referencing the genre, projected to id, title and summary."""
        ...

    @abstractmethod
    async def books_for_genre(self, genre_id: str) -> List[BookRecord]:
        """Books referencing the genre, with all their genres resolved."""
        ...
