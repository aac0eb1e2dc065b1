"""ORM models. Importing the package registers every table with Base.metadata."""

from catalog.models.genre import Genre
from catalog.models.book import Book, book_genres

__all__ = ["Genre", "Book", "book_genres"]
