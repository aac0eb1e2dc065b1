"""
Library Catalog — Repositories
===============================

Interfaces (base.py) and their async SQLAlchemy implementations (sql.py).
Controllers depend on the interfaces only.
"""

from catalog.repositories.base import BookRepository, GenreRepository
from catalog.repositories.sql import SqlBookRepository, SqlGenreRepository

__all__ = [
    "BookRepository",
    "GenreRepository",
    "SqlBookRepository",
    "SqlGenreRepository",
]
