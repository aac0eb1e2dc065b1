"""
Library Catalog — View Models & Handler Outcomes
=================================================

What:  One typed model per template, plus the two things a handler can
       produce: a rendered page or a redirect.
Who:   Built by GenreController, consumed by the Renderer and the routes.

Every view carries a `title`; the remaining fields are the names the
templates read.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, Field

from catalog.schemas.genre import (
    BookRecord,
    BookSummary,
    FieldError,
    GenreFormValues,
    GenreRecord,
)


# ══════════════════════════════════════════════════════════════════════════
# View Models
# ══════════════════════════════════════════════════════════════════════════


class GenreListView(BaseModel):
    title: str = "Genre List"
    genre_list: List[GenreRecord] = Field(default_factory=list)


class GenreDetailView(BaseModel):
    title: str = "Genre Detail"
    genre: GenreRecord
    genre_books: List[BookSummary] = Field(default_factory=list)


class GenreFormView(BaseModel):
    title: str
    genre: Optional[GenreFormValues] = None
    errors: List[FieldError] = Field(default_factory=list)


class GenreDeleteView(BaseModel):
    title: str = "Delete Genre"
    # None when the genre vanished but dangling book references remain
    genre: Optional[GenreRecord] = None
    genre_books: List[BookRecord] = Field(default_factory=list)


class ErrorView(BaseModel):
    title: str = "Error"
    message: str
    status_code: int = 500


# ══════════════════════════════════════════════════════════════════════════
# Handler Outcomes
# ══════════════════════════════════════════════════════════════════════════


PageView = Union[GenreListView, GenreDetailView, GenreFormView, GenreDeleteView]


class Page(BaseModel):
    """A rendered template. Validation failures are pages too (HTTP 200)."""
    template: str
    view: PageView
    body: str
    status_code: int = 200


class Redirect(BaseModel):
    """A redirect after a successful POST, or away from a missing record."""
    location: str
    status_code: int = 302


Outcome = Union[Page, Redirect]
