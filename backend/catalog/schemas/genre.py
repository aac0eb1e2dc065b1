"""
Library Catalog — Record & Form Schemas
========================================

What:  Pydantic models for the data that crosses the repository boundary
       (records) and the data a genre form submits (form input and result).
Why:   Controllers and templates work with these plain models, never with
       ORM rows, so repositories can be swapped for in-memory fakes.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from catalog.models.genre import genre_url


# ══════════════════════════════════════════════════════════════════════════
# Records — what repositories return
# ══════════════════════════════════════════════════════════════════════════


class GenreRecord(BaseModel):
    """A stored genre. `id` is opaque to everything above the repository."""
    id: str = Field(description="Opaque genre identifier")
    name: str = Field(description="Display name (already sanitized)")

    @property
    def url(self) -> str:
        return genre_url(self.id)

    @classmethod
    def from_model(cls, genre) -> "GenreRecord":
        return cls(id=str(genre.id), name=genre.name)


class BookSummary(BaseModel):
    """Title/summary projection of a book, used on the genre detail page."""
    id: str
    title: str
    summary: str = ""

    @property
    def url(self) -> str:
        return f"/catalog/book/{self.id}"


class BookRecord(BookSummary):
    """A book with its genres resolved, used on the delete confirmation page."""
    genres: List[GenreRecord] = Field(default_factory=list)

    @classmethod
    def from_model(cls, book) -> "BookRecord":
        return cls(
            id=str(book.id),
            title=book.title,
            summary=book.summary or "",
            genres=[GenreRecord.from_model(g) for g in book.genres],
        )


# ══════════════════════════════════════════════════════════════════════════
# Forms — what the create/update pages submit
# ══════════════════════════════════════════════════════════════════════════


class GenreFormInput(BaseModel):
    """Raw or sanitized values of the genre form."""
    name: str = ""


class FieldError(BaseModel):
    """
    One failed constraint on one form field.

    `value` carries the sanitized submitted value so the page can show what
    was rejected.
    """
    field: str
    message: str
    value: str = ""


class GenreFormResult(BaseModel):
    """
    Outcome of validating a genre form: success(input) or failure(errors).

    The sanitized input is present in both cases; a failed form is
    re-rendered with the user's (sanitized) values.
    """
    input: GenreFormInput
    errors: List[FieldError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @classmethod
    def success(cls, data: GenreFormInput) -> "GenreFormResult":
        return cls(input=data)

    @classmethod
    def failure(cls, data: GenreFormInput, errors: List[FieldError]) -> "GenreFormResult":
        return cls(input=data, errors=errors)


class GenreFormValues(BaseModel):
    """Values shown in the genre form; `id` is set when updating."""
    id: Optional[str] = None
    name: str = ""
