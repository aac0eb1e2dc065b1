"""
Library Catalog — Genre Controller
===================================

What:  The eight genre handlers: list, detail, create (form + submit),
       delete (form + submit), update (form + submit).
How:   Each handler validates input, calls the repositories, and returns
       either a rendered Page or a Redirect. HTTP details (status lines,
       headers, form parsing) stay in catalog.routes.genres.
Who:   Built per request by catalog.dependencies; built directly in tests
       with in-memory repositories.

Concurrency:
    detail, delete_form and delete need the genre and the books that
    reference it. The two lookups are independent, so they are issued
    together with asyncio.gather; if either fails the handler fails.

Deletion race:
    delete() checks for referencing books and then deletes. A book added
    between the two steps is not detected here. On PostgreSQL the
    book_genres foreign key rejects the delete, which surfaces as a
    DatabaseError.
"""

import asyncio
import logging
from typing import Mapping, Optional

from pydantic import BaseModel

from catalog.exceptions import NotFoundError
from catalog.rendering import Renderer
from catalog.repositories.base import BookRepository, GenreRepository
from catalog.schemas.genre import FieldError, GenreFormResult, GenreFormValues
from catalog.schemas.views import (
    GenreDeleteView,
    GenreDetailView,
    GenreFormView,
    GenreListView,
    Outcome,
    Page,
    Redirect,
)
from catalog.validators import validate_genre_form

logger = logging.getLogger(__name__)

GENRE_LIST_URL = "/catalog/genres"
DUPLICATE_NAME_MESSAGE = "A genre with this name already exists"


class GenreController:
    """
    Genre request handlers.

    Args:
        genres:   genre storage
        books:    read-only book storage, queried by genre
        renderer: turns (template id, view model) into a page body
    """

    def __init__(self, genres: GenreRepository, books: BookRepository, renderer: Renderer):
        self.genres = genres
        self.books = books
        self.renderer = renderer

    def _page(self, template: str, view: BaseModel, status_code: int = 200) -> Page:
        body = self.renderer.render(template, view)
        return Page(template=template, view=view, body=body, status_code=status_code)

    # ── Read ──────────────────────────────────────────────────────────────

    async def list(self) -> Page:
        """All genres ordered by name. No pagination, no filtering."""
        genres = await self.genres.list_by_name()
        return self._page("genre_list", GenreListView(genre_list=genres))

    async def detail(self, genre_id: str) -> Page:
        """
        A genre and the title/summary of every book in it.

        Raises:
            NotFoundError: no genre with this id
        """
        genre, books = await asyncio.gather(
            self.genres.get(genre_id),
            self.books.summaries_for_genre(genre_id),
        )
        if genre is None:
            raise NotFoundError(resource="genre", resource_id=genre_id)
        return self._page("genre_detail", GenreDetailView(genre=genre, genre_books=books))

    # ── Create ────────────────────────────────────────────────────────────

    async def create_form(self) -> Page:
        return self._page("genre_form", GenreFormView(title="Create Genre"))

    async def create(self, form: Mapping[str, Optional[str]]) -> Outcome:
        """
        Validate a new genre and store it unless the name is already taken.

        Creating an existing name (ignoring case) is not an error: the user
        is sent to the genre that already has it.
        """
        result = validate_genre_form(form)
        if not result.ok:
            return self._form_with_errors("Create Genre", result)

        name = result.input.name
        existing = await self.genres.find_by_name(name)
        if existing is not None:
            logger.info("Genre '%s' already exists as %s", name, existing.id)
            return Redirect(location=existing.url)

        genre = await self.genres.add(name)
        logger.info("Created genre %s ('%s')", genre.id, genre.name)
        return Redirect(location=genre.url)

    # ── Delete ────────────────────────────────────────────────────────────

    async def delete_form(self, genre_id: str) -> Outcome:
        """Confirmation page; a missing genre just goes back to the list."""
        genre, books = await asyncio.gather(
            self.genres.get(genre_id),
            self.books.books_for_genre(genre_id),
        )
        if genre is None:
            return Redirect(location=GENRE_LIST_URL)
        return self._page("genre_delete", GenreDeleteView(genre=genre, genre_books=books))

    async def delete(self, genre_id: str) -> Outcome:
        """
        Delete a genre that no book references.

        While books still reference the genre the confirmation page is shown
        again (HTTP 200) and nothing is deleted.
        """
        genre, books = await asyncio.gather(
            self.genres.get(genre_id),
            self.books.books_for_genre(genre_id),
        )
        if books:
            logger.info("Delete of genre %s blocked by %d book(s)", genre_id, len(books))
            return self._page("genre_delete", GenreDeleteView(genre=genre, genre_books=books))

        await self.genres.delete(genre_id)
        logger.info("Deleted genre %s", genre_id)
        return Redirect(location=GENRE_LIST_URL)

    # ── Update ────────────────────────────────────────────────────────────

    async def update_form(self, genre_id: str) -> Page:
        """
        The genre form pre-filled with the current name.

        Raises:
            NotFoundError: no genre with this id
        """
        genre = await self.genres.get(genre_id)
        if genre is None:
            raise NotFoundError(resource="genre", resource_id=genre_id)
        values = GenreFormValues(id=genre.id, name=genre.name)
        return self._page("genre_form", GenreFormView(title="Update Genre", genre=values))

    async def update(self, genre_id: str, form: Mapping[str, Optional[str]]) -> Outcome:
        """
        Rename a genre in place, keeping its id.

        Raises:
            NotFoundError: no genre with this id, or it disappeared before
                the update
        """
        result = validate_genre_form(form)
        if not result.ok:
            return self._form_with_errors("Update Genre", result, genre_id)

        # An unknown id must not be reported as a name clash
        if await self.genres.get(genre_id) is None:
            raise NotFoundError(resource="genre", resource_id=genre_id)

        name = result.input.name
        clash = await self.genres.find_by_name(name, exclude_id=genre_id)
        if clash is not None:
            error = FieldError(field="name", message=DUPLICATE_NAME_MESSAGE, value=name)
            return self._form_with_errors(
                "Update Genre", GenreFormResult.failure(result.input, [error]), genre_id
            )

        genre = await self.genres.update(genre_id, name)
        if genre is None:
            raise NotFoundError(resource="genre", resource_id=genre_id)
        logger.info("Updated genre %s to '%s'", genre.id, genre.name)
        return Redirect(location=genre.url)

    # ── Helpers ───────────────────────────────────────────────────────────

    def _form_with_errors(
        self, title: str, result: GenreFormResult, genre_id: Optional[str] = None
    ) -> Page:
        values = GenreFormValues(id=genre_id, name=result.input.name)
        view = GenreFormView(title=title, genre=values, errors=result.errors)
        return self._page("genre_form", view)
