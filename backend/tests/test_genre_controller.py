"""
Library Catalog — GenreController Unit Tests
=============================================

What:  Handler behaviour against in-memory repositories.
How:   RecordingRenderer captures (template id, view model) so tests assert
       on the view handed to the template, not on HTML.

What we test:
    ✅ list orders by name regardless of insertion order
    ✅ detail returns books in the genre; unknown id raises NotFoundError
    ✅ create persists once, is idempotent ignoring case, rejects short names
    ✅ delete is blocked while books reference the genre
    ✅ update keeps the id, re-renders on invalid input or a name clash
    ✅ the genre and book lookups run concurrently
"""

import asyncio

import pytest

from catalog.controllers.genre_controller import GENRE_LIST_URL, DUPLICATE_NAME_MESSAGE
from catalog.exceptions import DatabaseError, NotFoundError
from catalog.schemas.views import (
    GenreDeleteView,
    GenreDetailView,
    GenreFormView,
    GenreListView,
    Page,
    Redirect,
)
from catalog.validators import NAME_LENGTH_MESSAGE


class TestList:

    @pytest.mark.asyncio
    async def test_orders_by_name(self, controller, genre_repo):
        await genre_repo.add("Zeta")
        await genre_repo.add("Alpha")

        page = await controller.list()

        assert page.template == "genre_list"
        assert isinstance(page.view, GenreListView)
        assert page.view.title == "Genre List"
        assert [g.name for g in page.view.genre_list] == ["Alpha", "Zeta"]

    @pytest.mark.asyncio
    async def test_order_is_case_sensitive(self, controller, genre_repo):
        for name in ("beta", "Zeta", "Alpha"):
            await genre_repo.add(name)

        page = await controller.list()

        assert [g.name for g in page.view.genre_list] == ["Alpha", "Zeta", "beta"]

    @pytest.mark.asyncio
    async def test_empty(self, controller, renderer):
        page = await controller.list()
        assert page.view.genre_list == []
        assert renderer.calls[0][0] == "genre_list"


class TestDetail:

    @pytest.mark.asyncio
    async def test_shows_books_in_genre(self, controller, genre_repo, book_repo):
        fantasy = await genre_repo.add("Fantasy")
        poetry = await genre_repo.add("Poetry")
        book_repo.add_book("The Hobbit", [fantasy.id], summary="There and back again")
        book_repo.add_book("Odes", [poetry.id])

        page = await controller.detail(fantasy.id)

        assert page.template == "genre_detail"
        assert isinstance(page.view, GenreDetailView)
        assert page.view.genre.id == fantasy.id
        assert [(b.title, b.summary) for b in page.view.genre_books] == [
            ("The Hobbit", "There and back again")
        ]

    @pytest.mark.asyncio
    async def test_unknown_id_raises_not_found(self, controller):
        with pytest.raises(NotFoundError) as exc_info:
            await controller.detail("nonexistent-id")
        assert exc_info.value.status_code == 404
        assert exc_info.value.resource_id == "nonexistent-id"


class TestCreate:

    @pytest.mark.asyncio
    async def test_form_is_empty(self, controller):
        page = await controller.create_form()
        assert page.template == "genre_form"
        assert page.view.title == "Create Genre"
        assert page.view.genre is None
        assert page.view.errors == []

    @pytest.mark.asyncio
    async def test_valid_name_persists_once_and_redirects(self, controller, genre_repo):
        outcome = await controller.create({"name": "  Fantasy "})

        assert isinstance(outcome, Redirect)
        assert len(genre_repo.records) == 1
        genre = next(iter(genre_repo.records.values()))
        assert genre.name == "Fantasy"
        assert outcome.location == f"/catalog/genre/{genre.id}"
        assert outcome.status_code == 302

    @pytest.mark.asyncio
    async def test_duplicate_ignoring_case_redirects_to_existing(self, controller, genre_repo):
        existing = await genre_repo.add("Fantasy")

        outcome = await controller.create({"name": "fantasy"})

        assert isinstance(outcome, Redirect)
        assert outcome.location == existing.url
        assert len(genre_repo.records) == 1

    @pytest.mark.asyncio
    async def test_short_name_rerenders_form(self, controller, genre_repo):
        outcome = await controller.create({"name": "ab"})

        assert isinstance(outcome, Page)
        assert outcome.status_code == 200
        assert outcome.template == "genre_form"
        assert isinstance(outcome.view, GenreFormView)
        assert outcome.view.title == "Create Genre"
        assert outcome.view.genre.name == "ab"
        assert [e.message for e in outcome.view.errors] == [NAME_LENGTH_MESSAGE]
        assert genre_repo.records == {}

    @pytest.mark.asyncio
    async def test_stores_escaped_name(self, controller, genre_repo):
        await controller.create({"name": "Sci<Fi>"})
        genre = next(iter(genre_repo.records.values()))
        assert genre.name == "Sci&lt;Fi&gt;"


class TestDelete:

    @pytest.mark.asyncio
    async def test_form_for_unknown_id_redirects_to_list(self, controller):
        outcome = await controller.delete_form("nonexistent-id")
        assert isinstance(outcome, Redirect)
        assert outcome.location == GENRE_LIST_URL

    @pytest.mark.asyncio
    async def test_form_lists_dependent_books(self, controller, genre_repo, book_repo):
        genre = await genre_repo.add("Fantasy")
        book_repo.add_book("The Hobbit", [genre.id])

        page = await controller.delete_form(genre.id)

        assert page.template == "genre_delete"
        assert isinstance(page.view, GenreDeleteView)
        assert page.view.genre == genre
        assert [b.title for b in page.view.genre_books] == ["The Hobbit"]
        assert page.view.genre_books[0].genres == [genre]

    @pytest.mark.asyncio
    async def test_unreferenced_genre_is_deleted(self, controller, genre_repo):
        genre = await genre_repo.add("Fantasy")

        outcome = await controller.delete(genre.id)

        assert isinstance(outcome, Redirect)
        assert outcome.location == GENRE_LIST_URL
        assert genre.id not in genre_repo.records

    @pytest.mark.asyncio
    async def test_referenced_genre_is_kept(self, controller, genre_repo, book_repo):
        genre = await genre_repo.add("Fantasy")
        book_repo.add_book("The Hobbit", [genre.id])

        outcome = await controller.delete(genre.id)

        assert isinstance(outcome, Page)
        assert outcome.status_code == 200
        assert outcome.template == "genre_delete"
        assert genre.id in genre_repo.records


class TestUpdate:

    @pytest.mark.asyncio
    async def test_form_is_prefilled(self, controller, genre_repo):
        genre = await genre_repo.add("Fantasy")

        page = await controller.update_form(genre.id)

        assert page.view.title == "Update Genre"
        assert page.view.genre.id == genre.id
        assert page.view.genre.name == "Fantasy"

    @pytest.mark.asyncio
    async def test_form_for_unknown_id_raises_not_found(self, controller):
        with pytest.raises(NotFoundError):
            await controller.update_form("nonexistent-id")

    @pytest.mark.asyncio
    async def test_update_preserves_id(self, controller, genre_repo):
        genre = await genre_repo.add("Fantasy")

        outcome = await controller.update(genre.id, {"name": "High Fantasy"})

        assert isinstance(outcome, Redirect)
        assert outcome.location == f"/catalog/genre/{genre.id}"
        assert list(genre_repo.records) == [genre.id]
        assert genre_repo.records[genre.id].name == "High Fantasy"

    @pytest.mark.asyncio
    async def test_changing_only_case_is_allowed(self, controller, genre_repo):
        genre = await genre_repo.add("fantasy")

        outcome = await controller.update(genre.id, {"name": "Fantasy"})

        assert isinstance(outcome, Redirect)
        assert genre_repo.records[genre.id].name == "Fantasy"

    @pytest.mark.asyncio
    async def test_invalid_name_keeps_id_in_form(self, controller, genre_repo):
        genre = await genre_repo.add("Fantasy")

        outcome = await controller.update(genre.id, {"name": " x "})

        assert isinstance(outcome, Page)
        assert outcome.status_code == 200
        assert outcome.view.genre.id == genre.id
        assert outcome.view.genre.name == "x"
        assert outcome.view.errors[0].field == "name"
        assert genre_repo.records[genre.id].name == "Fantasy"

    @pytest.mark.asyncio
    async def test_name_taken_by_another_genre_rerenders(self, controller, genre_repo):
        await genre_repo.add("Poetry")
        genre = await genre_repo.add("Fantasy")

        outcome = await controller.update(genre.id, {"name": "POETRY"})

        assert isinstance(outcome, Page)
        assert [e.message for e in outcome.view.errors] == [DUPLICATE_NAME_MESSAGE]
        assert genre_repo.records[genre.id].name == "Fantasy"

    @pytest.mark.asyncio
    async def test_vanished_genre_raises_not_found(self, controller):
        with pytest.raises(NotFoundError):
            await controller.update("nonexistent-id", {"name": "Fantasy"})

    @pytest.mark.asyncio
    async def test_unknown_id_with_taken_name_raises_not_found(self, controller, genre_repo):
        await genre_repo.add("Fantasy")

        with pytest.raises(NotFoundError):
            await controller.update("nonexistent-id", {"name": "fantasy"})
        assert [g.name for g in genre_repo.records.values()] == ["Fantasy"]


class TestConcurrentLookups:

    @pytest.mark.asyncio
    async def test_genre_and_books_are_fetched_together(self, controller, genre_repo, book_repo):
        """
        Each lookup waits for the other to start; run one after the other
        they would never finish.
        """
        genre = await genre_repo.add("Fantasy")
        genre_started = asyncio.Event()
        books_started = asyncio.Event()
        real_get = genre_repo.get
        real_summaries = book_repo.summaries_for_genre

        async def get(genre_id):
            genre_started.set()
            await books_started.wait()
            return await real_get(genre_id)

        async def summaries_for_genre(genre_id):
            books_started.set()
            await genre_started.wait()
            return await real_summaries(genre_id)

        genre_repo.get = get
        book_repo.summaries_for_genre = summaries_for_genre

        page = await asyncio.wait_for(controller.detail(genre.id), timeout=1)

        assert page.view.genre.id == genre.id

    @pytest.mark.asyncio
    async def test_failed_lookup_fails_the_handler(self, controller, genre_repo, book_repo):
        genre = await genre_repo.add("Fantasy")

        async def broken(genre_id):
            raise DatabaseError(context={"operation": "list books with genres"})

        book_repo.books_for_genre = broken

        with pytest.raises(DatabaseError):
            await controller.delete(genre.id)
        assert genre.id in genre_repo.records
