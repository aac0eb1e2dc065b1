"""
Library Catalog — Genre Route Handlers
=======================================

What:  HTTP surface of GenreController, mounted under /catalog.

    GET  /catalog/genres                 list
    GET  /catalog/genre/create           create form
    POST /catalog/genre/create           create
    GET  /catalog/genre/{id}             detail
    GET  /catalog/genre/{id}/delete      delete confirmation
    POST /catalog/genre/{id}/delete      delete (form field `genreid`)
    GET  /catalog/genre/{id}/update      update form
    POST /catalog/genre/{id}/update      update

The /genre/create routes are registered before /genre/{id} so that
"create" is never captured as an id.

Redirects use 302 so the browser follows a POST with a GET.
"""

from typing import Optional

from fastapi import APIRouter, Form
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from catalog.dependencies import GenreControllerDep
from catalog.schemas.views import Outcome, Redirect

router = APIRouter(prefix="/catalog", tags=["Genres"])


def to_response(outcome: Outcome) -> Response:
    """Map a controller outcome onto a Starlette response."""
    if isinstance(outcome, Redirect):
        return RedirectResponse(url=outcome.location, status_code=outcome.status_code)
    return HTMLResponse(content=outcome.body, status_code=outcome.status_code)


@router.get("/genres", response_class=HTMLResponse, summary="List all genres")
async def genre_list(controller: GenreControllerDep) -> Response:
    return to_response(await controller.list())


@router.get("/genre/create", response_class=HTMLResponse, summary="Genre create form")
async def genre_create_get(controller: GenreControllerDep) -> Response:
    return to_response(await controller.create_form())


@router.post("/genre/create", summary="Create a genre")
async def genre_create_post(
    controller: GenreControllerDep,
    name: Optional[str] = Form(default=None),
) -> Response:
    return to_response(await controller.create({"name": name}))


@router.get("/genre/{genre_id}", response_class=HTMLResponse, summary="Genre detail")
async def genre_detail(genre_id: str, controller: GenreControllerDep) -> Response:
    return to_response(await controller.detail(genre_id))


@router.get("/genre/{genre_id}/delete", summary="Genre delete confirmation")
async def genre_delete_get(genre_id: str, controller: GenreControllerDep) -> Response:
    return to_response(await controller.delete_form(genre_id))


@router.post("/genre/{genre_id}/delete", summary="Delete a genre")
async def genre_delete_post(
    genre_id: str,
    controller: GenreControllerDep,
    genreid: Optional[str] = Form(default=None),
) -> Response:
    """
    The confirmation form posts the id as `genreid`; the path id is the
    fallback when a client omits the field.
    """
    return to_response(await controller.delete(genreid or genre_id))


@router.get("/genre/{genre_id}/update", response_class=HTMLResponse, summary="Genre update form")
async def genre_update_get(genre_id: str, controller: GenreControllerDep) -> Response:
    return to_response(await controller.update_form(genre_id))


@router.post("/genre/{genre_id}/update", summary="Update a genre")
async def genre_update_post(
    genre_id: str,
    controller: GenreControllerDep,
    name: Optional[str] = Form(default=None),
) -> Response:
    return to_response(await controller.update(genre_id, {"name": name}))
