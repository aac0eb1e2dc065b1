"""Request handlers, one controller per catalog resource."""

from catalog.controllers.genre_controller import GenreController

__all__ = ["GenreController"]
