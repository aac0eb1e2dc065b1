"""
Library Catalog — Page Rendering
=================================

What:  The Renderer interface and its Jinja2 implementation.
How:   render(template_id, view_model) loads "<template_id>.html" and renders
       it with the view model's fields as template variables. Nested models
       are passed through as objects so templates can use properties such
       as `genre.url`.

Controllers never build markup; they pick a template id and a view model.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from pydantic import BaseModel


class Renderer(ABC):
    """Turns a named template plus a view model into a response body."""

    @abstractmethod
    def render(self, template_id: str, view_model: BaseModel) -> str:
        ...


def view_context(view_model: BaseModel) -> Dict[str, Any]:
    """Top-level fields of a view model, without dumping nested models."""
    return {name: getattr(view_model, name) for name in type(view_model).model_fields}


class JinjaRenderer(Renderer):
    """
    Renders `<templates_dir>/<template_id>.html` with autoescaping.

    StrictUndefined turns a template typo into an error instead of an
    empty string on the page.
    """

    def __init__(self, templates_dir: str):
        self.env = Environment(
            loader=FileSystemLoader(templates_dir),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
        )

    def render(self, template_id: str, view_model: BaseModel) -> str:
        template = self.env.get_template(f"{template_id}.html")
        return template.render(**view_context(view_model))
