"""
Library Catalog — Genre Form Validation & Sanitization
=======================================================

What:  Turns a submitted genre form into a GenreFormResult.
How:   GenreNameSubmission declares the constraints on `name`, in order:
       1. trim surrounding whitespace         (str_strip_whitespace)
       2. trimmed length ≥ MIN_NAME_LENGTH    (Field min_length)
       3. escape markup-significant characters
       4. escaped length ≤ NAME_MAX_LENGTH    (the `genres.name` column)
       The minimum is measured before escaping, so "a&b" counts as 3
       characters even though it is stored as "a&amp;b". The maximum is
       measured after escaping, because the escaped value is what is stored.

Validation failures are values, not exceptions: pydantic's ValidationError
is mapped onto FieldErrors and the caller re-renders the form.
"""

from typing import List, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from catalog.models.genre import NAME_MAX_LENGTH
from catalog.schemas.genre import FieldError, GenreFormInput, GenreFormResult

MIN_NAME_LENGTH = 3
NAME_LENGTH_MESSAGE = f"Genre name must contain at least {MIN_NAME_LENGTH} characters"
NAME_TOO_LONG_MESSAGE = f"Genre name must not exceed {NAME_MAX_LENGTH} characters"

# Same character set the catalog has always escaped on input
_ESCAPES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
    "/": "&#x2F;",
    "\\": "&#x5C;",
    "`": "&#96;",
})

# pydantic error type → message shown on the form
_MESSAGES = {
    "string_too_short": NAME_LENGTH_MESSAGE,
}


def escape_markup(value: str) -> str:
    """Replace HTML-significant characters with entities."""
    return value.translate(_ESCAPES)


class GenreNameSubmission(BaseModel):
    """Constraints on a submitted genre name. `name` comes out escaped."""

    model_config = {"str_strip_whitespace": True}

    name: str = Field(min_length=MIN_NAME_LENGTH, description="Trimmed genre name")

    @field_validator("name")
    @classmethod
    def escape_within_column(cls, v: str) -> str:
        escaped = escape_markup(v)
        if len(escaped) > NAME_MAX_LENGTH:
            raise ValueError(NAME_TOO_LONG_MESSAGE)
        return escaped


def _field_error(error: dict, value: str) -> FieldError:
    if error["type"] == "value_error":
        message = str(error["ctx"]["error"])
    else:
        message = _MESSAGES.get(error["type"], error["msg"])
    field = str(error["loc"][0]) if error["loc"] else "name"
    return FieldError(field=field, message=message, value=value)


def validate_genre_form(form: Mapping[str, Optional[str]]) -> GenreFormResult:
    """
    Validate and sanitize a genre form submission.

    Args:
        form: submitted fields; only `name` is read. A missing or None name
              is treated as an empty string.

    Returns:
        GenreFormResult whose `input.name` is trimmed and escaped, with one
        FieldError per failed constraint.
    """
    raw = form.get("name") or ""
    try:
        submission = GenreNameSubmission(name=raw)
    except ValidationError as e:
        # The form is re-rendered with what the user typed, made safe
        sanitized = escape_markup(raw.strip())
        errors: List[FieldError] = [_field_error(err, sanitized) for err in e.errors()]
        return GenreFormResult.failure(GenreFormInput(name=sanitized), errors)

    return GenreFormResult.success(GenreFormInput(name=submission.name))
