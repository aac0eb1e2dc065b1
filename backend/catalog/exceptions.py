"""
Library Catalog — Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the failures a page can hit.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       render the error page with the matching HTTP status code.

Exception Hierarchy:
    CatalogError (base)
    ├── NotFoundError   → 404 Not Found
    └── DatabaseError   → 500 Internal Server Error

Form validation failures are deliberately absent: a bad form submission is
answered by re-rendering the form (HTTP 200), see catalog.validators.
"""

from typing import Any, Dict, Optional


class CatalogError(Exception):
    """
    Base exception for all catalog application errors.

    Attributes:
        message:  User-facing error description (safe to show on the page)
        context:  Additional debug info (logged but NOT shown to the client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(CatalogError):
    """
    Raised when a requested record does not exist.

    When:    GET /catalog/genre/{id} or its update form with an unknown id.
    HTTP:    404 Not Found

    Repositories return None for missing records; controllers convert that
    None into this exception so the error handler picks the status code.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(CatalogError):
    """
    Raised when a database operation fails unexpectedly.

    When:    Connection lost mid-query, pool exhausted, constraint violation.
    HTTP:    500 Internal Server Error

    The page always shows a generic message. The SQL error type is kept in
    context and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
