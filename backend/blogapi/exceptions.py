"""
Blog API Backend — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions, one per error kind the API reports.
How:   Each exception carries a message and an optional context dict.
       Global handlers (registered in main.py) turn them into plain-text
       HTTP responses with the matching status code.
Who:   Raised by request dependencies and the data access layer.

Exception Hierarchy:
    BlogAPIError (base)                  → 500
    ├── UnauthorizedError                → 401 (missing Email header)
    ├── BadRequestError                  → 400
    │   ├── MalformedBodyError           → 400 (JSON body unreadable / wrong shape)
    │   └── MalformedIdentifierError     → 400 (path id is not an integer)
    └── DataAccessError                  → 500 (statement failed)
        └── UserNotFoundError            → 500 (email lookup found no row)

Method-not-allowed (405) is produced by the router itself and rendered by the
Starlette HTTPException handler.
"""

from typing import Any, Dict, Optional


class BlogAPIError(Exception):
    """
    Base exception for all Blog API errors.

    Attributes:
        message:      Text returned to the client
        context:      Extra debug info; logged, never returned
        status_code:  HTTP status the global handler responds with
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class UnauthorizedError(BlogAPIError):
    """
    Raised when an endpoint needing identity gets no `Email` header.

    HTTP: 401 Unauthorized
    """

    status_code = 401

    def __init__(
        self,
        message: str = "You are not logged in",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class BadRequestError(BlogAPIError):
    """Client input could not be decoded. HTTP: 400 Bad Request."""

    status_code = 400

    def __init__(
        self,
        message: str = "Bad request",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class MalformedBodyError(BadRequestError):
    """
    Raised when the request body is not valid JSON, has the wrong shape, or
    lacks a required value (e.g. `email` on /login).
    """

    def __init__(
        self,
        message: str = "Invalid JSON format",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, field=field, context=context)


class MalformedIdentifierError(BadRequestError):
    """Raised when a path identifier cannot be parsed as an integer."""

    def __init__(
        self,
        param: str = "article_id",
        value: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if value is not None:
            ctx["value"] = value
        super().__init__(message=f"Invalid {param} parameter", field=param, context=ctx)


class DataAccessError(BlogAPIError):
    """
    Raised when a data access statement fails.

    What:    Wraps the driver/ORM exception; the message is the underlying one.
    When:    Connection lost, constraint violation (duplicate email, unknown
             article on comment), etc.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UserNotFoundError(DataAccessError):
    """
    Raised when resolving an email finds no user row.

    Reported like any other data-access failure (500).
    """

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="no user registered with the given email", context=context)
