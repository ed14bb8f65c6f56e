"""Error kinds shared by services, controllers and middleware."""

from __future__ import annotations


class AppError(Exception):
    """Base class of the application's error kinds.

    An optional detail is appended to the kind's message, so that
    ``NotFoundError("record not found")`` reads ``not found: record not found``.
    """

    message = "application error"

    def __init__(self, detail: object | None = None) -> None:
        self.detail = detail
        text = self.message if detail is None else f"{self.message}: {detail}"
        super().__init__(text)


class NotFoundError(AppError):
    """The requested record does not exist."""

    message = "not found"


class InternalFailureError(AppError):
    """Something failed inside the server."""

    message = "internal failure"


class BadRequestError(AppError):
    """The request is malformed or violates a rule."""

    message = "bad request"


class NotAuthorizedError(AppError):
    """The caller could not be authenticated."""

    message = "not authorized"


class ConflictError(AppError):
    """The request conflicts with existing data."""

    message = "conflict"