"""Authentication middleware for the API routes."""

from __future__ import annotations

from collections.abc import Callable
from http import HTTPStatus
from typing import Protocol

from .context import USER_ID, RequestContext
from .errors import NotAuthorizedError
from .models import User

AUTHORIZATION_HEADER = "Authorization"
_BEARER_PREFIX = "Bearer "


class _AuthService(Protocol):
    def validate_token(self, ctx: RequestContext, token: str) -> User: ...


def _strip_scheme(value: str) -> str:
    """Remove the first occurrence of the bearer prefix from a header value."""
    head, _, tail = value.partition(_BEARER_PREFIX)
    return head + tail


def _reject(ctx: RequestContext, status: HTTPStatus, error: Exception) -> None:
    ctx.json(status, {"error": str(error)})
    ctx.abort()


def auth_jwt(auth_service: _AuthService) -> Callable[[RequestContext], None]:
    """Build a handler that checks the bearer token and stores the user's ID.

    An unauthorised token answers 401, any other failure 500; both abort the
    request with an ``{"error": ...}`` body.
    """

    def handler(ctx: RequestContext) -> None:
        credentials = _strip_scheme(ctx.header(AUTHORIZATION_HEADER))
        try:
            user = auth_service.validate_token(ctx, credentials)
        except NotAuthorizedError as exc:
            _reject(ctx, HTTPStatus.UNAUTHORIZED, exc)
            return
        except Exception as exc:  # any other failure of the auth backend
            _reject(ctx, HTTPStatus.INTERNAL_SERVER_ERROR, exc)
            return
        ctx.set(USER_ID, user.id)

    return handler