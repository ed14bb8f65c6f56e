"""Profile endpoints of the signed-in user."""

from __future__ import annotations

from http import HTTPStatus
from typing import Protocol

from ..context import USER_ID, RequestContext, error_response
from ..dto import BindingError, UserRequest, UserResponse, bind_json
from ..models import User


class _UserService(Protocol):
    def get_user(self, user_id: str) -> User: ...

    def update_profile(self, user_id: str, request: UserRequest) -> User: ...


class UserController:
    """Reads and updates the profile of the user named by the request context."""

    def __init__(self, user_service: _UserService) -> None:
        self._service = user_service

    def get_user(self, ctx: RequestContext) -> None:
        """Answer 200 with the user's profile, or 500 on failure."""
        user_id = ctx.get_string(USER_ID)
        try:
            user = self._service.get_user(user_id)
        except Exception as exc:
            error_response(ctx, HTTPStatus.INTERNAL_SERVER_ERROR, exc)
            return
        ctx.json(HTTPStatus.OK, self._adapt(user))

    def update_profile(self, ctx: RequestContext) -> None:
        """Bind a UserRequest, update the profile and answer with it."""
        user_id = ctx.get_string(USER_ID)
        try:
            request = bind_json(ctx.body, UserRequest)
        except BindingError as exc:
            error_response(ctx, HTTPStatus.BAD_REQUEST, exc)
            return
        try:
            user = self._service.update_profile(user_id, request)
        except Exception as exc:
            error_response(ctx, HTTPStatus.INTERNAL_SERVER_ERROR, exc)
            return
        ctx.json(HTTPStatus.OK, self._adapt(user))

    @staticmethod
    def _adapt(user: User) -> UserResponse:
        return UserResponse(
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            avatar_url=user.avatar_url,
            signature_url=user.signature_url,
            country=user.country,
            phone=user.phone,
            street=user.street,
            city=user.city,
            company=user.company,
            timezone=user.timezone,
        )