"""Endpoints managing a user's contacts."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from http import HTTPStatus
from typing import Protocol

from ..context import USER_ID, RequestContext, error_response, parse_id
from ..dto import BindingError, ContactRequest, ContactResponse, bind_json
from ..errors import BadRequestError, NotFoundError
from ..models import Contact


class _ContactService(Protocol):
    def get_user_contacts(self, user_id: str) -> Sequence[Contact] | None: ...

    def insert_contact(self, user_id: str, request: ContactRequest) -> Contact: ...

    def update_contact(self, user_id: str, contact_id: int, request: ContactRequest) -> Contact: ...

    def delete_contact(self, user_id: str, contact_id: int) -> None: ...


_INSERT_FAILURES: tuple[tuple[type[Exception], HTTPStatus], ...] = (
    (BadRequestError, HTTPStatus.BAD_REQUEST),
)
_UPDATE_FAILURES: tuple[tuple[type[Exception], HTTPStatus], ...] = (
    (NotFoundError, HTTPStatus.NOT_FOUND),
    (BadRequestError, HTTPStatus.BAD_REQUEST),
)
_DELETE_FAILURES: tuple[tuple[type[Exception], HTTPStatus], ...] = (
    (NotFoundError, HTTPStatus.NOT_FOUND),
)


def _failure_status(
    error: Exception, statuses: Iterable[tuple[type[Exception], HTTPStatus]]
) -> HTTPStatus:
    return next(
        (status for kind, status in statuses if isinstance(error, kind)),
        HTTPStatus.INTERNAL_SERVER_ERROR,
    )


class ContactController:
    """Lists, inserts, updates and deletes the contacts of the signed-in user."""

    def __init__(self, contact_service: _ContactService) -> None:
        self._service = contact_service

    def get_contacts(self, ctx: RequestContext) -> None:
        """Answer 200 with all of the user's contacts, or 500 on failure."""
        user_id = ctx.get_string(USER_ID)
        try:
            contacts = self._service.get_user_contacts(user_id)
        except Exception as exc:
            error_response(ctx, HTTPStatus.INTERNAL_SERVER_ERROR, exc)
            return
        ctx.json(HTTPStatus.OK, [self._adapt(contact) for contact in contacts or ()])

    def insert_contact(self, ctx: RequestContext) -> None:
        """Bind a ContactRequest, store it and answer 201 with the new contact."""
        user_id = ctx.get_string(USER_ID)
        try:
            request = bind_json(ctx.body, ContactRequest)
        except BindingError as exc:
            error_response(ctx, HTTPStatus.BAD_REQUEST, exc)
            return
        try:
            contact = self._service.insert_contact(user_id, request)
        except Exception as exc:
            error_response(ctx, _failure_status(exc, _INSERT_FAILURES), exc)
            return
        ctx.json(HTTPStatus.CREATED, self._adapt(contact))

    def update_contact(self, ctx: RequestContext) -> None:
        """Replace the contact named by the ``id`` parameter and answer with it."""
        try:
            contact_id = parse_id(ctx.param("id"))
        except ValueError as exc:
            error_response(ctx, HTTPStatus.BAD_REQUEST, exc)
            return
        user_id = ctx.get_string(USER_ID)
        try:
            request = bind_json(ctx.body, ContactRequest)
        except BindingError as exc:
            error_response(ctx, HTTPStatus.BAD_REQUEST, exc)
            return
        try:
            contact = self._service.update_contact(user_id, contact_id, request)
        except Exception as exc:
            error_response(ctx, _failure_status(exc, _UPDATE_FAILURES), exc)
            return
        ctx.json(HTTPStatus.OK, self._adapt(contact))

    def delete_contact(self, ctx: RequestContext) -> None:
        """Delete the contact named by the ``id`` parameter."""
        try:
            contact_id = parse_id(ctx.param("id"))
        except ValueError as exc:
            error_response(ctx, HTTPStatus.BAD_REQUEST, exc)
            return
        user_id = ctx.get_string(USER_ID)
        try:
            self._service.delete_contact(user_id, contact_id)
        except Exception as exc:
            error_response(ctx, _failure_status(exc, _DELETE_FAILURES), exc)
            return
        ctx.json(HTTPStatus.OK, {"message": "Contact deleted successfully"})

    @staticmethod
    def _adapt(contact: Contact) -> ContactResponse:
        return ContactResponse(
            id=contact.id,
            avatar_url=contact.avatar_url,
            first_name=contact.first_name,
            last_name=contact.last_name,
            company=contact.company,
            phone=contact.phone,
            email_address=contact.email_address,
            note=contact.note,
        )