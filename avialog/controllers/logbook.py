"""Endpoints managing a user's logbook entries."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta
from http import HTTPStatus
from typing import Protocol

from ..context import USER_ID, RequestContext, error_response, parse_id
from ..dto import BindingError, GetLogbookRequest, LogbookRequest, LogbookResponse, bind_json
from ..errors import BadRequestError, NotFoundError

DEFAULT_PERIOD_DAYS = 90
_BOTH_OR_NEITHER = "both start and end time must be provided or neither"


class _LogbookService(Protocol):
    def get_logbook_entries(
        self, user_id: str, start: datetime, end: datetime
    ) -> Sequence[LogbookResponse] | None: ...

    def insert_logbook_entry(self, user_id: str, request: LogbookRequest) -> LogbookResponse: ...

    def update_logbook_entry(
        self, user_id: str, flight_id: int, request: LogbookRequest
    ) -> LogbookResponse: ...

    def delete_logbook_entry(self, user_id: str, flight_id: int) -> None: ...


_WRITE_FAILURES: tuple[tuple[type[Exception], HTTPStatus], ...] = (
    (BadRequestError, HTTPStatus.BAD_REQUEST),
)
_DELETE_FAILURES: tuple[tuple[type[Exception], HTTPStatus], ...] = (
    (NotFoundError, HTTPStatus.NOT_FOUND),
    (BadRequestError, HTTPStatus.BAD_REQUEST),
)


def _failure_status(
    error: Exception, statuses: Iterable[tuple[type[Exception], HTTPStatus]]
) -> HTTPStatus:
    return next(
        (status for kind, status in statuses if isinstance(error, kind)),
        HTTPStatus.INTERNAL_SERVER_ERROR,
    )


def _local_time(seconds: int) -> datetime:
    return datetime.fromtimestamp(seconds).astimezone()


class LogbookController:
    """Lists, inserts, updates and deletes the flights of the signed-in user."""

    def __init__(self, logbook_service: _LogbookService) -> None:
        self._service = logbook_service

    def get_logbook_entries(self, ctx: RequestContext) -> None:
        """Answer with the entries between ``start`` and ``end`` (Unix seconds).

        Without either bound the last 90 days are listed; giving only one is a
        bad request.
        """
        user_id = ctx.get_string(USER_ID)
        try:
            request = bind_json(ctx.body, GetLogbookRequest)
        except BindingError as exc:
            error_response(ctx, HTTPStatus.BAD_REQUEST, exc)
            return

        if (request.start is None) != (request.end is None):
            error_response(ctx, HTTPStatus.BAD_REQUEST, _BOTH_OR_NEITHER)
            return
        if request.start is None or request.end is None:
            now = datetime.now()
            start = (now - timedelta(days=DEFAULT_PERIOD_DAYS)).astimezone()
            end = now.astimezone()
        else:
            try:
                start = _local_time(request.start)
                end = _local_time(request.end)
            except (OverflowError, OSError, ValueError) as exc:
                error_response(ctx, HTTPStatus.BAD_REQUEST, exc)
                return

        try:
            flights = self._service.get_logbook_entries(user_id, start, end)
        except Exception as exc:
            error_response(ctx, HTTPStatus.INTERNAL_SERVER_ERROR, exc)
            return
        ctx.json(HTTPStatus.OK, flights)

    def insert_logbook_entry(self, ctx: RequestContext) -> None:
        """Bind a LogbookRequest, store it and answer 201 with the new entry."""
        user_id = ctx.get_string(USER_ID)
        try:
            request = bind_json(ctx.body, LogbookRequest)
        except BindingError as exc:
            error_response(ctx, HTTPStatus.BAD_REQUEST, exc)
            return
        try:
            response = self._service.insert_logbook_entry(user_id, request)
        except Exception as exc:
            error_response(ctx, _failure_status(exc, _WRITE_FAILURES), exc)
            return
        ctx.json(HTTPStatus.CREATED, response)

    def update_logbook_entry(self, ctx: RequestContext) -> None:
        """Replace the entry named by the ``id`` parameter and answer with it."""
        try:
            flight_id = parse_id(ctx.param("id"))
        except ValueError as exc:
            error_response(ctx, HTTPStatus.BAD_REQUEST, exc)
            return
        user_id = ctx.get_string(USER_ID)
        try:
            request = bind_json(ctx.body, LogbookRequest)
        except BindingError as exc:
            error_response(ctx, HTTPStatus.BAD_REQUEST, exc)
            return
        try:
            response = self._service.update_logbook_entry(user_id, flight_id, request)
        except Exception as exc:
            error_response(ctx, _failure_status(exc, _WRITE_FAILURES), exc)
            return
        ctx.json(HTTPStatus.OK, response)

    def delete_logbook_entry(self, ctx: RequestContext) -> None:
        """Delete the entry named by the ``id`` parameter."""
        try:
            flight_id = parse_id(ctx.param("id"))
        except ValueError as exc:
            error_response(ctx, HTTPStatus.BAD_REQUEST, exc)
            return
        user_id = ctx.get_string(USER_ID)
        try:
            self._service.delete_logbook_entry(user_id, flight_id)
        except Exception as exc:
            error_response(ctx, _failure_status(exc, _DELETE_FAILURES), exc)
            return
        ctx.json(HTTPStatus.OK, {"message": "Logbook entry deleted successfully"})