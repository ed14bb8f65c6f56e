"""Endpoints managing a user's aircraft."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from http import HTTPStatus
from typing import Any, Protocol

from ..context import USER_ID, RequestContext, error_response, parse_id
from ..dto import AircraftRequest, AircraftResponse, BindingError, bind_json
from ..errors import BadRequestError, ConflictError, NotFoundError
from ..models import Aircraft


class _AircraftService(Protocol):
    def get_user_aircraft(self, user_id: str) -> Sequence[Aircraft] | None: ...

    def insert_aircraft(self, user_id: str, request: AircraftRequest) -> Aircraft: ...

    def update_aircraft(self, user_id: str, aircraft_id: int, request: AircraftRequest) -> Aircraft: ...

    def delete_aircraft(self, user_id: str, aircraft_id: int) -> None: ...


_Failures = Iterable[tuple[type[Exception], HTTPStatus]]

_WRITE_FAILURES: _Failures = ((BadRequestError, HTTPStatus.BAD_REQUEST),)
_DELETE_FAILURES: _Failures = (
    (BadRequestError, HTTPStatus.BAD_REQUEST),
    (ConflictError, HTTPStatus.CONFLICT),
    (NotFoundError, HTTPStatus.NOT_FOUND),
)


class _InvalidInput(Exception):
    """The request itself could not be read; carries the underlying error."""

    def __init__(self, cause: Exception) -> None:
        super().__init__(str(cause))
        self.cause = cause


def _read_id(ctx: RequestContext) -> int:
    try:
        return parse_id(ctx.param("id"))
    except ValueError as exc:
        raise _InvalidInput(exc) from exc


def _read_request(ctx: RequestContext) -> AircraftRequest:
    try:
        return bind_json(ctx.body, AircraftRequest)
    except BindingError as exc:
        raise _InvalidInput(exc) from exc


def _failure_status(error: Exception, statuses: _Failures) -> HTTPStatus:
    return next(
        (status for kind, status in statuses if isinstance(error, kind)),
        HTTPStatus.INTERNAL_SERVER_ERROR,
    )


def _respond(
    ctx: RequestContext,
    status: HTTPStatus,
    work: Callable[[str], Any],
    failures: _Failures = (),
) -> None:
    """Run ``work`` for the signed-in user and write its result or the error."""
    try:
        payload = work(ctx.get_string(USER_ID))
    except _InvalidInput as exc:
        error_response(ctx, HTTPStatus.BAD_REQUEST, exc.cause)
        return
    except Exception as exc:
        error_response(ctx, _failure_status(exc, failures), exc)
        return
    ctx.json(status, payload)


class AircraftController:
    """Lists, inserts, updates and deletes the aircraft of the signed-in user."""

    def __init__(self, aircraft_service: _AircraftService) -> None:
        self._service = aircraft_service

    def get_aircraft(self, ctx: RequestContext) -> None:
        """Answer 200 with all of the user's aircraft, or 500 on failure."""
        _respond(
            ctx,
            HTTPStatus.OK,
            lambda user_id: [self._adapt(item) for item in self._service.get_user_aircraft(user_id) or ()],
        )

    def insert_aircraft(self, ctx: RequestContext) -> None:
        """Bind an AircraftRequest, store it and answer 201 with the new aircraft."""

        def work(user_id: str) -> AircraftResponse:
            request = _read_request(ctx)
            return self._adapt(self._service.insert_aircraft(user_id, request))

        _respond(ctx, HTTPStatus.CREATED, work, _WRITE_FAILURES)

    def update_aircraft(self, ctx: RequestContext) -> None:
        """Replace the aircraft named by the ``id`` parameter and answer with it."""

        def work(user_id: str) -> AircraftResponse:
            aircraft_id = _read_id(ctx)
            request = _read_request(ctx)
            return self._adapt(self._service.update_aircraft(user_id, aircraft_id, request))

        _respond(ctx, HTTPStatus.OK, work, _WRITE_FAILURES)

    def delete_aircraft(self, ctx: RequestContext) -> None:
        """Delete the aircraft named by the ``id`` parameter."""

        def work(user_id: str) -> dict[str, str]:
            aircraft_id = _read_id(ctx)
            self._service.delete_aircraft(user_id, aircraft_id)
            return {"message": "Aircraft deleted successfully"}

        _respond(ctx, HTTPStatus.OK, work, _DELETE_FAILURES)

    @staticmethod
    def _adapt(aircraft: Aircraft) -> AircraftResponse:
        return AircraftResponse(
            id=aircraft.id,
            aircraft_model=aircraft.aircraft_model,
            registration_number=aircraft.registration_number,
            image_url=aircraft.image_url,
            remarks=aircraft.remarks,
        )