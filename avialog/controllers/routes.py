"""Wiring of controllers and middleware onto a Flask application."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from flask import Flask, Response, request

from ..config import Config
from ..context import RequestContext
from ..middleware import auth_jwt
from .aircraft import AircraftController
from .contact import ContactController
from .info import InfoController
from .logbook import LogbookController
from .user import UserController

Handler = Callable[[RequestContext], None]


class _Services(Protocol):
    user: Any
    contact: Any
    aircraft: Any
    logbook: Any
    auth: Any


class Controllers:
    """All controllers of the API together with the authentication middleware."""

    def __init__(self, services: _Services, config: Config) -> None:
        self.config = config
        self.user = UserController(services.user)
        self.contact = ContactController(services.contact)
        self.aircraft = AircraftController(services.aircraft)
        self.info = InfoController()
        self.logbook = LogbookController(services.logbook)
        self._auth = auth_jwt(services.auth)

    def route(self, app: Flask) -> None:
        """Register every endpoint on ``app``; all ``/api`` routes require a token."""
        self._add(app, "/healthz", "GET", self.info.info, authenticated=False)
        table: tuple[tuple[str, str, Handler], ...] = (
            ("/api/profile", "GET", self.user.get_user),
            ("/api/profile", "PUT", self.user.update_profile),
            ("/api/contacts", "GET", self.contact.get_contacts),
            ("/api/contacts", "POST", self.contact.insert_contact),
            ("/api/contacts/<id>", "PUT", self.contact.update_contact),
            ("/api/contacts/<id>", "DELETE", self.contact.delete_contact),
            ("/api/logbook", "GET", self.logbook.get_logbook_entries),
            ("/api/logbook", "POST", self.logbook.insert_logbook_entry),
            ("/api/logbook/<id>", "PUT", self.logbook.update_logbook_entry),
            ("/api/logbook/<id>", "DELETE", self.logbook.delete_logbook_entry),
            ("/api/aircraft", "GET", self.aircraft.get_aircraft),
            ("/api/aircraft", "POST", self.aircraft.insert_aircraft),
            ("/api/aircraft/<id>", "PUT", self.aircraft.update_aircraft),
            ("/api/aircraft/<id>", "DELETE", self.aircraft.delete_aircraft),
        )
        for path, method, handler in table:
            self._add(app, path, method, handler, authenticated=True)

    def _add(self, app: Flask, path: str, method: str, handler: Handler, *, authenticated: bool) -> None:
        chain = (self._auth, handler) if authenticated else (handler,)

        def view(**params: Any) -> Response:
            ctx = RequestContext(
                method=request.method,
                path=request.path,
                params={key: str(value) for key, value in params.items()},
                headers=dict(request.headers),
                body=request.get_data(),
            )
            for step in chain:
                step(ctx)
                if ctx.aborted:
                    break
            return Response(
                ctx.response_body,
                status=int(ctx.status),
                content_type="application/json; charset=utf-8",
            )

        app.add_url_rule(path, endpoint=handler.__name__, view_func=view, methods=[method])


def create_app(services: _Services, config: Config) -> Flask:
    """Build the Flask application serving the API."""
    app = Flask("avialog")
    Controllers(services, config).route(app)
    return app