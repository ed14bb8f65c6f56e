"""Health-check endpoint."""

from __future__ import annotations

from http import HTTPStatus

from ..context import RequestContext
from ..dto import ServerInfo


class InfoController:
    """Reports that the server is up."""

    def info(self, ctx: RequestContext) -> None:
        """Answer 200 with ``{"healthy": true}``."""
        ctx.json(HTTPStatus.OK, ServerInfo(healthy=True))