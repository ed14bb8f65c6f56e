"""Framework-neutral request context handed to controllers and middleware."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .dto import to_json

USER_ID = "userID"

_MAX_ID = 2**32 - 1


@dataclass
class RequestContext:
    """One request: its path parameters, headers and body, plus the response written so far."""

    method: str = "GET"
    path: str = "/"
    params: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None
    values: dict[str, Any] = field(default_factory=dict)
    status: int = 200
    response_body: str = ""
    aborted: bool = False

    def param(self, name: str) -> str:
        """Return a path parameter, or an empty string if absent."""
        return self.params.get(name, "")

    def header(self, name: str) -> str:
        """Return a request header, matched case-insensitively, or an empty string."""
        wanted = name.lower()
        return next((value for key, value in self.headers.items() if key.lower() == wanted), "")

    def set(self, key: str, value: Any) -> None:
        """Store a value for later handlers."""
        self.values[key] = value

    def get_string(self, key: str) -> str:
        """Return a stored string, or an empty string if absent or not a string."""
        value = self.values.get(key)
        return value if isinstance(value, str) else ""

    def json(self, status: int, payload: Any) -> None:
        """Write a JSON response."""
        self.status = status
        self.response_body = to_json(payload)

    def abort(self) -> None:
        """Stop later handlers from running."""
        self.aborted = True


def parse_id(value: str) -> int:
    """Parse a decimal identifier that must fit in 32 unsigned bits."""
    number = 0
    for char in value:
        if not ("0" <= char <= "9"):
            raise ValueError(f'strconv.ParseUint: parsing "{value}": invalid syntax')
        number = number * 10 + int(char)
        if number > _MAX_ID:
            raise ValueError(f'strconv.ParseUint: parsing "{value}": value out of range')
    if not value:
        raise ValueError(f'strconv.ParseUint: parsing "{value}": invalid syntax')
    return number


def error_response(ctx: RequestContext, status: int, error: BaseException | str) -> None:
    """Write the standard ``{"code", "message"}`` error body."""
    ctx.json(status, {"code": status, "message": str(error)})