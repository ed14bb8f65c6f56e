"""Service configuration read from the environment."""

from __future__ import annotations

import base64
import binascii
import os
from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Config:
    """Database DSN and base64-encoded Firebase service-account key."""

    dsn: str = ""
    firebase_key: str = field(default="", repr=False)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """Read ``DSN`` and ``FIREBASE_KEY`` from ``environ`` (the process environment by default)."""
        env = os.environ if environ is None else environ
        return cls(dsn=env.get("DSN", ""), firebase_key=env.get("FIREBASE_KEY", ""))

    def decode_firebase_key(self) -> bytes:
        """Return the decoded Firebase key; raise ValueError if it is not valid base64."""
        try:
            return base64.b64decode(self.firebase_key, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError("error decoding firebase key") from exc