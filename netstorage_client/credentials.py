"""
Account credentials for a NetStorage upload account.

The values come from the upload account page: the ``-nsu.akamaihd.net``
hostname, the key name and the key itself. Never commit the key.
"""

from dataclasses import dataclass, field

import requests

from .config import NetStorageConfig
from .errors import InvalidArgument

SCHEMES = ("http", "https")


@dataclass(frozen=True)
class Credentials:
    """Immutable account identity plus the HTTP session used to reach it."""

    host: str
    key_name: str
    secret: bytes = field(repr=False)
    scheme: str = "https"
    session: requests.Session | None = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        if isinstance(self.secret, str):
            object.__setattr__(self, "secret", self.secret.encode("utf-8"))

        missing = [
            name for name in ("host", "key_name", "secret") if not getattr(self, name)
        ]
        if missing:
            raise InvalidArgument(
                f"NetStorage hostname, keyname and key are all required (missing: {', '.join(missing)})"
            )
        if self.scheme not in SCHEMES:
            raise InvalidArgument(f"Unsupported scheme: {self.scheme!r}")
        if self.session is None:
            object.__setattr__(self, "session", requests.Session())

    @classmethod
    def from_config(
        cls, config: NetStorageConfig, session: requests.Session | None = None
    ) -> "Credentials":
        return cls(
            host=config.host,
            key_name=config.keyname,
            secret=config.key,
            scheme="https" if config.ssl else "http",
            session=session,
        )
