"""
Exception taxonomy for the NetStorage client.

Each error also derives from the closest built-in exception so callers can
catch either ``NetStorageError`` or the usual ``ValueError``/``OSError``/
``ConnectionError``/``TimeoutError`` families.
"""

from typing import Any


class NetStorageError(Exception):
    """Base class for all client errors.

    ``response`` holds the HTTP response when the failure happened after the
    server answered, so the status code stays available to the caller.
    """

    def __init__(self, message: str, response: Any = None):
        super().__init__(message)
        self.response = response


class InvalidArgument(NetStorageError, ValueError):
    """Caller passed something the protocol cannot accept."""


class InvalidPath(InvalidArgument):
    """Remote path is not a root-relative path."""


class IOFailure(NetStorageError, OSError):
    """Local file could not be opened, read or written."""


class SigningFailure(NetStorageError):
    """HMAC computation failed."""


class TransportFailure(NetStorageError, ConnectionError):
    """Network-level failure (DNS, refused connection, TLS, broken stream)."""


class Cancelled(NetStorageError, TimeoutError):
    """Call was cancelled or ran past its deadline."""


class RemoteError(NetStorageError):
    """Server answered with a non-success status."""

    @property
    def status_code(self) -> int | None:
        return getattr(self.response, "status_code", None)
