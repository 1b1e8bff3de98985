"""
NetStorage version 5 request authentication.

Every request carries three headers:

    X-Akamai-ACS-Action     version=1&action=<action>
    X-Akamai-ACS-Auth-Data  5, 0.0.0.0, 0.0.0.0, <epoch seconds>, <nonce>, <key name>
    X-Akamai-ACS-Auth-Sign  base64(HMAC-SHA256(key, auth_data + path + "\\n"
                                               + "x-akamai-acs-action:" + action + "\\n"))

The server recomputes the signature from the same strings, so the formats
below must stay byte-exact.
"""

import base64
import hashlib
import hmac
import re
import secrets
from dataclasses import dataclass, field
from urllib.parse import quote, urlsplit

from .errors import InvalidPath, SigningFailure

AUTH_VERSION = 5
NONCE_LIMIT = 100000

ACTION_HEADER = "X-Akamai-ACS-Action"
AUTH_DATA_HEADER = "X-Akamai-ACS-Auth-Data"
AUTH_SIGN_HEADER = "X-Akamai-ACS-Auth-Sign"

# Characters left unescaped in a request path (RFC 3986 pchar plus "/").
# "%" stays so already-escaped paths are not double-encoded.
_PATH_SAFE = "/!$&'()*+,;=:@[]~%"
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def canonical_path(path: str) -> str:
    """
    Validate a root-relative NetStorage path and return its request-URI form.

    Raises:
        InvalidPath: If the path is empty, not rooted at "/", names a network
            location ("//host/...") or contains a malformed percent escape.
    """
    if not isinstance(path, str) or not path.startswith("/") or path.startswith("//"):
        raise InvalidPath(f"Invalid netstorage path: {path!r}")
    if _BAD_ESCAPE.search(path):
        raise InvalidPath(f"Invalid netstorage path: {path!r}")

    try:
        parts = urlsplit(path)
    except ValueError as e:
        raise InvalidPath(f"Invalid netstorage path: {path!r}") from e

    canonical = quote(parts.path, safe=_PATH_SAFE)
    if parts.query:
        canonical = f"{canonical}?{parts.query}"
    return canonical


def action_header(action: str) -> str:
    return f"version=1&action={action}"


def auth_data_header(key_name: str, timestamp: int, nonce: int) -> str:
    return f"{AUTH_VERSION}, 0.0.0.0, 0.0.0.0, {int(timestamp)}, {int(nonce)}, {key_name}"


def signing_payload(auth_data: str, path: str, action: str) -> str:
    """Concatenate the canonical strings in the order the server hashes them.

    ``path`` must already be canonical and ``action`` is the full action
    header value.
    """
    return f"{auth_data}{path}\nx-akamai-acs-action:{action}\n"


def sign(secret: bytes, payload: str) -> str:
    """Return base64(HMAC-SHA256(secret, payload)). The secret is used as-is."""
    try:
        digest = hmac.new(secret, payload.encode("utf-8"), hashlib.sha256).digest()
    except (TypeError, ValueError) as e:
        raise SigningFailure(f"Could not sign request: {e}") from e
    return base64.b64encode(digest).decode("ascii")


def new_nonce() -> int:
    """Random integer in [0, NONCE_LIMIT), safe to call from any thread."""
    return secrets.randbelow(NONCE_LIMIT)


@dataclass(frozen=True)
class CanonicalRequest:
    """Header strings for one request. Built per call and never reused."""

    path: str
    action: str
    auth_data: str
    auth_sign: str = field(repr=False)

    def headers(self) -> dict[str, str]:
        return {
            ACTION_HEADER: self.action,
            AUTH_DATA_HEADER: self.auth_data,
            AUTH_SIGN_HEADER: self.auth_sign,
        }


def build_canonical_request(
    action: str,
    path: str,
    key_name: str,
    secret: bytes,
    *,
    timestamp: int,
    nonce: int,
) -> CanonicalRequest:
    """
    Build the authentication headers for one request.

    Deterministic for fixed ``timestamp`` and ``nonce``; callers must supply
    fresh values for every request.

    Raises:
        InvalidPath: If ``path`` is not a valid root-relative path.
    """
    ns_path = canonical_path(path)
    acs_action = action_header(action)
    acs_auth_data = auth_data_header(key_name, timestamp, nonce)
    acs_auth_sign = sign(secret, signing_payload(acs_auth_data, ns_path, acs_action))
    return CanonicalRequest(
        path=ns_path,
        action=acs_action,
        auth_data=acs_auth_data,
        auth_sign=acs_auth_sign,
    )
