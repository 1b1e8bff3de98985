"""
Response handling strategies.

An Operation carries one of these handlers and the dispatcher hands it the
response once the server has answered. ``DownloadToFile`` streams a
successful download to disk; ``BufferAsText`` reads the body into memory.
"""

import logging
import os
import posixpath
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, NamedTuple, Protocol
from urllib.parse import urlsplit

import requests
from urllib3.exceptions import ReadTimeoutError

from .errors import Cancelled, IOFailure, NetStorageError, RemoteError, TransportFailure

if TYPE_CHECKING:
    from .cancellation import CancelToken
    from .operation import Operation

logger = logging.getLogger(__name__)

DOWNLOAD_DONE = "Download done"
CHUNK_SIZE = 64 * 1024


class NetStorageResult(NamedTuple):
    """What every operation returns: the raw response and its body text."""

    response: requests.Response
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.response.status_code < 300

    def raise_for_status(self) -> None:
        """Raise RemoteError unless the server answered with a 2xx status."""
        if not self.ok:
            raise RemoteError(
                f"NetStorage returned HTTP {self.response.status_code}: {self.body.strip()}",
                response=self.response,
            )


class ResponseHandler(Protocol):
    def resolve(
        self, operation: "Operation", response: requests.Response, cancel: "CancelToken"
    ) -> str: ...


def iter_body(response: requests.Response, cancel: "CancelToken") -> Iterator[bytes]:
    """Yield the response body in chunks, checking for cancellation between them."""
    try:
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            cancel.raise_if_cancelled(response)
            yield chunk
    except requests.RequestException as e:
        if cancel.cancelled or _is_read_timeout(e):
            raise Cancelled(f"Response body not received in time: {e}", response=response) from e
        raise TransportFailure(f"Failed reading response body: {e}", response=response) from e


def _is_read_timeout(error: requests.RequestException) -> bool:
    # iter_content reports a urllib3 read timeout as requests.ConnectionError
    if isinstance(error, requests.Timeout):
        return True
    return any(isinstance(arg, ReadTimeoutError) for arg in error.args) or isinstance(
        error.__context__, ReadTimeoutError
    )


def read_text(response: requests.Response, cancel: "CancelToken") -> str:
    body = b"".join(iter_body(response, cancel))
    return body.decode("utf-8", errors="replace")


class BufferAsText:
    """Read the whole body into memory and decode it."""

    def resolve(self, operation, response, cancel) -> str:
        return read_text(response, cancel)

    def __repr__(self) -> str:
        return "BufferAsText()"


@dataclass(frozen=True)
class DownloadToFile:
    """
    Stream a 200 response into a local file.

    ``destination`` may be empty (basename of the remote path in the current
    directory), an existing directory (basename joined onto it) or a file path.
    Any other status is buffered as text so the caller can read the error.
    """

    destination: str = ""

    def local_path(self, remote_path: str) -> str:
        name = posixpath.basename(urlsplit(remote_path).path)
        if not self.destination:
            return name
        if os.path.isdir(self.destination):
            return os.path.join(self.destination, name)
        return self.destination

    def resolve(self, operation, response, cancel) -> str:
        if response.status_code != 200:
            return read_text(response, cancel)

        target = self.local_path(operation.path)
        try:
            out = open(target, "wb")
        except OSError as e:
            raise IOFailure(f"Cannot create download destination {target}: {e}", response=response) from e

        try:
            with out:
                for chunk in iter_body(response, cancel):
                    out.write(chunk)
        except NetStorageError:
            _discard(target)
            raise
        except OSError as e:
            _discard(target)
            raise IOFailure(f"Failed writing {target}: {e}", response=response) from e

        logger.debug("Downloaded %s to %s", operation.path, target)
        return DOWNLOAD_DONE


def _discard(path: str) -> None:
    """Remove a partially written download."""
    try:
        os.remove(path)
    except OSError as e:
        logger.warning("Could not remove partial download %s: %s", path, e)
