"""
NetStorage HTTP API client.

Each public method maps one NetStorage action onto an Operation and sends it
through the dispatcher. Every method returns a NetStorageResult
``(response, body)``; status codes are left for the caller to interpret
(see ``NetStorageResult.raise_for_status``).
"""

import logging
import os
import stat as stat_module
import time
from typing import BinaryIO, Callable
from urllib.parse import quote_plus

import requests

from .cancellation import CancelToken
from .config import AppConfig
from .credentials import Credentials
from .dispatcher import dispatch
from .errors import InvalidArgument
from .operation import LocalFile, Operation, Stream
from .response import DownloadToFile, NetStorageResult
from .signing import new_nonce

logger = logging.getLogger(__name__)


class NetStorage:
    """
    Client for one NetStorage upload account.

    Safe to share between threads: the credentials are immutable and every
    call builds its own signature, nonce and timestamp. ``clock`` and
    ``nonce_factory`` can be replaced to make signatures reproducible.
    """

    def __init__(
        self,
        credentials: Credentials,
        timeout: float | None = None,
        clock: Callable[[], float] = time.time,
        nonce_factory: Callable[[], int] = new_nonce,
    ):
        self.credentials = credentials
        self.timeout = timeout
        self._clock = clock
        self._nonce_factory = nonce_factory

    @classmethod
    def from_config(
        cls, config: AppConfig, session: requests.Session | None = None
    ) -> "NetStorage":
        """Build a client from a loaded AppConfig."""
        credentials = Credentials.from_config(config.netstorage, session=session)
        return cls(credentials, timeout=config.connection.timeout_seconds)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.credentials.session.close()

    def __enter__(self) -> "NetStorage":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, operation: Operation, cancel: CancelToken | None) -> NetStorageResult:
        if cancel is None:
            cancel = CancelToken(self.timeout)
        return dispatch(
            operation,
            self.credentials,
            cancel=cancel,
            timestamp=int(self._clock()),
            nonce=self._nonce_factory(),
        )

    def dir(self, ns_path: str, *, cancel: CancelToken | None = None) -> NetStorageResult:
        """List a directory. The body is the server's XML listing."""
        logger.debug("dir %s", ns_path)
        return self._request(Operation("dir&format=xml", "GET", ns_path), cancel)

    def download(
        self,
        ns_source: str,
        local_destination: str = "",
        *,
        cancel: CancelToken | None = None,
    ) -> NetStorageResult:
        """
        Download a file.

        Args:
            ns_source: Remote file path. Directories cannot be downloaded.
            local_destination: Local file or existing directory. Defaults to
                the remote file name in the current directory.

        Returns:
            Result whose body is "Download done" when the file was written.

        Raises:
            InvalidArgument: If ns_source ends with "/".
        """
        if ns_source.endswith("/"):
            raise InvalidArgument(f"NetStorage download path shouldn't be a directory: {ns_source}")

        logger.debug("download %s -> %s", ns_source, local_destination or ".")
        return self._request(
            Operation(
                "download",
                "GET",
                ns_source,
                response_handler=DownloadToFile(local_destination),
            ),
            cancel,
        )

    def du(self, ns_path: str, *, cancel: CancelToken | None = None) -> NetStorageResult:
        """Disk usage of a directory, as XML."""
        logger.debug("du %s", ns_path)
        return self._request(Operation("du&format=xml", "GET", ns_path), cancel)

    def stat(self, ns_path: str, *, cancel: CancelToken | None = None) -> NetStorageResult:
        """Metadata of a file, symlink or directory, as XML."""
        logger.debug("stat %s", ns_path)
        return self._request(Operation("stat&format=xml", "GET", ns_path), cancel)

    def mkdir(self, ns_path: str, *, cancel: CancelToken | None = None) -> NetStorageResult:
        logger.debug("mkdir %s", ns_path)
        return self._request(Operation("mkdir", "POST", ns_path), cancel)

    def rmdir(self, ns_path: str, *, cancel: CancelToken | None = None) -> NetStorageResult:
        """Remove an empty directory."""
        logger.debug("rmdir %s", ns_path)
        return self._request(Operation("rmdir", "POST", ns_path), cancel)

    def mtime(
        self, ns_path: str, mtime: int, *, cancel: CancelToken | None = None
    ) -> NetStorageResult:
        """Set a file's modification time (epoch seconds)."""
        logger.debug("mtime %s %d", ns_path, mtime)
        return self._request(
            Operation(f"mtime&format=xml&mtime={int(mtime)}", "POST", ns_path), cancel
        )

    def delete(self, ns_path: str, *, cancel: CancelToken | None = None) -> NetStorageResult:
        """Delete a file or symbolic link."""
        logger.debug("delete %s", ns_path)
        return self._request(Operation("delete", "POST", ns_path), cancel)

    def quick_delete(
        self, ns_path: str, *, cancel: CancelToken | None = None
    ) -> NetStorageResult:
        """
        Recursively delete a directory tree.

        The account needs the quick-delete privilege on the CP code.
        """
        logger.debug("quick-delete %s", ns_path)
        return self._request(
            Operation("quick-delete&quick-delete=imreallyreallysure", "POST", ns_path), cancel
        )

    def rename(
        self, ns_target: str, ns_destination: str, *, cancel: CancelToken | None = None
    ) -> NetStorageResult:
        """Rename a file or symbolic link."""
        logger.debug("rename %s -> %s", ns_target, ns_destination)
        return self._request(
            Operation(f"rename&destination={quote_plus(ns_destination)}", "POST", ns_target),
            cancel,
        )

    def symlink(
        self, ns_target: str, ns_destination: str, *, cancel: CancelToken | None = None
    ) -> NetStorageResult:
        """Create a symbolic link at ns_destination pointing to ns_target."""
        logger.debug("symlink %s -> %s", ns_destination, ns_target)
        return self._request(
            Operation(f"symlink&target={quote_plus(ns_target)}", "POST", ns_destination),
            cancel,
        )

    def upload(
        self, local_source: str, ns_destination: str, *, cancel: CancelToken | None = None
    ) -> NetStorageResult:
        """
        Upload a local file.

        If ns_destination ends with "/", the local file name is appended.

        Raises:
            InvalidArgument: If local_source is missing or not a regular file.
        """
        try:
            st = os.stat(local_source)
        except OSError as e:
            raise InvalidArgument(f"Cannot upload {local_source}: {e}") from e

        if not stat_module.S_ISREG(st.st_mode):
            raise InvalidArgument(f"You should upload a file, not {local_source}")

        if ns_destination.endswith("/"):
            ns_destination = ns_destination + os.path.basename(local_source)

        logger.debug("upload %s -> %s (%d bytes)", local_source, ns_destination, st.st_size)
        return self._request(
            Operation("upload", "PUT", ns_destination, body=LocalFile(local_source)), cancel
        )

    def upload_content(
        self, reader: BinaryIO, ns_destination: str, *, cancel: CancelToken | None = None
    ) -> NetStorageResult:
        """
        Upload the contents of a binary stream.

        Raises:
            InvalidArgument: If ns_destination ends with "/".
        """
        if ns_destination.endswith("/"):
            raise InvalidArgument(
                f"Destination path should not be a directory: {ns_destination}"
            )

        logger.debug("upload stream -> %s", ns_destination)
        return self._request(
            Operation("upload", "PUT", ns_destination, body=Stream(reader)), cancel
        )
