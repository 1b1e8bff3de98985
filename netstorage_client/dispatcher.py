"""
Signs an Operation, sends it once through the account's HTTP session and
hands the response to the operation's response handler.
"""

import logging
from contextlib import contextmanager
from typing import BinaryIO, Iterator

import requests

from .cancellation import CancelToken
from .credentials import Credentials
from .errors import Cancelled, IOFailure, TransportFailure
from .operation import LocalFile, Operation, Stream
from .response import NetStorageResult
from .signing import build_canonical_request

logger = logging.getLogger(__name__)

USER_AGENT = "NetStorageKit-Python"


@contextmanager
def _open_body(body: LocalFile | Stream | None) -> Iterator[BinaryIO | None]:
    if isinstance(body, Stream):
        yield body.reader
    elif isinstance(body, LocalFile):
        try:
            f = open(body.path, "rb")
        except OSError as e:
            raise IOFailure(f"Cannot open upload source {body.path}: {e}") from e
        with f:
            yield f
    else:
        yield None


def dispatch(
    operation: Operation,
    credentials: Credentials,
    *,
    cancel: CancelToken,
    timestamp: int,
    nonce: int,
) -> NetStorageResult:
    """
    Execute one NetStorage request.

    Args:
        operation: What to send.
        credentials: Account identity and HTTP session.
        cancel: Checked before sending, after the response arrives and while
            the body is read. Its remaining time is the transport timeout.
        timestamp: Epoch seconds for the auth-data header.
        nonce: Random value for the auth-data header.

    Returns:
        NetStorageResult with the (closed) response and the body text.

    Raises:
        InvalidPath: If the operation path is not root-relative.
        IOFailure: If the upload source cannot be opened or the download
            destination cannot be written.
        TransportFailure: On network errors.
        Cancelled: If the token was cancelled or its deadline passed.
    """
    cancel.raise_if_cancelled()

    signed = build_canonical_request(
        operation.action,
        operation.path,
        credentials.key_name,
        credentials.secret,
        timestamp=timestamp,
        nonce=nonce,
    )
    url = f"{credentials.scheme}://{credentials.host}{signed.path}"
    headers = signed.headers()
    headers["Accept-Encoding"] = "identity"
    headers["User-Agent"] = USER_AGENT

    with _open_body(operation.body) as data:
        cancel.raise_if_cancelled()
        timeout = cancel.remaining()
        if timeout == 0:
            raise Cancelled("Request deadline exceeded")

        logger.debug("%s %s (action=%s)", operation.method, url, operation.action)
        try:
            response = credentials.session.request(
                operation.method,
                url,
                headers=headers,
                data=data,
                stream=True,
                timeout=timeout,
            )
        except requests.Timeout as e:
            raise Cancelled(f"{operation.method} {url} timed out: {e}") from e
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", operation.method, url, e)
            raise TransportFailure(f"{operation.method} {url} failed: {e}") from e

    try:
        logger.debug("%s %s -> HTTP %s", operation.method, url, response.status_code)
        cancel.raise_if_cancelled(response)
        body = operation.response_handler.resolve(operation, response, cancel)
    finally:
        response.close()

    return NetStorageResult(response, body)
