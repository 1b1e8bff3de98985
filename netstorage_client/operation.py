"""
Operation descriptors passed from the client methods to the dispatcher.
"""

from dataclasses import dataclass, field
from typing import BinaryIO

from .response import BufferAsText, ResponseHandler


@dataclass(frozen=True)
class LocalFile:
    """Upload body read from a local file, opened by the dispatcher."""

    path: str


@dataclass(frozen=True)
class Stream:
    """Upload body read from a caller-owned binary stream, sent as is."""

    reader: BinaryIO


@dataclass(frozen=True)
class Operation:
    """
    One remote call: what to ask for, where, with which body, and how to
    handle the answer.

    ``body`` holds at most one source, so a file path and a stream can never
    both be supplied.
    """

    action: str
    method: str
    path: str
    body: LocalFile | Stream | None = None
    response_handler: ResponseHandler = field(default_factory=BufferAsText)
