"""
Cancellation token shared between a caller and an in-flight request.
"""

import threading
import time

from .errors import Cancelled


class CancelToken:
    """
    Thread-safe cancellation flag with an optional deadline.

    Another thread may call ``cancel()`` at any time. The dispatcher checks the
    token before sending, after the transport returns and between body chunks,
    and passes ``remaining()`` to the transport as its timeout.
    """

    def __init__(self, timeout: float | None = None):
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None when there is none."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def raise_if_cancelled(self, response=None) -> None:
        if self._event.is_set():
            raise Cancelled("Request cancelled", response=response)
        if self.cancelled:
            raise Cancelled("Request deadline exceeded", response=response)
