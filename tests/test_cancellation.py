"""
Unit tests for netstorage_client.cancellation module.
"""

import threading
from unittest.mock import patch

import pytest

from netstorage_client.cancellation import CancelToken
from netstorage_client.errors import Cancelled


class TestCancelToken:
    def test_new_token_not_cancelled(self):
        token = CancelToken()
        assert token.cancelled is False
        assert token.remaining() is None
        token.raise_if_cancelled()

    def test_cancel_sets_flag(self):
        token = CancelToken()
        token.cancel()
        assert token.cancelled is True
        with pytest.raises(Cancelled, match="cancelled"):
            token.raise_if_cancelled()

    def test_cancel_from_other_thread(self):
        token = CancelToken()
        worker = threading.Thread(target=token.cancel)
        worker.start()
        worker.join()
        assert token.cancelled is True

    def test_deadline_expires(self):
        with patch("netstorage_client.cancellation.time.monotonic", return_value=100.0):
            token = CancelToken(timeout=5)
        with patch("netstorage_client.cancellation.time.monotonic", return_value=103.0):
            assert token.cancelled is False
            assert token.remaining() == pytest.approx(2.0)
        with patch("netstorage_client.cancellation.time.monotonic", return_value=106.0):
            assert token.cancelled is True
            assert token.remaining() == 0.0
            with pytest.raises(Cancelled, match="deadline"):
                token.raise_if_cancelled()

    def test_cancelled_carries_response(self):
        token = CancelToken()
        token.cancel()
        response = object()
        with pytest.raises(Cancelled) as exc_info:
            token.raise_if_cancelled(response)
        assert exc_info.value.response is response

    def test_cancelled_is_timeout_error(self):
        token = CancelToken(timeout=0)
        with pytest.raises(TimeoutError):
            token.raise_if_cancelled()
