"""
Shared pytest fixtures for netstorage_client tests.
"""

from collections.abc import Generator
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

from netstorage_client.client import NetStorage
from netstorage_client.config import NetStorageConfig
from netstorage_client.credentials import Credentials

FIXED_TIMESTAMP = 1700000000
FIXED_NONCE = 4242


def make_response(status: int = 200, body: bytes = b"", chunks: list | None = None) -> MagicMock:
    """
    Creates a mocked requests.Response.

    Args:
        status: HTTP status code.
        body: Whole body, returned as a single chunk.
        chunks: Explicit chunk list (overrides body). May contain an
            exception instance to raise at that point of the stream.
    """
    response = MagicMock(spec=requests.Response)
    response.status_code = status
    parts = chunks if chunks is not None else ([body] if body else [])

    def _iter_content(chunk_size=1, decode_unicode=False):
        for part in parts:
            if isinstance(part, BaseException):
                raise part
            yield part

    response.iter_content.side_effect = _iter_content
    return response


class FakeNetStorageServer:
    """
    In-memory stand-in for the NetStorage HTTP endpoint.

    Stores uploads by path and serves them back on download. Used as the
    side_effect of a mocked Session.request.
    """

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.directories: set[str] = {"/"}
        self.calls: list[dict] = []

    def request(self, method, url, headers=None, data=None, stream=False, timeout=None):
        path = "/" + url.split("://", 1)[1].split("/", 1)[1]
        action = headers["X-Akamai-ACS-Action"].split("action=", 1)[1]
        self.calls.append({"method": method, "path": path, "action": action})

        if action == "upload":
            self.objects[path] = data.read() if data is not None else b""
            return make_response(200)
        if action == "download":
            if path not in self.objects:
                return make_response(404, b"<HTML>Not Found</HTML>")
            return make_response(200, self.objects[path])
        if action == "mkdir":
            if path in self.directories:
                return make_response(409, b"<HTML>Conflict</HTML>")
            self.directories.add(path)
            return make_response(200, b'<HTML>Request Processed.</HTML>')
        if action == "rmdir":
            if path not in self.directories:
                return make_response(404, b"<HTML>Not Found</HTML>")
            self.directories.remove(path)
            return make_response(200, b'<HTML>Request Processed.</HTML>')
        if action == "delete":
            if path not in self.objects:
                return make_response(404, b"<HTML>Not Found</HTML>")
            del self.objects[path]
            return make_response(200, b'<HTML>Request Processed.</HTML>')
        return make_response(200, b'<stat directory="/"></stat>')


@pytest.fixture
def ns_config() -> NetStorageConfig:
    """Creates a standard NetStorageConfig for testing."""
    return NetStorageConfig(
        host="example-nsu.akamaihd.net",
        keyname="testkey",
        key="testsecret",
        ssl=True,
    )


@pytest.fixture
def mock_session() -> MagicMock:
    """Creates a mocked requests.Session answering 200 with an empty body."""
    session = MagicMock(spec=requests.Session)
    session.request.return_value = make_response(200)
    return session


@pytest.fixture
def credentials(mock_session: MagicMock) -> Credentials:
    return Credentials(
        host="example-nsu.akamaihd.net",
        key_name="testkey",
        secret=b"testsecret",
        scheme="https",
        session=mock_session,
    )


@pytest.fixture
def client(credentials: Credentials) -> NetStorage:
    """Creates a NetStorage client with a fixed clock and nonce."""
    return NetStorage(
        credentials,
        timeout=30,
        clock=lambda: FIXED_TIMESTAMP,
        nonce_factory=lambda: FIXED_NONCE,
    )


@pytest.fixture
def fake_server(mock_session: MagicMock) -> FakeNetStorageServer:
    """Routes the mocked session through an in-memory NetStorage."""
    server = FakeNetStorageServer()
    mock_session.request.side_effect = server.request
    return server


@pytest.fixture
def tmp_config_file(tmp_path: Path) -> Generator[Path, None, None]:
    """
    Creates a temporary INI configuration file for config tests.

    Returns:
        Path to the temporary config file.
    """
    config_content = """[netstorage]
host = example-nsu.akamaihd.net
keyname = uploadkey
key = s3cr3t%key
ssl = false

[connection]
timeout_seconds = 45

[logging]
level = DEBUG
file = test.log
console = false
"""
    config_path = tmp_path / "test_config.ini"
    config_path.write_text(config_content, encoding="utf-8")
    yield config_path


@pytest.fixture
def minimal_config_file(tmp_path: Path) -> Generator[Path, None, None]:
    """
    Creates a minimal INI configuration file with only required fields.

    Returns:
        Path to the temporary config file.
    """
    config_content = """[netstorage]
host = minimal-nsu.akamaihd.net
keyname = k
key = s
"""
    config_path = tmp_path / "minimal_config.ini"
    config_path.write_text(config_content, encoding="utf-8")
    yield config_path
