"""
Unit tests for netstorage_client.credentials module.

Tests cover:
- Construction-time validation of host, key name and secret
- Scheme validation
- String secrets are stored as bytes
- Building credentials from NetStorageConfig
- Immutability
"""

import dataclasses
from unittest.mock import MagicMock

import pytest
import requests

from netstorage_client.config import NetStorageConfig
from netstorage_client.credentials import Credentials
from netstorage_client.errors import InvalidArgument


class TestCredentialsValidation:
    """Tests for Credentials construction."""

    def test_empty_secret_fails_construction(self):
        with pytest.raises(InvalidArgument, match="secret"):
            Credentials(host="h-nsu.akamaihd.net", key_name="k", secret=b"")

    def test_empty_host_fails_construction(self):
        with pytest.raises(InvalidArgument, match="host"):
            Credentials(host="", key_name="k", secret=b"s")

    def test_empty_key_name_fails_construction(self):
        with pytest.raises(InvalidArgument, match="key_name"):
            Credentials(host="h", key_name="", secret=b"s")

    def test_all_missing_fields_listed(self):
        with pytest.raises(InvalidArgument) as exc_info:
            Credentials(host="", key_name="", secret=b"")
        assert "host, key_name, secret" in str(exc_info.value)

    def test_invalid_scheme_rejected(self):
        with pytest.raises(InvalidArgument, match="scheme"):
            Credentials(host="h", key_name="k", secret=b"s", scheme="ftp")

    def test_string_secret_encoded_to_bytes(self):
        creds = Credentials(host="h", key_name="k", secret="sécret", session=MagicMock())
        assert creds.secret == "sécret".encode("utf-8")

    def test_default_session_created(self):
        creds = Credentials(host="h", key_name="k", secret=b"s")
        assert isinstance(creds.session, requests.Session)
        creds.session.close()

    def test_credentials_are_frozen(self, credentials):
        with pytest.raises(dataclasses.FrozenInstanceError):
            credentials.host = "other"

    def test_repr_hides_secret(self, credentials):
        assert "testsecret" not in repr(credentials)


class TestCredentialsFromConfig:
    """Tests for Credentials.from_config."""

    def test_https_when_ssl_enabled(self, ns_config):
        session = MagicMock(spec=requests.Session)
        creds = Credentials.from_config(ns_config, session=session)

        assert creds.host == "example-nsu.akamaihd.net"
        assert creds.key_name == "testkey"
        assert creds.secret == b"testsecret"
        assert creds.scheme == "https"
        assert creds.session is session

    def test_http_when_ssl_disabled(self):
        config = NetStorageConfig(host="h", keyname="k", key="s", ssl=False)
        creds = Credentials.from_config(config, session=MagicMock())
        assert creds.scheme == "http"

    def test_empty_key_in_config_rejected(self):
        config = NetStorageConfig(host="h", keyname="k", key="")
        with pytest.raises(InvalidArgument):
            Credentials.from_config(config, session=MagicMock())
