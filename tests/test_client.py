"""
Tests for the client factory and ClientConfig.
"""

import ssl
from unittest.mock import patch

import httpx
import pytest

from gitaccess.api import AsyncKeyClientAPI, KeyClientAPI
from gitaccess.client import (
    ClientConfig,
    new_async_client,
    new_async_repository_client,
    new_client,
    new_repository_client,
)
from gitaccess.exceptions import ConfigurationError
from gitaccess.rest.async_client import AsyncRestClient
from gitaccess.rest.client import DEFAULT_TIMEOUT, RestClient
from gitaccess.testing import create_mock_access_key, create_mock_repository_ref, echo_key_handler


def make_config(**overrides) -> ClientConfig:
    values = {"token": "s3cr3t-token", "base_url": "https://git.example.com"}
    values.update(overrides)
    return ClientConfig(**values)


class TestClientConfig:
    """Tests for ClientConfig validation."""

    def test_defaults(self) -> None:
        config = make_config()

        assert config.tls_config is None
        assert config.timeout == DEFAULT_TIMEOUT

    @pytest.mark.parametrize(
        "overrides",
        [
            {"token": ""},
            {"base_url": ""},
            {"base_url": "git.example.com"},
            {"base_url": "ftp://git.example.com"},
            {"timeout": 0},
        ],
    )
    def test_invalid_values(self, overrides: dict) -> None:
        with pytest.raises(ConfigurationError):
            make_config(**overrides)

    def test_repr_hides_token(self) -> None:
        assert "s3cr3t-token" not in repr(make_config())

    def test_is_immutable(self) -> None:
        config = make_config()

        with pytest.raises(AttributeError):
            config.token = "other"  # type: ignore[misc]


class TestFromEnv:
    """Tests for ClientConfig.from_env()."""

    def test_reads_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("GITACCESS_TOKEN", "env-token")
        monkeypatch.setenv("GITACCESS_BASE_URL", "https://bitbucket.internal")
        monkeypatch.setenv("GITACCESS_TIMEOUT", "12.5")
        monkeypatch.delenv("GITACCESS_CA_BUNDLE", raising=False)

        config = ClientConfig.from_env()

        assert config.token == "env-token"
        assert config.base_url == "https://bitbucket.internal"
        assert config.timeout == 12.5
        assert config.tls_config is None

    def test_missing_token(self, monkeypatch) -> None:
        monkeypatch.delenv("GITACCESS_TOKEN", raising=False)
        monkeypatch.setenv("GITACCESS_BASE_URL", "https://bitbucket.internal")

        with pytest.raises(ConfigurationError) as exc_info:
            ClientConfig.from_env()

        assert "GITACCESS_TOKEN" in str(exc_info.value)

    def test_missing_base_url(self, monkeypatch) -> None:
        monkeypatch.setenv("GITACCESS_TOKEN", "env-token")
        monkeypatch.delenv("GITACCESS_BASE_URL", raising=False)

        with pytest.raises(ConfigurationError) as exc_info:
            ClientConfig.from_env()

        assert "GITACCESS_BASE_URL" in str(exc_info.value)

    def test_invalid_timeout(self, monkeypatch) -> None:
        monkeypatch.setenv("GITACCESS_TOKEN", "env-token")
        monkeypatch.setenv("GITACCESS_BASE_URL", "https://bitbucket.internal")
        monkeypatch.setenv("GITACCESS_TIMEOUT", "soon")

        with pytest.raises(ConfigurationError) as exc_info:
            ClientConfig.from_env()

        assert "GITACCESS_TIMEOUT" in str(exc_info.value)

    def test_unreadable_ca_bundle(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv("GITACCESS_TOKEN", "env-token")
        monkeypatch.setenv("GITACCESS_BASE_URL", "https://bitbucket.internal")
        monkeypatch.setenv("GITACCESS_CA_BUNDLE", str(tmp_path / "missing.pem"))

        with pytest.raises(ConfigurationError) as exc_info:
            ClientConfig.from_env()

        assert "GITACCESS_CA_BUNDLE" in str(exc_info.value)


class TestFactory:
    """Tests for the new_*client functions."""

    def test_new_client_returns_rest_client(self) -> None:
        client = new_client(make_config())

        assert isinstance(client, RestClient)
        assert client.base_url == "https://git.example.com"
        client.close()

    def test_repository_client_is_narrow_interface(self) -> None:
        client = new_repository_client(make_config())

        assert isinstance(client, KeyClientAPI)
        client.close()  # type: ignore[attr-defined]

    def test_async_factories(self) -> None:
        assert isinstance(new_async_client(make_config()), AsyncRestClient)
        assert isinstance(new_async_repository_client(make_config()), AsyncKeyClientAPI)

    def test_construction_does_no_io(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            pytest.fail("construction must not send requests")

        client = new_client(make_config(), transport=httpx.MockTransport(handler))
        client.close()

    def test_tls_context_is_passed_verbatim(self) -> None:
        tls = ssl.create_default_context()

        with patch("gitaccess.rest.client.httpx.Client") as client_cls:
            new_client(make_config(tls_config=tls, timeout=5.0))

        client_cls.assert_called_once()
        kwargs = client_cls.call_args.kwargs
        assert kwargs["verify"] is tls
        assert kwargs["timeout"] == 5.0
        assert kwargs["base_url"] == "https://git.example.com"

    def test_default_tls_verification(self) -> None:
        with patch("gitaccess.rest.client.httpx.Client") as client_cls:
            new_client(make_config())

        assert client_cls.call_args.kwargs["verify"] is True

    def test_configured_client_sends_token(self) -> None:
        seen: list[str | None] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.headers.get("Authorization"))
            return echo_key_handler()(request)

        with new_client(make_config(), transport=httpx.MockTransport(handler)) as client:
            client.create_access_key(create_mock_repository_ref(), create_mock_access_key())

        assert seen == ["Bearer s3cr3t-token"]
