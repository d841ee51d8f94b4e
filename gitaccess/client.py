"""
gitaccess client factory.

Builds configured access key clients from connection settings. Construction
is pure wiring; no network I/O happens until the first call.
"""

import os
import ssl
from dataclasses import dataclass
from urllib.parse import urlparse

import httpx

from gitaccess.api import AsyncKeyClientAPI, KeyClientAPI
from gitaccess.exceptions import ConfigurationError
from gitaccess.rest.async_client import AsyncRestClient
from gitaccess.rest.client import DEFAULT_TIMEOUT, RestClient


@dataclass(frozen=True)
class ClientConfig:
    """
    Connection settings for a Git server.

    Example:
        ```python
        from gitaccess import ClientConfig, new_repository_client

        config = ClientConfig(token="...", base_url="https://git.example.com")
        # Or create from environment variables
        config = ClientConfig.from_env()

        client = new_repository_client(config)
        ```
    """

    token: str
    base_url: str
    tls_config: ssl.SSLContext | None = None
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if not self.token:
            raise ConfigurationError("token must not be empty")
        if not self.base_url:
            raise ConfigurationError("base_url must not be empty")
        parsed = urlparse(self.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(
                f"Invalid base_url: {self.base_url!r}. Must be an http(s) URL"
            )
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")

    def __repr__(self) -> str:
        return (
            f"ClientConfig(token='[REDACTED]', base_url={self.base_url!r}, "
            f"tls_config={self.tls_config!r}, timeout={self.timeout!r})"
        )

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        Create a configuration from environment variables.

        Environment variables:
            GITACCESS_TOKEN: Bearer token (required)
            GITACCESS_BASE_URL: Server URL (required)
            GITACCESS_CA_BUNDLE: Path to a PEM CA bundle to trust (optional)
            GITACCESS_TIMEOUT: Request timeout in seconds (optional, default: 30)

        Returns:
            Validated ClientConfig

        Raises:
            ConfigurationError: If required variables are missing or malformed
        """
        token = os.environ.get("GITACCESS_TOKEN")
        base_url = os.environ.get("GITACCESS_BASE_URL")
        ca_bundle = os.environ.get("GITACCESS_CA_BUNDLE")
        timeout_str = os.environ.get("GITACCESS_TIMEOUT")

        if not token:
            raise ConfigurationError("GITACCESS_TOKEN environment variable not set")

        if not base_url:
            raise ConfigurationError("GITACCESS_BASE_URL environment variable not set")

        tls_config = None
        if ca_bundle:
            try:
                tls_config = ssl.create_default_context(cafile=ca_bundle)
            except (OSError, ssl.SSLError) as e:
                raise ConfigurationError(
                    f"Could not load GITACCESS_CA_BUNDLE {ca_bundle!r}: {e}"
                ) from e

        timeout = DEFAULT_TIMEOUT
        if timeout_str:
            try:
                timeout = float(timeout_str)
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid GITACCESS_TIMEOUT: {timeout_str!r}. Must be a number"
                ) from e

        return cls(
            token=token,
            base_url=base_url,
            tls_config=tls_config,
            timeout=timeout,
        )


def new_client(
    config: ClientConfig, transport: httpx.BaseTransport | None = None
) -> RestClient:
    """Create a REST client with the given base URL, token and TLS policy."""
    return RestClient(
        base_url=config.base_url,
        token=config.token,
        tls_config=config.tls_config,
        timeout=config.timeout,
        transport=transport,
    )


def new_repository_client(
    config: ClientConfig, transport: httpx.BaseTransport | None = None
) -> KeyClientAPI:
    """Create a client for the repository access key API."""
    return new_client(config, transport=transport)


def new_async_client(
    config: ClientConfig, transport: httpx.AsyncBaseTransport | None = None
) -> AsyncRestClient:
    """Create an async REST client with the given base URL, token and TLS policy."""
    return AsyncRestClient(
        base_url=config.base_url,
        token=config.token,
        tls_config=config.tls_config,
        timeout=config.timeout,
        transport=transport,
    )


def new_async_repository_client(
    config: ClientConfig, transport: httpx.AsyncBaseTransport | None = None
) -> AsyncKeyClientAPI:
    """Create an async client for the repository access key API."""
    return new_async_client(config, transport=transport)
