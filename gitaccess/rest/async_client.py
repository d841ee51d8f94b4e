"""
Async REST client for the Bitbucket Server SSH access keys API.

Cancelling the awaiting task aborts the in-flight request.
"""

import asyncio
import ssl
import time
from typing import Any

import httpx

from gitaccess.api import AsyncKeyClientAPI, validate_create_request
from gitaccess.auth import BearerAuth
from gitaccess.logging import get_logger, log_http_response
from gitaccess.rest.client import (
    DEFAULT_TIMEOUT,
    JSON_HEADERS,
    deadline_exceeded,
    decode_key_response,
    encode_upload_payload,
    keys_path,
    log_request,
    wrap_transport_error,
)
from gitaccess.types.keys import AccessKey, RepositoryRef

logger = get_logger()


async def _log_request(request: httpx.Request) -> None:
    log_request(request)


class AsyncRestClient(AsyncKeyClientAPI):
    """Async access key client speaking the Bitbucket Server REST dialect."""

    def __init__(
        self,
        base_url: str,
        token: str,
        tls_config: ssl.SSLContext | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the async REST client.

        Args:
            base_url: Server URL, optionally with a context path
            token: Bearer token sent with every request
            tls_config: TLS context used verbatim; httpx defaults when None
            timeout: Default deadline for a whole call, in seconds
            transport: Custom async httpx transport
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            auth=BearerAuth(token),
            verify=tls_config if tls_config is not None else True,
            timeout=timeout,
            transport=transport,
            event_hooks={"request": [_log_request]},
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncRestClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def create_access_key(
        self,
        repo: RepositoryRef,
        key: AccessKey,
        *,
        timeout: float | None = None,
    ) -> AccessKey:
        """
        Upload ``key`` to ``repo`` with a single POST.

        Args:
            repo: The target repository
            key: The key to upload
            timeout: Deadline for the whole call in seconds (default: client timeout)

        Returns:
            The key as stored by the server, with its id

        Raises:
            ValidationError: If ``repo`` or ``key`` break the contract
            NotFoundError: If the repository does not exist
            RequestFailedError: On network errors, non-2xx statuses, an
                exceeded deadline, or a malformed body
        """
        validate_create_request(repo, key)
        content = encode_upload_payload(key)
        limit = timeout if timeout is not None else self.timeout

        started = time.monotonic()
        try:
            response = await asyncio.wait_for(
                self._client.post(
                    keys_path(repo), content=content, headers=JSON_HEADERS, timeout=limit
                ),
                timeout=limit,
            )
        except asyncio.TimeoutError as e:
            raise deadline_exceeded(limit) from e
        except httpx.RequestError as e:
            raise wrap_transport_error(e) from e
        log_http_response(
            response.status_code,
            str(response.url),
            body=response.content,
            elapsed_ms=(time.monotonic() - started) * 1000,
        )

        created = decode_key_response(response.status_code, response.headers, response.content)
        logger.info(
            "Created access key %d on %s/%s",
            created.id,
            repo.project_key,
            repo.repo_name,
        )
        return created
