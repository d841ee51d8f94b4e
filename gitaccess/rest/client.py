"""
REST client for the Bitbucket Server SSH access keys API.

Handles request construction, payload translation, bearer authentication and
error response parsing. Retries are left to the caller.
"""

import json
import ssl
import time
from typing import Any
from urllib.parse import quote

import httpx

from gitaccess.api import KeyClientAPI, validate_create_request
from gitaccess.auth import BearerAuth
from gitaccess.exceptions import NotFoundError, RequestFailedError
from gitaccess.logging import get_logger, log_http_request, log_http_response
from gitaccess.rest.payloads import KeyDescription, UploadKeyPayload
from gitaccess.types.keys import AccessKey, RepositoryRef

KEYS_PATH_TEMPLATE = "/rest/keys/1.0/projects/{project}/repos/{repo}/ssh"
REQUEST_ID_HEADER = "X-AREQUESTID"
DEFAULT_TIMEOUT = 30.0

JSON_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}

logger = get_logger()


def keys_path(repo: RepositoryRef) -> str:
    """
    Build the SSH keys endpoint path for a repository.

    Every identifier is escaped as a single path segment, so ``/`` and other
    reserved characters can never add segments to the path.
    """
    return KEYS_PATH_TEMPLATE.format(
        project=quote(repo.project_key, safe=""),
        repo=quote(repo.repo_name, safe=""),
    )


def encode_upload_payload(key: AccessKey) -> bytes:
    """
    Translate a key into the upload body and serialize it.

    Raises:
        RequestFailedError: If the payload cannot be serialized
    """
    payload = UploadKeyPayload.from_access_key(key).to_dict()
    try:
        return json.dumps(payload).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise RequestFailedError(
            "SERIALIZATION_ERROR", f"Could not encode key payload: {e}"
        ) from e


def parse_error_response(
    status_code: int, headers: httpx.Headers, content: bytes
) -> RequestFailedError:
    """
    Parse an error response into a typed exception.

    Args:
        status_code: HTTP status of a non-success response
        headers: Response headers
        content: Raw response body

    Returns:
        NotFoundError for 404, RequestFailedError otherwise
    """
    try:
        data = json.loads(content) if content else {}
    except ValueError:
        data = {}

    message = f"HTTP {status_code}"
    errors = data.get("errors") if isinstance(data, dict) else None
    if isinstance(errors, list):
        messages = [
            str(error["message"])
            for error in errors
            if isinstance(error, dict) and error.get("message")
        ]
        if messages:
            message = "; ".join(messages)

    request_id = headers.get(REQUEST_ID_HEADER)

    if status_code == 404:
        return NotFoundError("NOT_FOUND", message, status_code, request_id)
    elif status_code == 400:
        code = "BAD_REQUEST"
    elif status_code == 401:
        code = "UNAUTHORIZED"
    elif status_code == 403:
        code = "FORBIDDEN"
    elif status_code == 409:
        code = "CONFLICT"
    elif status_code >= 500:
        code = "SERVER_ERROR"
    else:
        code = "HTTP_ERROR"
    return RequestFailedError(code, message, status_code, request_id)


def decode_key_response(
    status_code: int, headers: httpx.Headers, content: bytes
) -> AccessKey:
    """
    Turn a response into an AccessKey, or raise the matching error.

    Raises:
        NotFoundError: On 404
        RequestFailedError: On other non-success statuses or a malformed body
    """
    if not 200 <= status_code < 300:
        raise parse_error_response(status_code, headers, content)

    try:
        description = KeyDescription.from_dict(json.loads(content))
        return description.to_access_key()
    except (KeyError, TypeError, ValueError) as e:
        raise RequestFailedError(
            "DECODE_ERROR",
            f"Malformed access key response: {e!r}",
            status_code,
            headers.get(REQUEST_ID_HEADER),
        ) from e


def wrap_transport_error(error: httpx.RequestError) -> RequestFailedError:
    """Wrap a network-level httpx error."""
    if isinstance(error, httpx.TimeoutException):
        return RequestFailedError("TIMEOUT", str(error) or "Request timed out")
    return RequestFailedError("CONNECTION_ERROR", str(error))


def deadline_exceeded(timeout: float) -> RequestFailedError:
    return RequestFailedError("TIMEOUT", f"Request exceeded its {timeout:g}s deadline")


def log_request(request: httpx.Request) -> None:
    """httpx request hook; runs after auth so the logged headers are the sent ones."""
    log_http_request(
        request.method,
        str(request.url),
        headers=dict(request.headers),
        body=request.content,
    )


class RestClient(KeyClientAPI):
    """
    Access key client speaking the Bitbucket Server REST dialect.

    Safe to share between threads: the only state is the underlying
    ``httpx.Client`` and its connection pool.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        tls_config: ssl.SSLContext | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the REST client.

        Args:
            base_url: Server URL, optionally with a context path
                (e.g., "https://git.example.com/bitbucket")
            token: Bearer token sent with every request
            tls_config: TLS context used verbatim; httpx defaults when None
            timeout: Default deadline for a whole call, in seconds
            transport: Custom httpx transport (e.g., ``httpx.MockTransport``)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self._client = httpx.Client(
            base_url=self.base_url,
            auth=BearerAuth(token),
            verify=tls_config if tls_config is not None else True,
            timeout=timeout,
            transport=transport,
            event_hooks={"request": [log_request]},
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "RestClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def create_access_key(
        self,
        repo: RepositoryRef,
        key: AccessKey,
        *,
        timeout: float | None = None,
    ) -> AccessKey:
        """
        Upload ``key`` to ``repo`` with a single POST.

        The body is streamed so the deadline covers the whole call, not just
        each socket read.

        Args:
            repo: The target repository
            key: The key to upload
            timeout: Deadline for the call in seconds (default: client timeout)

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
        deadline = started + limit
        try:
            with self._client.stream(
                "POST", keys_path(repo), content=content, headers=JSON_HEADERS, timeout=limit
            ) as response:
                chunks = []
                for chunk in response.iter_bytes():
                    if time.monotonic() > deadline:
                        raise deadline_exceeded(limit)
                    chunks.append(chunk)
                if time.monotonic() > deadline:
                    raise deadline_exceeded(limit)
        except httpx.RequestError as e:
            raise wrap_transport_error(e) from e

        body = b"".join(chunks)
        log_http_response(
            response.status_code,
            str(response.url),
            body=body,
            elapsed_ms=(time.monotonic() - started) * 1000,
        )

        created = decode_key_response(response.status_code, response.headers, body)
        logger.info(
            "Created access key %d on %s/%s",
            created.id,
            repo.project_key,
            repo.repo_name,
        )
        return created
