"""
Pytest fixtures for gitaccess testing.

Provides common fixtures for testing applications that use gitaccess, plus
helpers for building stub Git server responses.
"""

import json
from collections.abc import Callable, Generator
from typing import Any

import httpx
import pytest

from gitaccess.testing.mock import MockKeyClient
from gitaccess.types.keys import AccessKey, Permission, RepositoryRef

SAMPLE_PUBLIC_KEY = (
    "ssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAAIHVzPhzCOAXkX2Unid4BLlrwTAjCwGUSkY2CPJBLbBqZ"
    " deploy@example.com"
)


# ============================================================================
# Helper Functions
# ============================================================================


def create_mock_repository_ref(
    project_key: str = "PRJ",
    repo_name: str = "service",
) -> RepositoryRef:
    """Create a repository reference for tests."""
    return RepositoryRef(project_key=project_key, repo_name=repo_name)


def create_mock_access_key(
    public_key: str = SAMPLE_PUBLIC_KEY,
    label: str = "deploy",
    permission: Permission = Permission.READ,
    id: int = 0,
) -> AccessKey:
    """Create an access key for tests."""
    return AccessKey(public_key=public_key, label=label, permission=permission, id=id)


def create_key_description(
    repo: RepositoryRef,
    key: AccessKey,
    key_id: int,
    repository_id: int = 1,
) -> dict[str, Any]:
    """Build the JSON body a Git server returns after creating ``key``."""
    return {
        "key": {"id": key_id, "text": key.public_key, "label": key.label},
        "repository": {
            "name": repo.repo_name,
            "id": repository_id,
            "project": {"key": repo.project_key},
        },
        "permission": key.permission.value,
    }


def echo_key_handler(key_id: int = 1) -> Callable[[httpx.Request], httpx.Response]:
    """
    Build an ``httpx.MockTransport`` handler that echoes the uploaded key.

    The response mirrors the request body with ``key_id`` as the server id.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        return httpx.Response(
            201,
            json={
                "key": {"id": key_id, **body["key"]},
                "repository": {"name": "repo", "id": 1, "project": {"key": "PRJ"}},
                "permission": body["permission"],
            },
        )

    return handler


# ============================================================================
# Mock Client Fixtures
# ============================================================================


@pytest.fixture
def mock_key_client() -> Generator[MockKeyClient, None, None]:
    """
    Provide a MockKeyClient for testing.

    Example:
        ```python
        def test_my_feature(mock_key_client):
            result = my_function(mock_key_client)
            assert mock_key_client.was_called("create_access_key")
        ```
    """
    client = MockKeyClient()
    yield client
    client.reset()


@pytest.fixture
def sample_repository_ref() -> RepositoryRef:
    """Provide a sample repository reference."""
    return create_mock_repository_ref()


@pytest.fixture
def sample_access_key() -> AccessKey:
    """Provide a sample read-only access key."""
    return create_mock_access_key()


@pytest.fixture
def sample_write_key() -> AccessKey:
    """Provide a sample read-write access key."""
    return create_mock_access_key(label="ci-writer", permission=Permission.WRITE)
