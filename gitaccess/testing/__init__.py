"""gitaccess testing utilities.

Provides a mock key client and helpers for testing code that uses gitaccess.
"""

from gitaccess.testing.fixtures import (
    create_key_description,
    create_mock_access_key,
    create_mock_repository_ref,
    echo_key_handler,
)
from gitaccess.testing.mock import MockCall, MockKeyClient, MockResponse

__all__ = [
    # Mock client
    "MockKeyClient",
    "MockCall",
    "MockResponse",
    # Helper functions
    "create_mock_access_key",
    "create_mock_repository_ref",
    "create_key_description",
    "echo_key_handler",
]
