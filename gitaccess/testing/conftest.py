"""
Pytest plugin for gitaccess testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
automatically discovered by pytest when this package is installed.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["gitaccess.testing.conftest"]

Or import the fixtures directly:

    from gitaccess.testing.fixtures import mock_key_client, sample_access_key
"""

# Re-export all fixtures for pytest auto-discovery
from gitaccess.testing.fixtures import (
    mock_key_client,
    sample_access_key,
    sample_repository_ref,
    sample_write_key,
)

__all__ = [
    "mock_key_client",
    "sample_repository_ref",
    "sample_access_key",
    "sample_write_key",
]
