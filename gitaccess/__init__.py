"""gitaccess - SSH deploy key management for Bitbucket Server repositories."""

from gitaccess.api import AsyncKeyClientAPI, KeyClientAPI
from gitaccess.auth import BearerAuth
from gitaccess.client import (
    ClientConfig,
    new_async_client,
    new_async_repository_client,
    new_client,
    new_repository_client,
)
from gitaccess.exceptions import (
    ConfigurationError,
    GitAccessError,
    NotFoundError,
    RequestFailedError,
    ValidationError,
)
from gitaccess.logging import configure_logging, get_logger
from gitaccess.rest import AsyncRestClient, RestClient
from gitaccess.types import AccessKey, Permission, RepositoryRef

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Domain model
    "AccessKey",
    "Permission",
    "RepositoryRef",
    # Interfaces
    "KeyClientAPI",
    "AsyncKeyClientAPI",
    # Clients
    "RestClient",
    "AsyncRestClient",
    "BearerAuth",
    # Factory
    "ClientConfig",
    "new_client",
    "new_repository_client",
    "new_async_client",
    "new_async_repository_client",
    # Exceptions
    "GitAccessError",
    "ConfigurationError",
    "ValidationError",
    "RequestFailedError",
    "NotFoundError",
    # Logging
    "configure_logging",
    "get_logger",
]
