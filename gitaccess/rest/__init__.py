"""Bitbucket Server REST implementation of the access key clients."""

from gitaccess.rest.async_client import AsyncRestClient
from gitaccess.rest.client import RestClient, keys_path

__all__ = [
    "RestClient",
    "AsyncRestClient",
    "keys_path",
]
