"""gitaccess type definitions.

This module exports the domain model shared by every client implementation.
"""

from gitaccess.types.keys import AccessKey, Permission, RepositoryRef

__all__ = [
    "AccessKey",
    "Permission",
    "RepositoryRef",
]
