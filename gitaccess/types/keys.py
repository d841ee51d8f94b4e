"""Access key data models."""

from dataclasses import dataclass, replace
from enum import Enum


class Permission(Enum):
    """Access level granted to a deploy key."""

    READ = "REPO_READ"
    WRITE = "REPO_WRITE"


@dataclass(frozen=True)
class RepositoryRef:
    """Identifies a repository within a project namespace."""

    project_key: str
    repo_name: str


@dataclass(frozen=True)
class AccessKey:
    """An SSH public key granted access to a single repository."""

    public_key: str
    label: str
    permission: Permission
    id: int = 0  # assigned by the server

    def with_id(self, key_id: int) -> "AccessKey":
        """Return a copy of this key carrying the server-assigned id."""
        return replace(self, id=key_id)
