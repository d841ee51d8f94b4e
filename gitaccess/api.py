"""
Client interfaces for managing repository access keys.

Reconciliation code depends on these abstract capabilities rather than on a
concrete server dialect, so it can be exercised against test doubles such as
``gitaccess.testing.MockKeyClient``.
"""

from abc import ABC, abstractmethod

from gitaccess.exceptions import ValidationError
from gitaccess.types.keys import AccessKey, Permission, RepositoryRef

_DOT_SEGMENTS = (".", "..")


class KeyClientAPI(ABC):
    """API for creating, listing, deleting and getting access keys."""

    @abstractmethod
    def create_access_key(
        self,
        repo: RepositoryRef,
        key: AccessKey,
        *,
        timeout: float | None = None,
    ) -> AccessKey:
        """
        Grant an access key to a repository.

        Args:
            repo: The target repository
            key: The key to upload; its ``id`` is ignored
            timeout: Deadline for the call in seconds (default: client timeout)

        Returns:
            The uploaded key with ``id`` set by the server

        Raises:
            ValidationError: If ``repo`` or ``key`` break the contract
            NotFoundError: If the repository does not exist
            RequestFailedError: On any other failure
        """
        pass

    def delete_access_key(
        self, repo: RepositoryRef, key_id: int, *, timeout: float | None = None
    ) -> None:
        raise NotImplementedError("delete_access_key is not supported yet")

    def get_access_key(
        self, repo: RepositoryRef, key_id: int, *, timeout: float | None = None
    ) -> AccessKey:
        raise NotImplementedError("get_access_key is not supported yet")

    def list_access_keys(
        self, repo: RepositoryRef, *, timeout: float | None = None
    ) -> list[AccessKey]:
        raise NotImplementedError("list_access_keys is not supported yet")

    def update_access_key_permission(
        self,
        repo: RepositoryRef,
        key_id: int,
        permission: Permission,
        *,
        timeout: float | None = None,
    ) -> None:
        raise NotImplementedError("update_access_key_permission is not supported yet")


class AsyncKeyClientAPI(ABC):
    """Async counterpart of ``KeyClientAPI``."""

    @abstractmethod
    async def create_access_key(
        self,
        repo: RepositoryRef,
        key: AccessKey,
        *,
        timeout: float | None = None,
    ) -> AccessKey:
        """Grant an access key to a repository. See ``KeyClientAPI``."""
        pass

    async def delete_access_key(
        self, repo: RepositoryRef, key_id: int, *, timeout: float | None = None
    ) -> None:
        raise NotImplementedError("delete_access_key is not supported yet")

    async def get_access_key(
        self, repo: RepositoryRef, key_id: int, *, timeout: float | None = None
    ) -> AccessKey:
        raise NotImplementedError("get_access_key is not supported yet")

    async def list_access_keys(
        self, repo: RepositoryRef, *, timeout: float | None = None
    ) -> list[AccessKey]:
        raise NotImplementedError("list_access_keys is not supported yet")

    async def update_access_key_permission(
        self,
        repo: RepositoryRef,
        key_id: int,
        permission: Permission,
        *,
        timeout: float | None = None,
    ) -> None:
        raise NotImplementedError("update_access_key_permission is not supported yet")


def validate_create_request(repo: RepositoryRef, key: AccessKey) -> None:
    """
    Check the arguments of a create call before anything goes on the wire.

    Raises:
        ValidationError: On empty or dot-segment identifiers, or an
            unrecognized permission
    """
    for field_name, value in (
        ("project_key", repo.project_key),
        ("repo_name", repo.repo_name),
    ):
        if not value:
            raise ValidationError(f"{field_name} must not be empty")
        if value in _DOT_SEGMENTS:
            raise ValidationError(f"{field_name} must not be {value!r}")

    if not isinstance(key.permission, Permission):
        raise ValidationError(
            f"Invalid permission: {key.permission!r}. "
            f"Must be one of {[p.value for p in Permission]}"
        )
