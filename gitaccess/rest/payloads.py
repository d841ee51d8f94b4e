"""
Wire payloads for the Bitbucket Server SSH access keys API.

These shapes only live for one request/response cycle. ``RestClient``
translates them to and from the domain model so no wire detail reaches
callers.
"""

from dataclasses import dataclass, field
from typing import Any

from gitaccess.types.keys import AccessKey, Permission


@dataclass
class PublicSSHKey:
    """Public key text and its label, as uploaded."""

    text: str
    label: str

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "label": self.label}


@dataclass
class UploadKeyPayload:
    """Request body for key upload."""

    key: PublicSSHKey
    permission: str  # "REPO_READ" or "REPO_WRITE"

    @classmethod
    def from_access_key(cls, key: AccessKey) -> "UploadKeyPayload":
        return cls(
            key=PublicSSHKey(text=key.public_key, label=key.label),
            permission=key.permission.value,
        )

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key.to_dict(), "permission": self.permission}


_MISSING = object()


def _require_object(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise TypeError(f"{where} must be a JSON object, got {type(value).__name__}")
    return value


def _field(data: dict[str, Any], name: str, kind: type, default: Any = _MISSING) -> Any:
    """Read ``data[name]`` and check its JSON type; missing required fields raise KeyError."""
    value = data[name] if default is _MISSING else data.get(name, default)
    # bool is an int subclass but never a valid id
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise TypeError(f"{name} must be {kind.__name__}, got {value!r}")
    return value


@dataclass
class KeyInfo:
    """Access key as stored by the server."""

    id: int
    text: str
    label: str

    @classmethod
    def from_dict(cls, data: Any) -> "KeyInfo":
        data = _require_object(data, "key")
        return cls(
            id=_field(data, "id", int),
            text=_field(data, "text", str),
            label=_field(data, "label", str, default=""),
        )


@dataclass
class ProjectInfo:
    """Project owning the repository."""

    key: str

    @classmethod
    def from_dict(cls, data: Any) -> "ProjectInfo":
        data = _require_object(data, "project")
        return cls(key=_field(data, "key", str, default=""))


@dataclass
class RepositoryInfo:
    """Repository the key was added to."""

    name: str
    id: int
    project: ProjectInfo = field(default_factory=lambda: ProjectInfo(key=""))

    @classmethod
    def from_dict(cls, data: Any) -> "RepositoryInfo":
        data = _require_object(data, "repository")
        project = data.get("project")
        return cls(
            name=_field(data, "name", str, default=""),
            id=_field(data, "id", int, default=0),
            project=ProjectInfo.from_dict(project) if project is not None else ProjectInfo(key=""),
        )


@dataclass
class KeyDescription:
    """Response body describing an access key on a repository."""

    key: KeyInfo
    repository: RepositoryInfo
    permission: str

    @classmethod
    def from_dict(cls, data: Any) -> "KeyDescription":
        """
        Parse a response body.

        Raises:
            KeyError: If a required field is missing
            TypeError: If a value has the wrong JSON type
        """
        data = _require_object(data, "response body")
        repository = data.get("repository")
        return cls(
            key=KeyInfo.from_dict(data["key"]),
            repository=(
                RepositoryInfo.from_dict(repository)
                if repository is not None
                else RepositoryInfo(name="", id=0)
            ),
            permission=_field(data, "permission", str),
        )

    def to_access_key(self) -> AccessKey:
        """
        Translate into the domain model.

        Raises:
            ValueError: If the permission is not a recognized value
        """
        return AccessKey(
            id=self.key.id,
            public_key=self.key.text,
            label=self.key.label,
            permission=Permission(self.permission),
        )
