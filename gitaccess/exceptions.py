"""gitaccess exception classes."""



class GitAccessError(Exception):
    """Base exception for all gitaccess errors."""

    def __init__(
        self, code: str, message: str, request_id: str | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(f"[{code}] {message}")


class ConfigurationError(GitAccessError):
    """Raised when client configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class ValidationError(GitAccessError):
    """Raised when a call violates the client contract (empty identifiers, etc.)."""

    def __init__(self, message: str) -> None:
        super().__init__("VALIDATION_ERROR", message)


class RequestFailedError(GitAccessError):
    """
    Raised when a request to the Git server fails.

    Covers network errors, non-2xx responses, and payloads that could not
    be serialized or decoded. The underlying exception, if any, is chained
    as ``__cause__``.
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)
        self.status_code = status_code


class NotFoundError(RequestFailedError):
    """Raised when the server reports the repository does not exist."""

    pass
