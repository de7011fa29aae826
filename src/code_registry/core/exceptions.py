"""
Code Registry Exception Hierarchy.

Defines all custom exceptions used across the Code Registry system.
Fatal errors carry the process exit code they map to.
"""

from typing import Any

EXIT_LISTEN_FAILURE = 1
EXIT_DECODE_FAILURE = 2
EXIT_ENCODE_FAILURE = 3


class CodeRegistryError(Exception):
    """
    Base exception for all Code Registry errors.

    All custom exceptions inherit from this class, allowing
    generic catch blocks and consistent error handling.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None):
        """
        Initialize a CodeRegistryError.

        Args:
            message: Human-readable error message
            details: Optional structured data for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation with details."""
        base = self.message
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{base} ({details_str})"
        return base

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(CodeRegistryError):
    """
    Errors in configuration loading or validation.

    Raised when an environment variable holds a value that cannot
    be used (non-numeric port, unknown log level, ...).
    """

    def __init__(
        self,
        message: str,
        *,
        env_var: str | None = None,
        value: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if env_var:
            details["env_var"] = env_var
        if value is not None:
            details["value"] = value

        super().__init__(message, details=details)
        self.env_var = env_var
        self.value = value


class RegistryError(CodeRegistryError):
    """
    Recoverable errors in registry store operations.

    The process keeps serving after these; the request that
    triggered one is answered with an error response.
    """

    def __init__(
        self,
        message: str,
        *,
        code_id: int | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize a RegistryError.

        Args:
            message: Human-readable error message
            code_id: Id of the message code involved
            operation: Store operation being performed
            details: Optional structured data for debugging
        """
        details = details or {}
        if code_id is not None:
            details["code_id"] = code_id
        if operation:
            details["operation"] = operation

        super().__init__(message, details=details)
        self.code_id = code_id
        self.operation = operation


class CodeNotFoundError(RegistryError):
    """Raised when a requested message code id is not in the table."""

    def __init__(
        self,
        message: str = "Message code not found",
        *,
        code_id: int | None = None,
        operation: str | None = None,
    ):
        super().__init__(message, code_id=code_id, operation=operation)


class InvalidCodeError(RegistryError):
    """Raised when a mutation would store a record that cannot be reloaded, such as an empty title."""

    def __init__(
        self,
        message: str = "Invalid message code",
        *,
        code_id: int | None = None,
        operation: str | None = None,
    ):
        super().__init__(message, code_id=code_id, operation=operation)


class SnapshotWriteError(RegistryError):
    """
    Raised when the snapshot file cannot be created, written or replaced.

    The in-memory mutation has already been applied when this is raised;
    the file on disk still holds the previous snapshot.
    """

    def __init__(
        self,
        message: str = "Could not write registry snapshot",
        *,
        path: str | None = None,
        code_id: int | None = None,
        operation: str | None = None,
    ):
        details = {"path": path} if path else None
        super().__init__(message, code_id=code_id, operation=operation, details=details)
        self.path = path


class FatalRegistryError(CodeRegistryError):
    """
    Errors after which the process must not keep running.

    Each subclass names the exit code the process terminates with.
    """

    exit_code: int = 1

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if path:
            details["path"] = path
        super().__init__(message, details=details)
        self.path = path


class SnapshotDecodeError(FatalRegistryError):
    """Raised when the snapshot exists but cannot be read or decoded at startup."""

    exit_code = EXIT_DECODE_FAILURE


class SnapshotEncodeError(FatalRegistryError):
    """Raised when the table cannot be serialized during a mutation."""

    exit_code = EXIT_ENCODE_FAILURE
