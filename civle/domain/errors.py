"""Domain error taxonomy.

Each error subclasses the builtin the API layer already maps:
ValueError -> 400, PermissionError -> 403, RuntimeError -> 500.
"""
from civle.domain.enums import ValidationReason


class ValidationError(ValueError):
    """Rejected input: bad or missing score, disallowed or duplicate name."""

    def __init__(self, reason: ValidationReason, detail: str | None = None):
        self.reason = reason
        super().__init__(detail or reason.message())


class AuthError(PermissionError):
    """Missing or wrong administrative access key."""

    def __init__(self, message: str = "Invalid key"):
        super().__init__(message)


class StorageError(RuntimeError):
    """A stored file is unreadable or malformed, or an I/O call failed."""
