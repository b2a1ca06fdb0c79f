"""Error taxonomy for user account operations.

Every error carries a human-readable ``message`` that is safe to hand back to
callers and a stable ``code`` used by result models and the HTTP layer.
"""

from __future__ import annotations


class UserServiceError(Exception):
    """Base class for failures raised inside the user service."""

    code = "error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(UserServiceError):
    """Raised when the target user record does not exist."""

    code = "not_found"


class ValidationError(UserServiceError):
    """Raised when a field value violates its validator (message names field and rule)."""

    code = "validation"

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class EmptyUpdateError(UserServiceError):
    """Raised when no writable field survives filtering of an update request."""

    code = "empty_update"


class WeakCredentialError(UserServiceError):
    """Raised when a new password fails the complexity policy."""

    code = "weak_credential"


class CredentialError(UserServiceError):
    """Raised when a plaintext secret cannot be hashed."""

    code = "credential"


class StoreError(UserServiceError):
    """
    Raised when the record store fails (constraint violation, connectivity).

    ``message`` is generic; ``detail`` keeps the underlying error text for logs only.
    """

    code = "store"

    def __init__(self, message: str, detail: str | None = None) -> None:
        self.detail = detail
        super().__init__(message)
