"""
Platform-wide exception hierarchy.

Services raise these; the app factory registers a single handler against
``SmartStartError`` that renders the JSON envelope with the carried status
and error code.

Usage:
    from smartstart.core.exceptions import NotFoundError, ValidationError

    raise NotFoundError(resource="Venture", resource_id=42)
    raise ValidationError("All fields are required", details={"email": "required"})
"""

from smartstart.utils.errors import E


class SmartStartError(Exception):
    """Base class for errors that map to a JSON envelope response."""

    status_code = 500
    code = E.INTERNAL

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)

    def public_message(self, expose_details: bool = False) -> str:
        return self.message


class ValidationError(SmartStartError):
    """Missing or malformed input. Maps to HTTP 400.

    Args:
        message: Human-readable explanation of what failed.
        details: Optional field-level breakdown (field name → problem).
    """

    status_code = 400
    code = E.VALIDATION

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message)


class ConflictError(SmartStartError):
    """Raised when an insert would duplicate a unique value (e.g. email).

    Maps to HTTP 400; the value is kept for logs, not echoed to clients.
    """

    status_code = 400
    code = E.CONFLICT

    def __init__(self, resource: str, field: str, value: str | None = None) -> None:
        self.resource = resource
        self.field = field
        self.value = value
        super().__init__(f"{resource} already exists")


class AuthError(SmartStartError):
    """Bad credentials, or a missing/invalid/expired bearer token.

    401 for absent credentials and failed logins, 403 for tokens that fail
    signature or expiry checks.
    """

    status_code = 401
    code = E.AUTH


class NotFoundError(SmartStartError):
    """Raised when a resource does not exist within the caller's scope.

    Used for BOTH genuinely missing records AND records owned by another
    user, so ownership is never confirmed to a non-owner.
    """

    status_code = 404
    code = E.NOT_FOUND

    def __init__(self, resource: str, resource_id: int | str | None = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} not found")


class StorageError(SmartStartError):
    """A query failed. The raw driver message is kept in ``detail``."""

    status_code = 500
    code = E.DATABASE

    def __init__(self, operation: str, detail: str | None = None, message: str = "Database error") -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(message)

    def public_message(self, expose_details: bool = False) -> str:
        if expose_details and self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


class StorageTimeout(StorageError):
    """A query ran past the request deadline or waited too long on a lock."""

    status_code = 503
    code = E.TIMEOUT

    def __init__(self, operation: str, detail: str | None = None) -> None:
        super().__init__(operation, detail=detail, message="Database timed out")
