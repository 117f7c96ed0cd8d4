"""Error kinds raised by the task, notification and message use cases.

Each kind carries a stable error_code; app.core.exception_handlers maps the
code to an HTTP status and wraps to_dict() in the error envelope. Failures
of the notification fan-out never surface as one of these.
"""

from typing import Any


class TaskhubException(Exception):
    """Base of every user-facing failure.

    Attributes:
        message: Human-readable description, shown to the client as-is.
        error_code: Stable machine-readable kind (e.g. INVALID_STATE).
        details: Extra context such as field, resource_type or resource_id.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Payload of the error envelope."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(TaskhubException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(TaskhubException):
    """Raised when authentication fails (e.g. invalid or expired token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(TaskhubException):
    """Raised when the acting user may not perform the operation on a resource."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'task', 'notification').
            action: Optional action that was attempted (e.g. 'view', 'purge').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(TaskhubException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'task', 'user').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class InvalidStateException(TaskhubException):
    """Raised when an operation is not allowed in the resource's current state.

    Example: restoring or purging a task that is not in the trash.
    """

    def __init__(
        self,
        message: str,
        resource_type: str,
        resource_id: str,
        state: str | None = None,
    ) -> None:
        details: dict[str, Any] = {
            "resource_type": resource_type,
            "resource_id": resource_id,
        }
        if state:
            details["state"] = state
        super().__init__(message, "INVALID_STATE", details)


class SqlNotConfiguredException(TaskhubException):
    """Raised when an operation requires Postgres but the backend is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
