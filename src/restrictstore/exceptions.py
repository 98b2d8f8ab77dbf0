"""Exception hierarchy for restrictstore.

All errors inherit from StoreError, which carries a stable error code,
a human-readable message and keyword details.

Usage:
    from restrictstore.exceptions import PermissionDenied

    try:
        store.read("credentials:password")
    except PermissionDenied as e:
        logger.info("denied %s on %s", e.operation, e.field)

Absent data is never an error: reads of missing paths return None.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "StoreError",
    "PermissionDenied",
    "ConfigurationError",
]


class StoreError(Exception):
    """Base exception for restrictstore.

    Attributes:
        code: Stable error code string (e.g. "PERMISSION_DENIED").
        message: Human-readable error description.
        details: Additional context as keyword arguments.
    """

    code: str = "STORE_ERROR"
    message: str = "A store error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class PermissionDenied(StoreError):
    """A path segment was read or written without the matching permission.

    Attributes:
        operation: ``"read"`` or ``"write"``.
        field: The denied segment.
        path: The full path of the request.
    """

    code: str = "PERMISSION_DENIED"

    def __init__(self, operation: str, field: str, path: str, message: str | None = None) -> None:
        self.operation = operation
        self.field = field
        self.path = path
        super().__init__(
            message or f"Not allowed to {operation} '{field}' (path '{path}')",
            operation=operation,
            field=field,
            path=path,
        )


class ConfigurationError(StoreError):
    """Invalid or missing configuration."""

    code: str = "CONFIGURATION_ERROR"
