"""Result envelopes returned by catalog operations."""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    VALIDATION = "VALIDATION_ERROR"
    AUTHORIZATION = "INVALID_ADMIN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    ALREADY_INACTIVE = "ALREADY_INACTIVE"
    INTERNAL = "INTERNAL_ERROR"


def error_response(message: str, kind: ErrorKind = ErrorKind.VALIDATION, **extra: Any) -> dict[str, Any]:
    """Build a failed operation result."""
    return {"success": False, "message": message, "error": kind.value, **extra}


def success_response(message: str, **data: Any) -> dict[str, Any]:
    """Build a successful operation result."""
    return {"success": True, "message": message, **data}
