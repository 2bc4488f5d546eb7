from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    UNEXPECTED = "unexpected"


class AppException(Exception):
    """Base exception for all application errors.

    Every subclass pins a single ``kind``; the HTTP layer translates errors by
    kind alone.
    """
    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(self, message: str, payload: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.payload = payload
