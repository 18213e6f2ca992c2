"""Custom exceptions for the XML API."""

from __future__ import annotations

from libs.common import ErrorKind, OperationError


class XmlApiError(Exception):
    """Base exception rendered as ``{<result_field>: false, "message": ...}``."""

    def __init__(self, message: str, status_code: int = 400, result_field: str = "success") -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.result_field = result_field


class MissingFieldError(XmlApiError):
    """Raised when a required request field is absent, before any XML work happens."""


class OperationFailedError(XmlApiError):
    """Raised when a core operation reports a failed result."""

    def __init__(self, error: OperationError, prefix: str = "") -> None:
        if error.kind is ErrorKind.NOT_FOUND:
            super().__init__(error.message, status_code=404)
        else:
            super().__init__(f"{prefix}{error.message}")
        self.error = error
