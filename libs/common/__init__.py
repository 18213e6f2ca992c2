"""Shared helpers used by the XML editor API."""

from .config import AppSettings, get_settings
from .logging import configure_logging
from .results import ErrorKind, OperationError, Result

__all__ = [
    "AppSettings",
    "ErrorKind",
    "OperationError",
    "Result",
    "configure_logging",
    "get_settings",
]
