"""Exception handlers for the XML API."""

from __future__ import annotations

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .exceptions import XmlApiError

logger = logging.getLogger(__name__)

# Endpoints that answer with isValid instead of success
VALIDITY_PATHS = frozenset({"/api/xml/validate"})


def _result_field(request: Request) -> str:
    return "isValid" if request.url.path in VALIDITY_PATHS else "success"


async def xml_api_error_handler(request: Request, exc: XmlApiError) -> JSONResponse:
    """Render API errors in the editor's ``{success|isValid, message}`` shape."""
    logger.info(
        f"Request failed: path={request.url.path}, status={exc.status_code}, error={exc.message}"
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={exc.result_field: False, "message": exc.message},
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request bodies that are not the expected JSON object."""
    errors = exc.errors()
    detail = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    logger.info(f"Malformed request body: path={request.url.path}, error={detail}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={_result_field(request): False, "message": f"Error: {detail}"},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler so a failing request never takes the process down."""
    logger.error(
        f"Unhandled error: path={request.url.path}, error_type={type(exc).__name__}, error={str(exc)}",
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={_result_field(request): False, "message": f"Error: {str(exc)}"},
    )
