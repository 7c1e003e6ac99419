"""Client-safe error messages and the catch-all exception handler."""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from phrasebook.config import get_app_settings
from phrasebook.srs.time import epoch_now, epoch_to_iso_z

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal error occurred. Please try again later."
NETWORK_ERROR_MESSAGE = "Network error. Please check your connection and try again."
VALIDATION_ERROR_MESSAGE = "Invalid input provided. Please check your entries and try again."
GENERIC_ERROR_MESSAGE = "An error occurred. Please try again."

_SENSITIVE_MARKERS = ("password", "token", "secret", "database", "connection", "sql", "internal")
_NETWORK_MARKERS = ("network", "fetch", "timeout")
_VALIDATION_MARKERS = ("validation", "invalid")


def user_friendly_message(error: BaseException) -> str:
    """Map an exception to a message that is safe to show a client.

    Messages that mention credentials or storage internals are never echoed back.
    """
    message = str(error).lower()
    if any(marker in message for marker in _SENSITIVE_MARKERS):
        return INTERNAL_ERROR_MESSAGE
    if any(marker in message for marker in _NETWORK_MARKERS):
        return NETWORK_ERROR_MESSAGE
    if any(marker in message for marker in _VALIDATION_MARKERS):
        return VALIDATION_ERROR_MESSAGE
    return GENERIC_ERROR_MESSAGE


def error_body(error: BaseException) -> dict:
    body = {
        "error": user_friendly_message(error),
        "timestamp": epoch_to_iso_z(epoch_now()),
    }
    if get_app_settings().is_development:
        body["originalError"] = str(error)
    return body


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log an unexpected error with request context and answer with a sanitized 500."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(exc),
    )
