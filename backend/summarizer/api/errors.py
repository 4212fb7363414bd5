"""Turns request validation failures into the flat 400 error body."""
import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from summarizer.api.responses import validation_error

logger = logging.getLogger(__name__)

# error types that mean the field was absent or empty
_REQUIRED_TYPES = {"missing", "string_too_short", "greater_than"}


def _field_name(loc) -> str:
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts)


def describe_validation_error(exc: RequestValidationError):
    errors = exc.errors()
    details = "; ".join(
        f"{_field_name(e['loc']) or 'body'}: {e['msg']}" for e in errors
    )
    for e in errors:
        field = _field_name(e["loc"])
        if field and e["type"] in _REQUIRED_TYPES:
            return f"{field} is required", details
    return "Invalid request body", details


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message, details = describe_validation_error(exc)
    logger.warning("Rejected request to %s: %s", request.url.path, details)
    return validation_error(message, details)


async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error on %s", request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error", "details": str(exc)})
