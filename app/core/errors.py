"""
Error types and their HTTP rendering.
Validation failures are returned as a field -> messages map, without an envelope.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

FieldErrors = dict[str, list[str]]


class UnprocessableEntityError(Exception):
    """Raised when a payload is well-formed but fails field validation (HTTP 422)."""

    def __init__(self, errors: FieldErrors):
        super().__init__(errors)
        self.errors = errors


def add_error(errors: FieldErrors, key: str, message: str) -> None:
    errors.setdefault(key, []).append(message)


def pascal_case(name: str) -> str:
    """first_name / firstName -> FirstName."""
    if "_" in name:
        return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)
    return name[:1].upper() + name[1:]


def errors_from_request_validation(exc: RequestValidationError) -> FieldErrors:
    """Flatten framework binding errors (path/query/body) into the same map shape."""
    errors: FieldErrors = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "path", "query")]
        key = ".".join(pascal_case(part) for part in loc) or "Request"
        add_error(errors, key, err.get("msg", "Invalid value"))
    return errors


async def unprocessable_entity_handler(request: Request, exc: UnprocessableEntityError) -> JSONResponse:
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.errors)
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=exc.errors)


def is_malformed_body(exc: RequestValidationError) -> bool:
    """True when the request body could not be decoded as JSON at all."""
    return any(
        err.get("type") == "json_invalid" and tuple(err.get("loc", ()))[:1] == ("body",)
        for err in exc.errors()
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> Response:
    if is_malformed_body(exc):
        logger.warning("Rejected %s %s: body is not valid JSON", request.method, request.url.path)
        return Response(status_code=status.HTTP_400_BAD_REQUEST)
    errors = errors_from_request_validation(exc)
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=errors)
