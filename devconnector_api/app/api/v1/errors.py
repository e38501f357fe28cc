"""
Translation of service errors into HTTP errors.

Endpoints call ``http_error`` from their ``except DevConnectorError``
branch and ``server_error`` from their catch-all branch.  The status
used for ``NotFoundError`` differs between endpoints (the profile routes
have always answered 400, the post routes 404), so it is a parameter.

``request_validation_handler`` is installed on the application so that
bodies pydantic cannot parse (a date like ``"yesterday"``, a number
where text is expected) are reported in the same 400 field-error list
as missing fields, not as FastAPI's default 422.
"""

import logging

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from devconnector_api.app.core.exceptions import (
    ConflictError,
    DevConnectorError,
    NotAuthorizedError,
    NotFoundError,
    ValidationFailed,
)

logger = logging.getLogger(__name__)

_PYDANTIC_PREFIX = "Value error, "


def http_error(exc: DevConnectorError, not_found_status: int = status.HTTP_404_NOT_FOUND) -> HTTPException:
    """Map a domain error onto an ``HTTPException``."""
    if isinstance(exc, ValidationFailed):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.errors)
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=not_found_status, detail=str(exc))
    if isinstance(exc, NotAuthorizedError):
        return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))
    if isinstance(exc, ConflictError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


def server_error(logger: logging.Logger, action: str) -> HTTPException:
    """Log the active exception and return a generic 500.

    Must be called from inside an ``except`` block.
    """
    logger.exception("Failed to %s", action)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error")


def field_errors(exc: RequestValidationError) -> list:
    """Convert pydantic's error list into ``{"msg", "param", "location"}`` entries.

    ``loc`` looks like ``("body", "from")``: the location, then the
    top-level field.  Anything after that (a list index, the member of a
    ``Union`` that failed) is dropped.
    """
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        location = loc[0] if loc else "body"
        fields = [part for part in loc[1:] if not part.isdigit()]
        msg = str(error.get("msg", "Invalid value"))
        if msg.startswith(_PYDANTIC_PREFIX):
            msg = msg[len(_PYDANTIC_PREFIX):]
        errors.append({"msg": msg, "param": fields[0] if fields else "", "location": location})
    return errors


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = field_errors(exc)
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, [e["param"] for e in errors])
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": errors})
