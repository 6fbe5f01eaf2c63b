"""
Mapping of application errors to HTTP responses.
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.exceptions import ErrorKind, FacilityError
from app.core.logger import setup_logger

logger = setup_logger(__name__)

INVALID_REQUEST_MESSAGE = "invalid request body"

# Validation failures keep the 500 status existing web clients expect.
STATUS_BY_KIND = {
    ErrorKind.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(error: FacilityError) -> int:
    """HTTP status code for an application error."""
    return STATUS_BY_KIND.get(error.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)


async def facility_error_handler(request: Request, exc: FacilityError) -> JSONResponse:
    """Render an application error as {"error": message}."""
    if exc.kind == ErrorKind.INTERNAL:
        logger.error(
            "%s %s failed: %s (%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.details,
        )
    return JSONResponse(status_code=status_for(exc), content={"error": exc.message})


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render a malformed request body as {"error": message} with HTTP 422."""
    logger.info(
        "%s %s rejected: %s",
        request.method,
        request.url.path,
        exc.errors(),
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"error": INVALID_REQUEST_MESSAGE},
    )
