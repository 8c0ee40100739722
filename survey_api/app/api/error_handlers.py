"""
Global exception handlers.

Every failure leaves the API as ``{"message": <str>}``:

* ``SurveyAPIError`` → its own status and message.
* ``RequestValidationError`` → 400 with the first field-level message.
* anything else → 500 with a generic message; details are only logged.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from survey_api.app.core.errors import UNKNOWN_SERVER_ERROR, SurveyAPIError


logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(SurveyAPIError)
    async def survey_api_error_handler(request: Request, exc: SurveyAPIError):
        logger.warning(
            "%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message
        )
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": first_validation_message(exc)},
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": UNKNOWN_SERVER_ERROR},
        )


def first_validation_message(exc: RequestValidationError) -> str:
    """Return the first field-level message of a validation error.

    Messages raised by our own validators are returned verbatim;
    pydantic's built-in messages are prefixed with the field name.
    """
    for error in exc.errors():
        ctx_error = (error.get("ctx") or {}).get("error")
        if ctx_error is not None:
            return str(ctx_error)
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        if error.get("msg"):
            return f"{'.'.join(loc)}: {error['msg']}" if loc else error["msg"]
    return UNKNOWN_SERVER_ERROR
