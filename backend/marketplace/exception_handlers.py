"""
Name: FastAPI Exception Handlers

Responsibilities:
  - Convert domain exceptions into RFC 7807 HTTP responses
  - Turn request parse failures into 400 responses
  - Catch anything unhandled as a 500 and log it with a stack trace

Collaborators:
  - main.py: Registers these handlers
  - exceptions.py: domain errors
  - error_responses.py: AppHTTPException and factories

Notes:
  - An empty listing maps to 404 and a wrong login password to 500
"""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .error_responses import (
    AppHTTPException,
    app_exception_handler,
    bad_request,
    conflict,
    database_error,
    generic_exception_handler,
    internal_error,
    not_found,
    validation_error,
)
from .exceptions import (
    AdsNotFoundError,
    FieldValidationError,
    ImageFetchError,
    InvalidOptionsError,
    InvalidPasswordError,
    PersistenceError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from .logger import logger


async def user_exists_handler(request: Request, exc: UserAlreadyExistsError) -> JSONResponse:
    return await app_exception_handler(request, conflict(exc.message))


async def not_found_handler(
    request: Request, exc: UserNotFoundError | AdsNotFoundError
) -> JSONResponse:
    return await app_exception_handler(request, not_found(exc.message))


async def invalid_password_handler(request: Request, exc: InvalidPasswordError) -> JSONResponse:
    return await app_exception_handler(request, internal_error(exc.message))


async def invalid_options_handler(request: Request, exc: InvalidOptionsError) -> JSONResponse:
    return await app_exception_handler(request, bad_request(exc.message))


async def field_validation_handler(request: Request, exc: FieldValidationError) -> JSONResponse:
    return await app_exception_handler(request, validation_error(exc.message, exc.errors))


async def image_fetch_handler(request: Request, exc: ImageFetchError) -> JSONResponse:
    return await app_exception_handler(
        request, validation_error(exc.message, {"image_url": exc.message})
    )


async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    """Handle storage faults without leaking driver details."""
    logger.error(
        "Persistence error", extra={"error_id": exc.error_id, "error_message": exc.message}
    )
    app_exc = database_error()
    app_exc.errors = {"error_id": exc.error_id}
    return await app_exception_handler(request, app_exc)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Map body/param parse failures to 400 with a field -> message mapping."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query")]
        errors[".".join(loc) or "body"] = error.get("msg", "invalid value")
    return await app_exception_handler(
        request, validation_error("Request could not be parsed", errors)
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", extra={"error": str(exc)})
    return await generic_exception_handler(request, exc)


def register_exception_handlers(app) -> None:
    """
    Register all exception handlers on the FastAPI app.

    Usage:
        from .exception_handlers import register_exception_handlers
        register_exception_handlers(app)
    """
    app.add_exception_handler(UserAlreadyExistsError, user_exists_handler)
    app.add_exception_handler(UserNotFoundError, not_found_handler)
    app.add_exception_handler(AdsNotFoundError, not_found_handler)
    app.add_exception_handler(InvalidPasswordError, invalid_password_handler)
    app.add_exception_handler(InvalidOptionsError, invalid_options_handler)
    app.add_exception_handler(FieldValidationError, field_validation_handler)
    app.add_exception_handler(ImageFetchError, image_fetch_handler)
    app.add_exception_handler(PersistenceError, persistence_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
