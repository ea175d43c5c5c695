"""FastAPI exception handlers.

register_exception_handlers(app) maps WorkshopAccessException error codes
to HTTP statuses. Permission denials inside a check are decisions (200);
only AuthorizationException raised by guards and RoleService becomes 403.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from workshop_access.core.config import get_settings
from workshop_access.domain.exceptions import WorkshopAccessException

logger = logging.getLogger(__name__)

STATUS_BY_ERROR_CODE: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "DUPLICATE_ASSIGNMENT": 409,
    "COLLABORATOR_UNAVAILABLE": 503,
}


def _error(status_code: int, error: str, message: object, details: object = None) -> JSONResponse:
    content: dict = {"error": error, "message": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def _handle_domain_error(request: Request, exc: WorkshopAccessException) -> JSONResponse:
    status_code = STATUS_BY_ERROR_CODE.get(exc.error_code, 400)
    if status_code >= 500:
        logger.error(
            "%s on %s %s: %s (%s)",
            exc.error_code,
            request.method,
            request.url.path,
            exc.message,
            exc.details,
        )
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def _handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    # input/ctx may hold values that are not JSON serializable
    errors = [{k: e[k] for k in ("type", "loc", "msg") if k in e} for e in exc.errors()]
    return _error(422, "VALIDATION_ERROR", "Request validation failed", errors)


def _handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, "HTTP_ERROR", exc.detail)


def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return _error(500, "INTERNAL_ERROR", message)


def register_exception_handlers(app: FastAPI) -> None:
    """Register domain, validation, HTTP and fallback handlers on app."""
    app.add_exception_handler(WorkshopAccessException, _handle_domain_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, _handle_http_error)
    app.add_exception_handler(Exception, _handle_unexpected)
