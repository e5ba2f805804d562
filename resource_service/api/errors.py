"""
Exception handlers mapping service errors onto JSON responses.

Every error body carries an ``error`` summary; ``message`` holds the
underlying failure text where one is available and ``details`` lists
per-field validation problems. Stack traces are logged, never returned.
"""
import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from resource_service.errors import ResourceServiceError, ValidationError

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Missing required fields: name, description, status"
INVALID_STATUS_MESSAGE = 'Status must be either "active" or "inactive"'
INVALID_ID_MESSAGE = "Invalid resource ID"


def _field_name(loc) -> str:
    parts = [str(part) for part in loc[1:]] if len(loc) > 1 else [str(part) for part in loc]
    return ".".join(parts)


def _summarize(errors: List[Dict[str, Any]], method: str) -> str:
    sources = {error.get("loc", ("",))[0] for error in errors}
    if "path" in sources:
        return INVALID_ID_MESSAGE
    if "query" in sources:
        return "Invalid query parameters"
    types = {error.get("type") for error in errors}
    if "json_invalid" in types:
        return "Invalid JSON body"
    if "missing" in types:
        return MISSING_FIELDS_MESSAGE
    if "string_too_short" in types:
        # An empty string counts as missing on create
        return MISSING_FIELDS_MESSAGE if method == "POST" else "Fields name and description must not be empty"
    fields = {_field_name(error.get("loc", ())) for error in errors}
    if fields == {"status"}:
        return INVALID_STATUS_MESSAGE
    return "Invalid request body"


def validation_error_from_request(exc: RequestValidationError, method: str = "POST") -> ValidationError:
    errors = list(exc.errors())
    details = [
        {"field": _field_name(error.get("loc", ())), "message": error.get("msg", "Invalid value")}
        for error in errors
    ]
    return ValidationError(_summarize(errors, method.upper()), details=details)


async def service_error_handler(request: Request, exc: ResourceServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.detail)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await service_error_handler(request, validation_error_from_request(exc, request.method))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        content = {
            "error": "Route not found",
            "message": f"{request.method} {request.url.path} does not exist",
        }
    else:
        content = {"error": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    content = {"error": "Internal server error"}
    settings = getattr(request.app.state, "settings", None)
    if settings is None or not settings.is_production:
        content["message"] = str(exc) or exc.__class__.__name__
    return JSONResponse(status_code=500, content=content)


def setup_error_handling(app: FastAPI) -> None:
    app.add_exception_handler(ResourceServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
