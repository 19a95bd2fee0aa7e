from typing import Any, Dict, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog.errors import CatalogError, StorageFault, ValidationFailed

logger = structlog.get_logger()

_HTTP_ERROR_KINDS = {401: "Unauthorized", 403: "Forbidden", 404: "NotFound", 405: "MethodNotAllowed"}


def error_response(
    status_code: int,
    message: str,
    error: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    content = {"success": False, "message": message, "error": error}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def catalog_error_handler(request: Request, exc: CatalogError):
    return error_response(exc.status_code, exc.message, exc.kind, exc.details)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    logger.info("Request validation failed", path=request.url.path, errors=len(errors))
    return error_response(400, "Validation failed", ValidationFailed.kind, {"errors": errors})


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    if isinstance(detail, dict):
        message = detail.get("message", str(detail))
        error = detail.get("error") or _HTTP_ERROR_KINDS.get(exc.status_code, "HTTPError")
    else:
        message = str(detail)
        error = _HTTP_ERROR_KINDS.get(exc.status_code, "HTTPError")
    return error_response(exc.status_code, message, error, headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled exception in handler",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
    )
    # never leak driver/internal messages to clients
    return error_response(500, StorageFault().message, StorageFault.kind)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
