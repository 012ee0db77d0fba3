# app/core/handlers.py
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.core.exceptions import BaseAPIException
from app.core.logging import logger
from app.core.templates import render


def _error_page(request: Request, status_code: int, code: str, message: str, details=None):
    return render(
        request,
        "error.html",
        {
            "status_code": status_code,
            "code": code,
            "message": message,
            "details": details,
        },
        status_code=status_code,
    )

# 1. Errors raised on purpose by the application
async def custom_api_exception_handler(request: Request, exc: BaseAPIException):
    return _error_page(request, exc.status_code, exc.code, exc.message, exc.details)

# 2. Request parameters that do not parse (e.g. /Students/Details/abc)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = {}
    in_path = False
    for error in exc.errors():
        loc = error.get("loc", ())
        if loc and loc[0] == "path":
            in_path = True
        field = ".".join(str(x) for x in loc if x not in ("path", "query", "body"))
        details[field] = error["msg"]

    # An unparseable id is the same as a missing one
    if in_path:
        return _error_page(
            request, status.HTTP_404_NOT_FOUND, "NOT_FOUND", "Resource not found"
        )
    return _error_page(
        request,
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR",
        "Input validation failed",
        details,
    )

# 3. Standard HTTP errors (unknown URL, wrong method, ...)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error_page(request, exc.status_code, "HTTP_ERROR", str(exc.detail))

# 4. Anything else (bugs, library failures)
async def general_exception_handler(request: Request, exc: Exception):
    logger.critical(f"Unhandled Exception: {exc}", exc_info=True)

    return _error_page(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred. Please contact your system administrator.",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAPIException, custom_api_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
