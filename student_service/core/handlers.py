# student_service/core/handlers.py
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from student_service.core.exceptions import BaseAPIException
from student_service.core.logging import logger


# 1. Errors we raise ourselves (validation, not found, conflict, store down)
async def custom_api_exception_handler(request: Request, exc: BaseAPIException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
    )


# 2. Body that pydantic could not parse (bad JSON, wrong types, overlong strings)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # /students/abc names no resource at all
    if any(error["loc"][0] == "path" for error in exc.errors()):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "Not Found"},
        )

    details = {}
    for error in exc.errors():
        # e.g. "gpa" instead of "body.gpa"
        field = ".".join(str(x) for x in error["loc"] if x != "body")
        details[field] = error["msg"]

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid data", "details": details},
    )


# 3. Standard HTTP errors (unknown URL, wrong method)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


# 4. Anything else; details stay in the log, never in the response
async def general_exception_handler(request: Request, exc: Exception):
    logger.critical(
        f"Unhandled exception on {request.method} {request.url.path}: {exc.__class__.__name__}",
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAPIException, custom_api_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
