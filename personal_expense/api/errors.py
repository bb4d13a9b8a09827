from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from personal_expense.logging_utils import get_logger

logger = get_logger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong!"
NOT_FOUND_MESSAGE = "Not Found"


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # A known path with an unsupported method is just another unmatched route.
    if exc.status_code == 405:
        return JSONResponse(status_code=404, content={"message": NOT_FOUND_MESSAGE})

    # 5xx carry the raw failure under "error"; client errors carry "message".
    if isinstance(exc.detail, dict):
        body = exc.detail
    elif exc.status_code >= 500:
        body = {"error": exc.detail}
    else:
        body = {"message": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "message": "Invalid request: malformed request data.",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": GENERIC_ERROR_MESSAGE})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
