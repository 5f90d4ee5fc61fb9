"""
Error taxonomy and the JSON error envelope.

Every error leaves the API as ``{"error": "<message>"}``:
  InvalidInputError   -> 400 (also request body/query validation failures)
  AuthenticationError -> 401
  NotFoundError       -> 404
  anything unexpected -> 500, details logged server-side only
"""
from typing import Dict, Optional

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)


class WebshopError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, headers: Optional[Dict[str, str]] = None):
        super().__init__(status_code=type(self).status_code, detail=message, headers=headers)


class InvalidInputError(WebshopError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(WebshopError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class NotFoundError(WebshopError):
    status_code = status.HTTP_404_NOT_FOUND


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {
            # drop the leading "body"/"query" location segment
            "field": ".".join(str(part) for part in err["loc"][1:]) or str(err["loc"][0]),
            "message": err["msg"],
        }
        for err in exc.errors()
    ]
    fields = sorted({d["field"].split(".")[0] for d in details})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": f"Missing or invalid field(s): {', '.join(fields)}",
            "details": details,
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", method=request.method, path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
