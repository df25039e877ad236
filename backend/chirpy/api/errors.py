"""Map domain errors to HTTP responses."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from chirpy.errors import ChirpyError, ErrorKind

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(message: str, status_code: int, headers: dict | None = None, **extra) -> JSONResponse:
    return JSONResponse({"detail": message, **extra}, status_code=status_code, headers=headers)


def register_error_handlers(app: FastAPI) -> None:
    """Install handlers that turn ChirpyError and validation errors into JSON."""

    @app.exception_handler(ChirpyError)
    async def handle_chirpy_error(request: Request, exc: ChirpyError) -> JSONResponse:
        if exc.kind is ErrorKind.INTERNAL:
            logger.error(f"{request.method} {request.url.path} failed", exc_info=exc)
        headers = {"WWW-Authenticate": "Bearer"} if exc.kind is ErrorKind.UNAUTHORIZED else None
        return error_response(exc.public_message, STATUS_BY_KIND[exc.kind], headers=headers)

    # Malformed bodies, paths and query strings are plain bad input.
    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return error_response(
            "Invalid input",
            status.HTTP_400_BAD_REQUEST,
            errors=jsonable_encoder(exc.errors()),
        )
