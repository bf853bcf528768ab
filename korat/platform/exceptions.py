from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from korat.middlewares.cors import CORS_HEADERS
from korat.platform.logger import get_logger
from korat.platform.response import error_response

logger = get_logger("exceptions")


class AppError(Exception):
    """Base class for errors that are reported to the caller as `{"error": message}`."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class AnalysisError(AppError):
    """Network failure, timeout or non-2xx response while fetching the target page."""

    status_code = status.HTTP_400_BAD_REQUEST


class PersistenceError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


def add_exception_handlers(app):
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        logger.warning(f"{request.method} {request.url.path} failed: {exc.message}")
        return error_response(exc.message, status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(str(exc.detail) or "Error", status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        if any("url" in err.get("loc", ()) for err in exc.errors()):
            message = "URL is required"
        else:
            message = "Invalid request"
        return error_response(message, status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {exc}")
        # Runs in ServerErrorMiddleware, outside the CORS middleware
        return error_response(
            "Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            headers=CORS_HEADERS,
        )
