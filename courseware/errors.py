"""
courseware/errors.py
Centralized Error Handling

ERROR RESPONSE STRUCTURE:
{
    "success": false,
    "error": "ErrorType",
    "message": "Human-readable description",
    "code": "UNIQUE_ERROR_CODE",
    "errors": ["field message", ...] (optional, for validation errors)
}

HTTP STATUS CODE DISCIPLINE:
- 400: Invalid input / broken business rule
- 404: Resource does not exist
- 500: NEVER caused by user input (internal only)

Domain errors are raised inside the request transaction, so nothing the
request wrote is committed when one of them escapes.
"""
import logging
import uuid
from typing import Any, Dict, List, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ErrorCode:
    """Unique error codes for machine-readable error handling"""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"

    NOT_FOUND = "NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    COURSE_NOT_FOUND = "COURSE_NOT_FOUND"
    CHAPTER_NOT_FOUND = "CHAPTER_NOT_FOUND"
    LESSON_NOT_FOUND = "LESSON_NOT_FOUND"
    ACHIEVEMENT_NOT_FOUND = "ACHIEVEMENT_NOT_FOUND"

    INVALID_ORDER = "INVALID_ORDER"
    INVALID_ACHIEVEMENT = "INVALID_ACHIEVEMENT"

    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorResponse(BaseModel):
    """Standard error response model"""
    success: bool = False
    error: str
    message: str
    code: str
    errors: Optional[List[str]] = None


# OpenAPI documentation for the envelope every API route can return
ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Validation failed or request rejected"},
    404: {"model": ErrorResponse, "description": "Referenced resource not found"},
    500: {"model": ErrorResponse, "description": "Unexpected server error"},
}


class APIError(Exception):
    """Base API exception with consistent structure"""

    def __init__(
        self,
        status_code: int,
        error: str,
        message: str,
        code: str,
        errors: Optional[List[str]] = None
    ):
        self.status_code = status_code
        self.error = error
        self.message = message
        self.code = code
        self.errors = errors
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        result = {
            "success": False,
            "error": self.error,
            "message": self.message,
            "code": self.code
        }
        if self.errors:
            result["errors"] = self.errors
        return result

    def to_response(self) -> JSONResponse:
        """Convert to FastAPI JSONResponse"""
        return JSONResponse(status_code=self.status_code, content=self.to_dict())


class BadRequestError(APIError):
    """400 Bad Request - Broken business rule"""
    def __init__(self, message: str, code: str = ErrorCode.INVALID_INPUT):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error="Bad Request",
            message=message,
            code=code
        )


class ValidationFailedError(APIError):
    """400 Bad Request - One or more fields failed validation"""
    def __init__(self, errors: List[str], message: str = "Validation failed"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error="Validation Error",
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            errors=errors
        )


class NotFoundError(APIError):
    """404 Not Found - Resource does not exist"""
    def __init__(self, resource: str, identifier: Any = None, code: str = ErrorCode.NOT_FOUND):
        message = f"{resource} not found"
        if identifier is not None:
            message = f"{resource} with ID {identifier} not found"
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            error="Not Found",
            message=message,
            code=code
        )


class InternalError(APIError):
    """500 Internal Server Error - Use sparingly, only for true internal failures"""
    def __init__(self, message: str = "An internal error occurred", log_id: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error="Internal Error",
            message=message,
            code=ErrorCode.INTERNAL_ERROR,
            errors=[f"log_id: {log_id}"] if log_id else None
        )


def format_validation_errors(exc: RequestValidationError) -> List[str]:
    """
    Flatten pydantic errors into one readable string per failure.

    The request-body prefix is dropped from the location so clients see
    "target: Input should be greater than or equal to 1" rather than
    "body.target: ...".
    """
    messages = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        msg = error.get("msg", "Invalid value")
        messages.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return messages


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = format_validation_errors(exc)
    logger.warning(f"Validation error on {request.url.path}: {errors}")
    return ValidationFailedError(errors).to_response()


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Unknown routes, wrong methods and similar framework errors."""
    logger.warning(f"HTTP exception on {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": "Error",
            "message": str(exc.detail),
            "code": ErrorCode.INTERNAL_ERROR if exc.status_code >= 500 else ErrorCode.INVALID_INPUT
        },
        headers=getattr(exc, "headers", None)
    )


async def api_error_handler(request: Request, exc: APIError):
    logger.warning(f"API error on {request.url.path}: {exc.code} - {exc.message}")
    return exc.to_response()


async def global_exception_handler(request: Request, exc: Exception):
    log_id = str(uuid.uuid4())[:8]
    logger.error(f"[{log_id}] Unhandled exception on {request.url.path}: {type(exc).__name__}: {str(exc)}")
    return InternalError(
        "An unexpected error occurred. Please try again later.",
        log_id=log_id
    ).to_response()


def register_exception_handlers(app) -> None:
    """Attach the handlers above to a FastAPI application."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
