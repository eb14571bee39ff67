"""
Centralized error handling and the error taxonomy of the contract lifecycle engine.
"""
import logging
from typing import Optional, Dict, Any, List

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from contracthub.middleware.request_id import get_request_id

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base exception class for application-specific errors."""

    def __init__(
        self,
        error_code: str,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Optional[Dict[str, Any]] = None
    ):
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppException):
    """Raised when input is malformed or incomplete."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            error_code="VALIDATION_ERROR",
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details
        )


class InvalidReferenceError(AppException):
    """Raised when an identifier is not well-formed for the store."""
    def __init__(self, resource: str, identifier: Optional[str] = None):
        super().__init__(
            error_code="INVALID_REFERENCE",
            message=f"Invalid {resource.lower()} ID format",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"resource": resource, "identifier": identifier}
        )


class NotFoundError(AppException):
    """Raised when resource is not found."""
    def __init__(self, resource: str, identifier: Optional[str] = None):
        super().__init__(
            error_code="NOT_FOUND",
            message=f"{resource} not found",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource": resource, "identifier": identifier}
        )


class ImmutableStateError(AppException):
    """Raised when a contract in a terminal status is asked to change."""
    def __init__(self, current_status: str, attempted_status: str):
        super().__init__(
            error_code="CONTRACT_IMMUTABLE",
            message=f"Contract with status '{current_status}' is immutable and cannot be modified",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"current_status": current_status, "attempted_status": attempted_status}
        )


class InvalidTransitionError(AppException):
    """Raised when the target status is not reachable from the current one."""
    def __init__(self, current_status: str, attempted_status: str, allowed: Optional[List[str]] = None):
        super().__init__(
            error_code="INVALID_TRANSITION",
            message=f"Invalid transition from '{current_status}' to '{attempted_status}'",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={
                "current_status": current_status,
                "attempted_status": attempted_status,
                "allowed_statuses": allowed or [],
            }
        )


class PermissionDeniedError(AppException):
    """Raised when the actor's role may not move a contract to the target status."""
    def __init__(self, role: Optional[str], attempted_status: str, required_roles: List[str]):
        message = f"You do not have permission to transition contracts to '{attempted_status}'."
        if required_roles:
            message += f" Required role: {', '.join(required_roles)}"
        super().__init__(
            error_code="PERMISSION_DENIED",
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            details={
                "role": role,
                "attempted_status": attempted_status,
                "required_roles": required_roles,
            }
        )


class ConflictError(AppException):
    """Raised when a concurrent write changed the record under us."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            error_code="CONFLICT",
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details=details
        )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle application-specific exceptions."""
    logger.warning(
        f"AppException: {exc.error_code} - {exc.message}",
        extra={
            "error_code": exc.error_code,
            "request_id": get_request_id(request),
            "path": request.url.path,
            "method": request.method,
            "details": exc.details
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": exc.error_code,
            "message": exc.message,
            "details": exc.details
        }
    )


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render body/path validation failures in the same envelope as AppException."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    if location:
        message = f"{location}: {message}"
    logger.warning(
        f"RequestValidationError: {message}",
        extra={"request_id": get_request_id(request), "path": request.url.path, "method": request.method}
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error_code": "VALIDATION_ERROR",
            "message": message,
            "details": {"errors": [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors]}
        }
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        f"Unexpected error: {str(exc)}",
        exc_info=True,
        extra={
            "request_id": get_request_id(request),
            "path": request.url.path,
            "method": request.method
        }
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error_code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            "details": {}
        }
    )
