"""
Exceptions raised by services and dependencies.

Each one carries the HTTP status and the machine-readable code that
ErrorHandlerService puts in the error body.
"""

from typing import Any, Dict, List, Optional
from fastapi import HTTPException, status


class APIException(HTTPException):
    """Base class: an HTTP status, an error code and a human readable detail."""

    status_code_default: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code_default: str = "INTERNAL_SERVER_ERROR"
    default_detail: str = "Internal server error"

    def __init__(
        self,
        detail: Optional[str] = None,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            status_code=status_code or self.status_code_default,
            detail=detail or self.default_detail,
            headers=headers
        )
        self.error_code = error_code or self.error_code_default


class BadRequestError(APIException):
    """Malformed input, failed validation or a dangling reference."""

    status_code_default = status.HTTP_400_BAD_REQUEST
    error_code_default = "BAD_REQUEST"
    default_detail = "Invalid request"

    def __init__(self, detail: str, field_errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(detail)
        self.field_errors = field_errors or []


class InvalidPageSizeError(BadRequestError):
    def __init__(self, allowed: List[int]):
        allowed_text = ", ".join(str(size) for size in allowed)
        super().__init__(f"The limite parameter must be one of: {allowed_text}")


class NotFoundError(APIException):
    """
    Missing record. Malformed ids end up here too, so callers cannot tell
    a bad id from an unknown one.
    """

    status_code_default = status.HTTP_404_NOT_FOUND
    error_code_default = "NOT_FOUND"

    def __init__(self, resource: str, resource_id: Optional[str] = None, detail: Optional[str] = None):
        if detail is None:
            detail = f"{resource} not found"
            if resource_id:
                detail += f" with ID: {resource_id}"
        super().__init__(detail)


class UnauthorizedError(APIException):
    status_code_default = status.HTTP_401_UNAUTHORIZED
    error_code_default = "UNAUTHORIZED"
    default_detail = "Authentication required"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class InvalidCredentialsError(UnauthorizedError):
    default_detail = "Invalid credentials"


class TokenExpiredError(UnauthorizedError):
    default_detail = "Token has expired"


class InvalidTokenError(UnauthorizedError):
    default_detail = "Invalid token"


class ForbiddenError(APIException):
    status_code_default = status.HTTP_403_FORBIDDEN
    error_code_default = "FORBIDDEN"
    default_detail = "Access forbidden"


class ConflictError(APIException):
    status_code_default = status.HTTP_409_CONFLICT
    error_code_default = "CONFLICT"
    default_detail = "Resource conflict"


class DuplicateResourceError(ConflictError):
    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} with identifier '{identifier}' already exists")


class ServiceUnavailableError(APIException):
    status_code_default = status.HTTP_503_SERVICE_UNAVAILABLE
    error_code_default = "SERVICE_UNAVAILABLE"
    default_detail = "Service temporarily unavailable"
