"""
Error response schemas for API documentation.
Every error leaves the API as {"error": {...}} built by ErrorHandlerService.
"""

from pydantic import BaseModel, Field
from typing import List, Optional


class ErrorDetail(BaseModel):
    """One field-level problem."""

    field: Optional[str] = Field(None, description="Field that caused the error", examples=["email"])
    message: str = Field(..., description="Human-readable error message", examples=["value is not a valid email address"])
    type: Optional[str] = Field(None, description="Error type identifier", examples=["value_error"])


class ErrorResponse(BaseModel):
    code: str = Field(..., description="Error code identifier", examples=["VALIDATION_ERROR"])
    message: str = Field(..., description="Human-readable error message", examples=["Request validation failed"])
    timestamp: str = Field(..., description="Error timestamp in ISO format", examples=["2024-01-01T00:00:00Z"])
    request_id: Optional[str] = Field(None, description="Request identifier for tracking", examples=["abc12345"])
    details: Optional[List[ErrorDetail]] = None


class APIErrorResponse(BaseModel):
    """Schema for API error response wrapper."""

    error: ErrorResponse


def _example(code: str, message: str) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "timestamp": "2024-01-01T00:00:00Z",
            "request_id": "abc12345"
        }
    }


def error_response_doc(status_code: int, description: str, code: str, message: str) -> dict:
    """OpenAPI `responses` entry for one error status."""
    return {
        status_code: {
            "description": description,
            "model": APIErrorResponse,
            "content": {"application/json": {"example": _example(code, message)}}
        }
    }


BAD_REQUEST_RESPONSE = error_response_doc(400, "Bad Request", "VALIDATION_ERROR", "Request validation failed")
UNAUTHORIZED_RESPONSE = error_response_doc(401, "Unauthorized", "UNAUTHORIZED", "Authentication token required")
FORBIDDEN_RESPONSE = error_response_doc(403, "Forbidden", "FORBIDDEN", "Only administrators can create listings")
NOT_FOUND_RESPONSE = error_response_doc(404, "Not Found", "NOT_FOUND", "Real estate not found")
CONFLICT_RESPONSE = error_response_doc(409, "Conflict", "CONFLICT", "User with identifier 'maria@example.com' already exists")
INTERNAL_ERROR_RESPONSE = error_response_doc(
    500, "Internal Server Error", "INTERNAL_SERVER_ERROR", "An unexpected error occurred. Please try again later."
)

COMMON_ERROR_RESPONSES = {
    **BAD_REQUEST_RESPONSE,
    **INTERNAL_ERROR_RESPONSE,
}

AUTH_ERROR_RESPONSES = {
    **UNAUTHORIZED_RESPONSE,
    **FORBIDDEN_RESPONSE,
}
