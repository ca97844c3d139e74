"""
Turns every exception leaving a route into the error body

    {"error": {"code", "message", "timestamp", "details"?, "request_id"?}}

Client errors are logged as warnings, server errors with their traceback.
"""

from typing import Dict, Any, Optional, List
from datetime import datetime, timezone
from fastapi import Request
from starlette.exceptions import HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from realestate_api.utils.exceptions import APIException, BadRequestError
import logging
import uuid

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "An unexpected error occurred. Please try again later."

# Substring of the driver message -> what the client is told
CONSTRAINT_MESSAGES = [
    ("unique", "Duplicate value for unique field"),
    ("foreign key", "Referenced record does not exist"),
    ("not null", "Required field cannot be empty"),
    ("check constraint", "Value does not meet validation requirements"),
]


class ErrorHandlerService:

    @staticmethod
    def format_error_response(
        error_code: str,
        message: str,
        details: Optional[List[Dict[str, Any]]] = None,
        request_id: Optional[str] = None
    ) -> Dict[str, Any]:
        error: Dict[str, Any] = {
            "code": error_code,
            "message": message,
            "timestamp": ErrorHandlerService._get_current_timestamp(),
        }
        if details:
            error["details"] = details
        if request_id:
            error["request_id"] = request_id
        return {"error": error}

    @staticmethod
    def handle_api_exception(
        exception: APIException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        details = exception.field_errors if isinstance(exception, BadRequestError) else None
        return ErrorHandlerService._respond(
            request,
            status_code=exception.status_code,
            error_code=exception.error_code,
            message=exception.detail,
            details=details,
            headers=exception.headers,
        )

    @staticmethod
    def handle_validation_error(
        exception: Exception,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Request body, query or pydantic model validation failures.
        Anything exposing ``errors()`` in pydantic's format is accepted.

        Returns:
            400 with one detail entry per invalid field
        """
        details = [
            {
                "field": " -> ".join(str(part) for part in error.get("loc", ())),
                "message": error.get("msg", "Invalid value"),
                "type": error.get("type"),
            }
            for error in exception.errors()
        ]
        return ErrorHandlerService._respond(
            request,
            status_code=400,
            error_code="VALIDATION_ERROR",
            message="Request validation failed",
            details=details,
        )

    @staticmethod
    def handle_database_error(
        exception: SQLAlchemyError,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Integrity violations become 409, any other store failure a bare 500."""
        if isinstance(exception, IntegrityError):
            constraint = ErrorHandlerService._extract_constraint_info(exception)
            message = f"Constraint violation: {constraint}" if constraint else "Data integrity constraint violation"
            return ErrorHandlerService._respond(
                request, status_code=409, error_code="CONFLICT", message=message
            )

        return ErrorHandlerService._respond(
            request,
            status_code=500,
            error_code="DATABASE_ERROR",
            message="Database operation failed",
            exception=exception,
        )

    @staticmethod
    def handle_http_exception(
        exception: HTTPException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Framework errors such as unknown routes (404) or wrong methods (405)."""
        return ErrorHandlerService._respond(
            request,
            status_code=exception.status_code,
            error_code=f"HTTP_{exception.status_code}",
            message=str(exception.detail),
            headers=getattr(exception, "headers", None),
        )

    @staticmethod
    def handle_unexpected_error(
        exception: Exception,
        request: Optional[Request] = None
    ) -> JSONResponse:
        return ErrorHandlerService._respond(
            request,
            status_code=500,
            error_code="INTERNAL_SERVER_ERROR",
            message=GENERIC_SERVER_ERROR,
            exception=exception,
        )

    @staticmethod
    def _respond(
        request: Optional[Request],
        status_code: int,
        error_code: str,
        message: str,
        details: Optional[List[Dict[str, Any]]] = None,
        headers: Optional[Dict[str, str]] = None,
        exception: Optional[Exception] = None
    ) -> JSONResponse:
        request_id = ErrorHandlerService._request_id(request)
        extra = {
            "request_id": request_id,
            "error_code": error_code,
            "status_code": status_code,
            "path": request.url.path if request else None,
        }

        if status_code >= 500:
            cause = f"{type(exception).__name__} - {exception}" if exception else message
            logger.error(f"[{request_id}] {error_code}: {cause}", extra=extra, exc_info=exception)
        else:
            logger.warning(f"[{request_id}] {error_code}: {message}", extra=extra)

        return JSONResponse(
            status_code=status_code,
            content=ErrorHandlerService.format_error_response(error_code, message, details, request_id),
            headers=headers,
        )

    @staticmethod
    def _request_id(request: Optional[Request]) -> str:
        """The id assigned by the logging middleware, or a fresh one."""
        if request is not None:
            request_id = getattr(request.state, "request_id", None)
            if request_id:
                return request_id
        return ErrorHandlerService._generate_request_id()

    @staticmethod
    def _generate_request_id() -> str:
        return str(uuid.uuid4())[:8]

    @staticmethod
    def _get_current_timestamp() -> str:
        return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")

    @staticmethod
    def _extract_constraint_info(exception: IntegrityError) -> Optional[str]:
        error_msg = str(exception.orig).lower()
        for needle, description in CONSTRAINT_MESSAGES:
            if needle in error_msg:
                return description
        return None
