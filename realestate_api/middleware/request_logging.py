"""
Request logging middleware: request ids, body size limit and access logs.
"""

from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import logging
import time
import uuid

from realestate_api.services.error_handler import ErrorHandlerService
from realestate_api.utils.exceptions import BadRequestError

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with a short id (returned as X-Request-ID),
    rejects bodies larger than max_request_size and logs each response.
    """

    def __init__(
        self,
        app: ASGIApp,
        max_request_size: int = 1024 * 1024,
        enable_request_logging: bool = True
    ):
        super().__init__(app)
        self.max_request_size = max_request_size
        self.enable_request_logging = enable_request_logging

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        start_time = time.time()

        try:
            await self._validate_request_size(request)

            response = await call_next(request)

            if self.enable_request_logging:
                processing_time = time.time() - start_time
                logger.info(
                    f"[{request_id}] {request.method} {request.url.path} "
                    f"-> {response.status_code} ({processing_time * 1000:.1f}ms)"
                )

            response.headers["X-Request-ID"] = request_id
            return response

        except BadRequestError as exc:
            response = ErrorHandlerService.handle_api_exception(exc, request)
            response.headers["X-Request-ID"] = request_id
            return response
        except Exception as exc:
            logger.error(
                f"Middleware error [{request_id}]: {type(exc).__name__} - {exc}",
                extra={"request_id": request_id, "path": request.url.path, "method": request.method}
            )
            response = ErrorHandlerService.handle_unexpected_error(exc, request)
            response.headers["X-Request-ID"] = request_id
            return response

    async def _validate_request_size(self, request: Request) -> None:
        """
        Check the declared Content-Length, or for chunked uploads the body
        itself, which is read into memory once and replayed to the route.

        Raises:
            BadRequestError: If the body size exceeds the limit
        """
        content_length = request.headers.get("content-length")
        if not content_length:
            if "chunked" in request.headers.get("transfer-encoding", "").lower():
                self._check_size(len(await request.body()))
            return

        try:
            size = int(content_length)
        except ValueError:
            raise BadRequestError("Invalid content-length header")

        self._check_size(size)

    def _check_size(self, size: int) -> None:
        if size > self.max_request_size:
            raise BadRequestError(
                f"Request size {size} bytes exceeds maximum allowed size {self.max_request_size} bytes"
            )
