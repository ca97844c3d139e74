"""
Utility modules for the Real Estate Listings API.
"""

from .auth import (
    create_access_token,
    verify_token,
    hash_password,
    verify_password,
    extract_token_from_header,
    TokenPayload
)

from .exceptions import (
    APIException,
    BadRequestError,
    NotFoundError,
    UnauthorizedError,
    ForbiddenError,
    ConflictError,
    ServiceUnavailableError,
    InvalidCredentialsError,
    TokenExpiredError,
    InvalidTokenError,
    InvalidPageSizeError,
    DuplicateResourceError
)
from .pagination import Page, resolve_page
from .validators import parse_id

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    "create_access_token",
    "verify_token",
    "hash_password",
    "verify_password",
    "extract_token_from_header",
    "TokenPayload",
    "APIException",
    "BadRequestError",
    "NotFoundError",
    "UnauthorizedError",
    "ForbiddenError",
    "ConflictError",
    "ServiceUnavailableError",
    "InvalidCredentialsError",
    "TokenExpiredError",
    "InvalidTokenError",
    "InvalidPageSizeError",
    "DuplicateResourceError",
    "Page",
    "resolve_page",
    "parse_id",
]
