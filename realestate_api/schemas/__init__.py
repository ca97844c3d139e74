"""
Pydantic schemas for request/response validation.
"""

from realestate_api.schemas.common import MessageResponse, SuccessResponse, SuccessListResponse
from realestate_api.schemas.auth import LoginRequest, TokenResponse
from realestate_api.schemas.user import UserCreate, UserUpdate, UserResponse, UserUpdateResponse
from realestate_api.schemas.real_estate import (
    RealEstateCreate,
    RealEstateUpdate,
    RealEstateResponse,
    RealEstateSearchResponse,
)
from realestate_api.schemas.favorite import (
    FavoriteCreate,
    FavoriteUpdate,
    FavoriteResponse,
    FavoriteListResponse,
    FavoriteDetailResponse,
    FavoriteMutationResponse,
    FavoriteDeletedResponse,
)
from realestate_api.schemas.visit import VisitCreate, VisitUpdate, VisitResponse
from realestate_api.schemas.error import ErrorDetail, ErrorResponse, APIErrorResponse

__all__ = [
    "MessageResponse",
    "SuccessResponse",
    "SuccessListResponse",
    "LoginRequest",
    "TokenResponse",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "UserUpdateResponse",
    "RealEstateCreate",
    "RealEstateUpdate",
    "RealEstateResponse",
    "RealEstateSearchResponse",
    "FavoriteCreate",
    "FavoriteUpdate",
    "FavoriteResponse",
    "FavoriteListResponse",
    "FavoriteDetailResponse",
    "FavoriteMutationResponse",
    "FavoriteDeletedResponse",
    "VisitCreate",
    "VisitUpdate",
    "VisitResponse",
    "ErrorDetail",
    "ErrorResponse",
    "APIErrorResponse",
]
