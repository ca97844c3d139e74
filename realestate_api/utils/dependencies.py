"""
FastAPI dependency injection utilities for settings, services and authentication.
"""

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession
from realestate_api.config import Settings
from realestate_api.database import get_db
from realestate_api.models.user import User
from realestate_api.services.access_policy import AccessPolicy, Identity
from realestate_api.services.auth import AuthService
from realestate_api.services.user import UserService
from realestate_api.services.real_estate import RealEstateService
from realestate_api.services.favorite import FavoriteService
from realestate_api.services.visit import VisitService
from realestate_api.utils.auth import extract_token_from_header
from realestate_api.utils.exceptions import InvalidTokenError, UnauthorizedError


# Clients send the token as-is in the Authorization header
authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    description="JWT access token, optionally prefixed with 'Bearer '"
)


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


def get_access_policy(request: Request) -> AccessPolicy:
    return request.app.state.access_policy


async def get_auth_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
) -> AuthService:
    return AuthService(db, settings)


async def get_user_service(
    db: AsyncSession = Depends(get_db),
    policy: AccessPolicy = Depends(get_access_policy)
) -> UserService:
    return UserService(db, policy)


async def get_real_estate_service(
    db: AsyncSession = Depends(get_db),
    policy: AccessPolicy = Depends(get_access_policy)
) -> RealEstateService:
    return RealEstateService(db, policy)


async def get_favorite_service(
    db: AsyncSession = Depends(get_db),
    policy: AccessPolicy = Depends(get_access_policy),
    settings: Settings = Depends(get_app_settings)
) -> FavoriteService:
    return FavoriteService(db, policy, settings)


async def get_visit_service(
    db: AsyncSession = Depends(get_db),
    policy: AccessPolicy = Depends(get_access_policy)
) -> VisitService:
    return VisitService(db, policy)


async def _authenticate(request: Request, authorization: str, auth_service: AuthService) -> User:
    try:
        token = extract_token_from_header(authorization)
    except ValueError as e:
        raise InvalidTokenError(str(e))

    user = await auth_service.get_current_user(token)
    request.state.user = user
    return user


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Depends(authorization_header),
    auth_service: AuthService = Depends(get_auth_service)
) -> User:
    """
    Resolve the Authorization header to the calling user.

    Raises:
        UnauthorizedError: If no token is provided
        InvalidTokenError: If the token is invalid or its user no longer exists
        TokenExpiredError: If the token has expired
    """
    if not authorization:
        raise UnauthorizedError("Authentication token required")

    return await _authenticate(request, authorization, auth_service)


async def get_optional_current_user(
    request: Request,
    authorization: Optional[str] = Depends(authorization_header),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[User]:
    """
    Like get_current_user, but anonymous callers get None.
    A token that is present but invalid is still rejected.
    """
    if not authorization:
        return None

    return await _authenticate(request, authorization, auth_service)


async def get_current_identity(current_user: User = Depends(get_current_user)) -> Identity:
    return Identity.from_user(current_user)


async def get_optional_identity(
    current_user: Optional[User] = Depends(get_optional_current_user)
) -> Optional[Identity]:
    if current_user is None:
        return None
    return Identity.from_user(current_user)
