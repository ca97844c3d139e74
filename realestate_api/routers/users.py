"""
User account endpoints: signup, administrator creation, login, update and deletion.
"""

from fastapi import APIRouter, Depends, status

from realestate_api.services.access_policy import Identity
from realestate_api.services.auth import AuthService
from realestate_api.services.user import UserService
from realestate_api.schemas.auth import LoginRequest, TokenResponse
from realestate_api.schemas.common import MessageResponse
from realestate_api.schemas.user import UserCreate, UserUpdate, UserResponse, UserUpdateResponse
from realestate_api.schemas.error import (
    AUTH_ERROR_RESPONSES,
    COMMON_ERROR_RESPONSES,
    CONFLICT_RESPONSE,
    NOT_FOUND_RESPONSE,
    UNAUTHORIZED_RESPONSE,
)
from realestate_api.utils.dependencies import get_auth_service, get_current_identity, get_user_service


router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "/cadastro",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Sign up",
    description="Create a regular user account. No authentication required.",
    responses={**COMMON_ERROR_RESPONSES, **CONFLICT_RESPONSE}
)
async def signup(
    user_data: UserCreate,
    user_service: UserService = Depends(get_user_service)
) -> MessageResponse:
    await user_service.signup(user_data)
    return MessageResponse(message="User created successfully")


@router.post(
    "/administradores",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create administrator",
    description="Create an administrator account. Requires an administrator token.",
    responses={**COMMON_ERROR_RESPONSES, **AUTH_ERROR_RESPONSES, **CONFLICT_RESPONSE}
)
async def create_admin(
    user_data: UserCreate,
    caller: Identity = Depends(get_current_identity),
    user_service: UserService = Depends(get_user_service)
) -> MessageResponse:
    await user_service.create_admin(user_data, caller)
    return MessageResponse(message="Administrator created successfully")


@router.post(
    "/login",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Log in",
    description="Exchange email and password for an access token.",
    responses={**COMMON_ERROR_RESPONSES, **UNAUTHORIZED_RESPONSE, **NOT_FOUND_RESPONSE}
)
async def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> TokenResponse:
    """
    Authenticate a user.

    Raises:
        NotFoundError: If the email is not registered
        InvalidCredentialsError: If the password is wrong
    """
    _, token = await auth_service.login(login_data.email, login_data.password)
    return TokenResponse(token=token)


@router.put(
    "/usuarios/{user_id}",
    response_model=UserUpdateResponse,
    status_code=status.HTTP_200_OK,
    summary="Update user",
    description="Partially update a user. Administrators may update anyone, users only themselves.",
    responses={**COMMON_ERROR_RESPONSES, **AUTH_ERROR_RESPONSES, **NOT_FOUND_RESPONSE, **CONFLICT_RESPONSE}
)
async def update_user(
    user_id: str,
    user_data: UserUpdate,
    caller: Identity = Depends(get_current_identity),
    user_service: UserService = Depends(get_user_service)
) -> UserUpdateResponse:
    user = await user_service.update_user(user_id, user_data, caller)
    return UserUpdateResponse(
        message="User updated successfully",
        user=UserResponse.model_validate(user.to_dict())
    )


@router.delete(
    "/usuarios/{user_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete user",
    description="Delete a regular user. Requires an administrator token; administrators cannot be deleted.",
    responses={**AUTH_ERROR_RESPONSES, **NOT_FOUND_RESPONSE}
)
async def delete_user(
    user_id: str,
    caller: Identity = Depends(get_current_identity),
    user_service: UserService = Depends(get_user_service)
) -> MessageResponse:
    await user_service.delete_user(user_id, caller)
    return MessageResponse(message="User deleted successfully")
