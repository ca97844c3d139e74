"""
Favorites endpoints. All of them require authentication.
"""

from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from realestate_api.services.access_policy import Identity
from realestate_api.services.favorite import FavoriteService
from realestate_api.schemas.favorite import (
    FavoriteCreate,
    FavoriteUpdate,
    FavoriteResponse,
    FavoriteListResponse,
    FavoriteDetailResponse,
    FavoriteMutationResponse,
    FavoriteDeletedResponse,
)
from realestate_api.schemas.error import COMMON_ERROR_RESPONSES, NOT_FOUND_RESPONSE, UNAUTHORIZED_RESPONSE
from realestate_api.utils.dependencies import get_current_identity, get_favorite_service


router = APIRouter(prefix="/favorites", tags=["Favorites"])


@router.get(
    "",
    response_model=FavoriteListResponse,
    summary="List favorites",
    description="Paginated favorites. The limite parameter is required and must be 5, 10 or 30.",
    responses={**COMMON_ERROR_RESPONSES, **UNAUTHORIZED_RESPONSE}
)
async def list_favorites(
    limite: Optional[int] = Query(None, description="Page size, one of 5, 10 or 30"),
    pagina: Optional[int] = Query(None, description="Page number, starting at 1"),
    caller: Identity = Depends(get_current_identity),
    favorite_service: FavoriteService = Depends(get_favorite_service)
) -> FavoriteListResponse:
    favorites = await favorite_service.list_favorites(limite, pagina, caller)
    return FavoriteListResponse(
        favorites=[FavoriteResponse.model_validate(favorite.to_dict()) for favorite in favorites]
    )


@router.get(
    "/{favorite_id}",
    response_model=FavoriteDetailResponse,
    summary="Get favorite",
    responses={**UNAUTHORIZED_RESPONSE, **NOT_FOUND_RESPONSE}
)
async def get_favorite(
    favorite_id: str,
    caller: Identity = Depends(get_current_identity),
    favorite_service: FavoriteService = Depends(get_favorite_service)
) -> FavoriteDetailResponse:
    favorite = await favorite_service.get_favorite(favorite_id, caller)
    return FavoriteDetailResponse(favorite=FavoriteResponse.model_validate(favorite.to_dict()))


@router.post(
    "",
    response_model=FavoriteMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create favorite",
    description="Create a favorites list. Every referenced listing must exist.",
    responses={**COMMON_ERROR_RESPONSES, **UNAUTHORIZED_RESPONSE}
)
async def create_favorite(
    favorite_data: FavoriteCreate,
    caller: Identity = Depends(get_current_identity),
    favorite_service: FavoriteService = Depends(get_favorite_service)
) -> FavoriteMutationResponse:
    favorite = await favorite_service.create_favorite(favorite_data, caller)
    return FavoriteMutationResponse(
        message="Favorite created successfully",
        favorite=FavoriteResponse.model_validate(favorite.to_dict())
    )


@router.put(
    "/{favorite_id}",
    response_model=FavoriteMutationResponse,
    summary="Update favorite",
    responses={**COMMON_ERROR_RESPONSES, **UNAUTHORIZED_RESPONSE, **NOT_FOUND_RESPONSE}
)
async def update_favorite(
    favorite_id: str,
    favorite_data: FavoriteUpdate,
    caller: Identity = Depends(get_current_identity),
    favorite_service: FavoriteService = Depends(get_favorite_service)
) -> FavoriteMutationResponse:
    favorite = await favorite_service.update_favorite(favorite_id, favorite_data, caller)
    return FavoriteMutationResponse(
        message="Favorite updated successfully",
        favorite=FavoriteResponse.model_validate(favorite.to_dict())
    )


@router.delete(
    "/{favorite_id}",
    response_model=FavoriteDeletedResponse,
    summary="Delete favorite",
    responses={**UNAUTHORIZED_RESPONSE, **NOT_FOUND_RESPONSE}
)
async def delete_favorite(
    favorite_id: str,
    caller: Identity = Depends(get_current_identity),
    favorite_service: FavoriteService = Depends(get_favorite_service)
) -> FavoriteDeletedResponse:
    favorite = await favorite_service.delete_favorite(favorite_id, caller)
    return FavoriteDeletedResponse(
        message="Favorite deleted successfully",
        deleted_favorite=FavoriteResponse.model_validate(favorite.to_dict())
    )
