"""
Pydantic schemas for favorites.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime
import uuid


class FavoriteCreate(BaseModel):
    """Schema for creating a favorites list."""

    model_config = ConfigDict(populate_by_name=True)

    real_estates: List[uuid.UUID] = Field(
        ...,
        alias="realEstates",
        min_length=1,
        description="Ids of the favorite listings, in order"
    )


class FavoriteUpdate(BaseModel):
    """Schema for replacing the listings of a favorites list."""

    model_config = ConfigDict(populate_by_name=True)

    real_estates: Optional[List[uuid.UUID]] = Field(None, alias="realEstates", min_length=1)


class FavoriteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    real_estates: List[str] = Field(..., alias="realEstates")
    created_at: datetime
    updated_at: datetime


class FavoriteListResponse(BaseModel):
    favorites: List[FavoriteResponse]


class FavoriteDetailResponse(BaseModel):
    favorite: FavoriteResponse


class FavoriteMutationResponse(BaseModel):
    message: str
    favorite: FavoriteResponse


class FavoriteDeletedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    deleted_favorite: FavoriteResponse = Field(..., alias="deletedFavorite")
