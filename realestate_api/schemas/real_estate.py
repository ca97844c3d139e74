"""
Pydantic schemas for real estate requests and responses.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime


class RealEstateCreate(BaseModel):
    """Schema for creating a new listing."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Apartamento Centro",
                "address": "Rua das Flores, 100",
                "price": 150000,
                "image": "https://example.com/images/centro.jpg",
                "area": 80,
                "location": "Centro",
                "bedrooms": 2
            }
        }
    )

    name: str = Field(..., min_length=1, max_length=255, description="Listing name")

    # "adress" is the key used by older clients and seed data
    address: str = Field(
        ...,
        min_length=1,
        max_length=500,
        validation_alias=AliasChoices("address", "adress"),
        description="Street address"
    )

    price: float = Field(..., ge=0, description="Asking price")
    image: Optional[str] = Field(None, max_length=1024, description="Image URL or path")
    area: Optional[float] = Field(None, ge=0, description="Area in square meters")
    location: Optional[str] = Field(None, max_length=255, description="Neighbourhood or city")
    bedrooms: Optional[int] = Field(None, ge=0, description="Number of bedrooms")

    @field_validator("name", "address")
    @classmethod
    def strip_text(cls, v):
        if not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip()


class RealEstateUpdate(BaseModel):
    """Schema for a partial listing update."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = Field(
        None,
        min_length=1,
        max_length=500,
        validation_alias=AliasChoices("address", "adress")
    )
    price: Optional[float] = Field(None, ge=0)
    image: Optional[str] = Field(None, max_length=1024)
    area: Optional[float] = Field(None, ge=0)
    location: Optional[str] = Field(None, max_length=255)
    bedrooms: Optional[int] = Field(None, ge=0)

    @field_validator("name", "address", "price")
    @classmethod
    def reject_null(cls, v, info):
        """Required listing fields may be changed but not cleared."""
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        if isinstance(v, str):
            if not v.strip():
                raise ValueError(f"{info.field_name} cannot be empty")
            return v.strip()
        return v


class RealEstateResponse(BaseModel):
    """Listing as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    address: str
    price: float
    image: Optional[str] = None
    area: Optional[float] = None
    location: Optional[str] = None
    bedrooms: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class RealEstateSearchResponse(BaseModel):
    """Every listing matching the search filters."""

    results: list[RealEstateResponse]
