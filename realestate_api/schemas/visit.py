"""
Pydantic schemas for scheduled visits.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime
import uuid


class VisitCreate(BaseModel):
    """Schema for scheduling a visit. The date defaults to now."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "realEstate": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
                "date": "2024-05-05T14:00:00Z"
            }
        }
    )

    real_estate: uuid.UUID = Field(..., alias="realEstate", description="Id of the visited listing")
    date: Optional[datetime] = Field(None, description="Scheduled date of the visit")


class VisitUpdate(BaseModel):
    """Schema for a partial visit update."""

    model_config = ConfigDict(populate_by_name=True)

    real_estate: Optional[uuid.UUID] = Field(None, alias="realEstate")
    date: Optional[datetime] = None

    @field_validator("real_estate", "date")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class VisitResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    real_estate: str = Field(..., alias="realEstate")
    date: datetime
    created_at: datetime
    updated_at: datetime
