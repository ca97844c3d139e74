"""
Response envelopes shared by several resources.
"""

from pydantic import BaseModel, Field
from typing import Generic, List, TypeVar

T = TypeVar("T")


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str = Field(..., description="Human-readable confirmation", examples=["User created successfully"])


class SuccessResponse(BaseModel, Generic[T]):
    """Single record wrapped in a success envelope."""

    success: bool = Field(True, description="Always true for successful calls")
    data: T


class SuccessListResponse(BaseModel, Generic[T]):
    """Page of records wrapped in a success envelope."""

    success: bool = Field(True, description="Always true for successful calls")
    data: List[T]
