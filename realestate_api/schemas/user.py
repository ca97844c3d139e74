"""
Pydantic schemas for user requests and responses.
Wire keys follow the public API (nome, senha); attribute names are English.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
from realestate_api.models.user import UserRole


class UserCreate(BaseModel):
    """Schema for signing up or creating an administrator."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "nome": "Maria Silva",
                "email": "maria@example.com",
                "senha": "securepassword123"
            }
        }
    )

    name: str = Field(
        ...,
        alias="nome",
        min_length=1,
        max_length=255,
        description="User's display name"
    )

    email: EmailStr = Field(..., description="User's email address")

    password: str = Field(
        ...,
        alias="senha",
        min_length=8,
        max_length=128,
        description="User's password (minimum 8 characters)"
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()


class UserUpdate(BaseModel):
    """Schema for a partial user update. Only the fields sent are changed."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"example": {"nome": "Maria Souza"}}
    )

    name: Optional[str] = Field(None, alias="nome", min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, alias="senha", min_length=8, max_length=128)
    role: Optional[UserRole] = Field(None, description="New role (administrators only)")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        if v is None:
            raise ValueError("Email cannot be null")
        return v.lower().strip()

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if v is None or not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()

    @field_validator("password", "role")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class UserResponse(BaseModel):
    """User response schema (excluding sensitive data)."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str = Field(..., description="User's unique identifier")
    name: str = Field(..., alias="nome", description="User's display name")
    email: EmailStr = Field(..., description="User's email address")
    role: UserRole = Field(..., description="User's role")
    created_at: datetime
    updated_at: datetime


class UserUpdateResponse(BaseModel):
    """Confirmation plus the updated user."""

    message: str
    user: UserResponse
