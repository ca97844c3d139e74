"""
Pydantic schemas for login requests and responses.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class LoginRequest(BaseModel):
    """Login request schema."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"example": {"email": "maria@example.com", "senha": "securepassword123"}}
    )

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., alias="senha", min_length=1, max_length=128, description="User's password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()


class TokenResponse(BaseModel):
    """Token issued on login. Send it back as the Authorization header."""

    token: str = Field(..., description="JWT access token")
