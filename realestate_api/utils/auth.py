"""
Authentication utilities for JWT token management and password hashing.
Provides JWT token generation and validation with role claims.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from passlib.context import CryptContext
from realestate_api.config import Settings
import uuid


# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ACCESS_TOKEN_TYPE = "access"


class TokenPayload:
    """JWT token payload structure."""

    def __init__(self, user_id: str, role: Optional[str], exp: datetime):
        self.user_id = user_id
        self.role = role
        self.exp = exp

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenPayload":
        """Create TokenPayload from dictionary."""
        return cls(
            user_id=data["sub"],
            role=data.get("role"),
            exp=datetime.fromtimestamp(data["exp"], tz=timezone.utc)
        )


def create_access_token(
    user_id: uuid.UUID,
    role: str,
    settings: Settings,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create JWT access token with user claims.

    Args:
        user_id: User's UUID
        role: User's role value (admin/user)
        settings: Application settings holding the signing secret
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    to_encode = {
        "sub": str(user_id),  # Subject (user ID)
        "role": role,
        "exp": now + expires_delta,
        "iat": now,
        "type": ACCESS_TOKEN_TYPE
    }

    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm
    )


def verify_token(token: str, settings: Settings) -> TokenPayload:
    """
    Verify and decode a JWT access token.

    Signature and expiry are checked by python-jose; an expired token raises
    jose.ExpiredSignatureError, a subclass of JWTError.

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        raise
    except Exception as e:
        raise JWTError(f"Token validation error: {str(e)}")

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise JWTError(f"Invalid token type. Expected {ACCESS_TOKEN_TYPE}")

    if not payload.get("sub") or "exp" not in payload:
        raise JWTError("Invalid token payload")

    return TokenPayload.from_dict(payload)


def hash_password(password: str) -> str:
    """
    Hash password using bcrypt.

    Raises:
        ValueError: If password is too short
    """
    if not password or len(password) < 8:
        raise ValueError("Password must be at least 8 characters long")

    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    if not plain_password or not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def extract_token_from_header(authorization: Optional[str]) -> str:
    """
    Extract JWT token from Authorization header.
    Clients send the raw token; a "Bearer <token>" value is accepted as well.

    Raises:
        ValueError: If the header is missing or malformed
    """
    if not authorization or not authorization.strip():
        raise ValueError("Authorization header is required")

    parts = authorization.split()
    if len(parts) == 1:
        return parts[0]
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    raise ValueError("Invalid authorization header format")
