"""
Authentication service: login and token-to-user resolution.
"""

from typing import Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from jose import ExpiredSignatureError, JWTError
from realestate_api.config import Settings
from realestate_api.repositories.user import UserRepository
from realestate_api.models.user import User
from realestate_api.utils.auth import create_access_token, verify_token
from realestate_api.utils.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
    TokenExpiredError
)
import uuid
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """
    Issues access tokens on login and resolves presented tokens back to users.
    """

    def __init__(self, db_session: AsyncSession, settings: Settings):
        self.db = db_session
        self.settings = settings
        self.user_repo = UserRepository(db_session)

    async def login(self, email: str, password: str) -> Tuple[User, str]:
        """
        Authenticate a user and issue an access token.

        Returns:
            Tuple of (user, access_token)

        Raises:
            NotFoundError: If no account uses this email
            InvalidCredentialsError: If the password does not match
        """
        user = await self.user_repo.get_by_email(email)
        if user is None:
            logger.warning(f"Login attempt for unknown email: {email}")
            raise NotFoundError("User", detail="User not found")

        if not user.verify_password(password):
            logger.warning(f"Failed login attempt for {user.email}")
            raise InvalidCredentialsError("Invalid password")

        token = self.create_token(user)
        logger.info(f"User logged in: {user.email}")
        return user, token

    def create_token(self, user: User) -> str:
        return create_access_token(user_id=user.id, role=user.role.value, settings=self.settings)

    async def get_current_user(self, token: str) -> User:
        """
        Resolve an access token to the user it was issued for.
        Exactly one store read per call.

        Raises:
            TokenExpiredError: If the token has expired
            InvalidTokenError: If the token is malformed, badly signed or its user is gone
        """
        try:
            payload = verify_token(token, self.settings)
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except JWTError as e:
            logger.debug(f"Rejected token: {e}")
            raise InvalidTokenError()

        try:
            user_id = uuid.UUID(payload.user_id)
        except ValueError:
            raise InvalidTokenError("Invalid token subject")

        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            logger.warning(f"Token presented for missing user {user_id}")
            raise InvalidTokenError("User no longer exists")

        return user
