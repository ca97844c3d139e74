"""
User repository for authentication and account management operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from realestate_api.repositories.base import BaseRepository
from realestate_api.models.user import User, UserRole
from realestate_api.utils.auth import hash_password
from typing import Optional, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository(BaseRepository[User]):
    """
    Repository for user accounts.
    Passwords are hashed here so plaintext never reaches the model.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_user(self, user_data: Dict[str, Any]) -> User:
        """
        Create a new user with password hashing.

        Args:
            user_data: Must include name, email, password; role defaults to USER

        Returns:
            Created user instance
        """
        data = dict(user_data)
        password = data.pop("password")

        create_data = {
            "name": data["name"],
            "email": normalize_email(data["email"]),
            "hashed_password": hash_password(password),
            "role": data.get("role") or UserRole.USER,
        }

        created_user = await self.create(create_data)
        logger.info(f"Created user: {created_user.email} (ID: {created_user.id}, role: {created_user.role.value})")
        return created_user

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Returns:
            User instance if found, None otherwise
        """
        user = await self.get_by_field("email", normalize_email(email))
        if user is None:
            logger.debug(f"User with email {email} not found")
        return user

    async def email_taken(self, email: str, exclude_user_id: Optional[uuid.UUID] = None) -> bool:
        """Check whether another account already uses this email."""
        query = select(func.count(User.id)).where(User.email == normalize_email(email))
        if exclude_user_id is not None:
            query = query.where(User.id != exclude_user_id)

        result = await self.db.execute(query)
        return result.scalar() > 0

    async def update_user(self, user_id: uuid.UUID, update_data: Dict[str, Any]) -> Optional[User]:
        """
        Partially update a user. A "password" entry is hashed into hashed_password.

        Returns:
            Updated user instance or None if not found
        """
        data = dict(update_data)
        if "password" in data:
            data["hashed_password"] = hash_password(data.pop("password"))
        if "email" in data:
            data["email"] = normalize_email(data["email"])

        updated_user = await self.update(user_id, data)
        if updated_user:
            logger.info(f"Updated user {updated_user.email}: {sorted(update_data)}")
        return updated_user

    async def get_first_admin(self) -> Optional[User]:
        """Return any administrator account, or None when there is none."""
        result = await self.db.execute(select(User).where(User.role == UserRole.ADMIN).limit(1))
        return result.scalar_one_or_none()

    async def count_by_role(self, role: UserRole) -> int:
        result = await self.db.execute(select(func.count(User.id)).where(User.role == role))
        return result.scalar()
