"""
User account service: signup, administrator creation, update and deletion.
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from realestate_api.repositories.user import UserRepository
from realestate_api.models.user import User, UserRole
from realestate_api.schemas.user import UserCreate, UserUpdate
from realestate_api.services.access_policy import AccessPolicy, Identity, Operation, Resource
from realestate_api.utils.exceptions import DuplicateResourceError, NotFoundError
from realestate_api.utils.validators import parse_id
import uuid
import logging

logger = logging.getLogger(__name__)

USER_NOT_FOUND_OR_ADMIN = "User not found or is an administrator"


class UserService:
    """
    Account management. Every operation is checked against the access policy
    before the store is written.
    """

    def __init__(self, db_session: AsyncSession, policy: AccessPolicy):
        self.db = db_session
        self.policy = policy
        self.user_repo = UserRepository(db_session)

    async def signup(self, user_data: UserCreate) -> User:
        """Create a regular user account. Open to anonymous callers."""
        self.policy.enforce(Resource.USER, Operation.CREATE, None)
        return await self._create(user_data, UserRole.USER)

    async def create_admin(self, user_data: UserCreate, caller: Optional[Identity]) -> User:
        """
        Create an administrator account.

        Raises:
            ForbiddenError: If the caller is not an administrator
            DuplicateResourceError: If the email is already registered
        """
        self.policy.enforce(Resource.USER, Operation.CREATE_ADMIN, caller)
        user = await self._create(user_data, UserRole.ADMIN)
        logger.info(f"Administrator {user.email} created by {caller.id}")
        return user

    async def update_user(self, user_id: str, user_data: UserUpdate, caller: Optional[Identity]) -> User:
        """
        Partially update an account. Administrators may update anyone,
        other users only themselves, and only administrators may change roles.

        Raises:
            NotFoundError: If the user does not exist
            ForbiddenError: If the caller may not perform the update
            DuplicateResourceError: If the new email belongs to another account
        """
        try:
            target_id = parse_id(user_id, "User")
        except NotFoundError:
            self.policy.enforce(Resource.USER, Operation.UPDATE, caller)
            raise

        self.policy.enforce(Resource.USER, Operation.UPDATE, caller, Identity.for_id(target_id))

        target = await self.user_repo.get_by_id(target_id)
        if target is None:
            raise NotFoundError("User", str(target_id))

        update_data = user_data.model_dump(exclude_unset=True)
        if "role" in update_data:
            self.policy.enforce(Resource.USER, Operation.CHANGE_ROLE, caller, Identity.from_user(target))

        if "email" in update_data:
            await self._ensure_email_available(update_data["email"], exclude_user_id=target_id)

        updated = await self.user_repo.update_user(target_id, update_data)
        if updated is None:
            raise NotFoundError("User", str(target_id))
        return updated

    async def delete_user(self, user_id: str, caller: Optional[Identity]) -> User:
        """
        Delete a non-administrator account.

        Administrator targets are reported exactly like missing ones.

        Raises:
            ForbiddenError: If the caller is not an administrator
            NotFoundError: If the target does not exist or is an administrator
        """
        self.policy.enforce(Resource.USER, Operation.DELETE, caller)

        try:
            target_id = parse_id(user_id, "User")
        except NotFoundError:
            raise NotFoundError("User", detail=USER_NOT_FOUND_OR_ADMIN)

        target = await self.user_repo.get_by_id(target_id)
        if target is None or not self.policy.is_allowed(
            Resource.USER, Operation.DELETE, caller, Identity.from_user(target)
        ):
            raise NotFoundError("User", detail=USER_NOT_FOUND_OR_ADMIN)

        deleted = await self.user_repo.delete(target_id)
        if deleted is None:
            raise NotFoundError("User", detail=USER_NOT_FOUND_OR_ADMIN)

        logger.info(f"User {deleted.email} deleted by {caller.id}")
        return deleted

    async def _create(self, user_data: UserCreate, role: UserRole) -> User:
        await self._ensure_email_available(user_data.email)

        create_data = user_data.model_dump()
        create_data["role"] = role
        return await self.user_repo.create_user(create_data)

    async def _ensure_email_available(self, email: str, exclude_user_id: Optional[uuid.UUID] = None) -> None:
        if await self.user_repo.email_taken(email, exclude_user_id=exclude_user_id):
            raise DuplicateResourceError("User", email)
