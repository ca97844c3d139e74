"""
Real estate service: listing CRUD and search.
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from realestate_api.repositories.favorite import FavoriteRepository
from realestate_api.repositories.real_estate import RealEstateRepository, RealEstateSearchFilters
from realestate_api.models.real_estate import RealEstate
from realestate_api.schemas.real_estate import RealEstateCreate, RealEstateUpdate
from realestate_api.services.access_policy import AccessPolicy, Identity, Operation, Resource
from realestate_api.utils.exceptions import NotFoundError
from realestate_api.utils.pagination import Page
from realestate_api.utils.validators import parse_id
import logging

logger = logging.getLogger(__name__)


class RealEstateService:
    """
    Property listings. Reads follow the policy's read rule,
    writes are reserved to administrators.
    """

    def __init__(self, db_session: AsyncSession, policy: AccessPolicy):
        self.db = db_session
        self.policy = policy
        self.real_estate_repo = RealEstateRepository(db_session)
        self.favorite_repo = FavoriteRepository(db_session)

    async def list_real_estates(self, page: Page, caller: Optional[Identity]) -> List[RealEstate]:
        self.policy.enforce(Resource.REAL_ESTATE, Operation.READ, caller)
        return await self.real_estate_repo.get_multi(skip=page.offset, limit=page.limit)

    async def get_real_estate(self, real_estate_id: str, caller: Optional[Identity]) -> RealEstate:
        """
        Raises:
            NotFoundError: If the listing does not exist
        """
        self.policy.enforce(Resource.REAL_ESTATE, Operation.READ, caller)
        return await self._get_or_404(real_estate_id)

    async def search(self, filters: RealEstateSearchFilters, caller: Optional[Identity]) -> List[RealEstate]:
        """Return every listing matching all given filters."""
        self.policy.enforce(Resource.REAL_ESTATE, Operation.READ, caller)
        return await self.real_estate_repo.search(filters)

    async def create_real_estate(self, data: RealEstateCreate, caller: Optional[Identity]) -> RealEstate:
        self.policy.enforce(Resource.REAL_ESTATE, Operation.CREATE, caller)

        real_estate = await self.real_estate_repo.create(data.model_dump())
        logger.info(f"Real estate created by {caller.id}: {real_estate.name} (ID: {real_estate.id})")
        return real_estate

    async def update_real_estate(
        self,
        real_estate_id: str,
        data: RealEstateUpdate,
        caller: Optional[Identity]
    ) -> RealEstate:
        """
        Merge the provided fields into a listing.

        Raises:
            ForbiddenError: If the caller is not an administrator
            NotFoundError: If the listing does not exist
        """
        self.policy.enforce(Resource.REAL_ESTATE, Operation.UPDATE, caller)
        listing_id = parse_id(real_estate_id, "Real estate")

        updated = await self.real_estate_repo.update(listing_id, data.model_dump(exclude_unset=True))
        if updated is None:
            raise NotFoundError("Real estate", str(listing_id))
        return updated

    async def delete_real_estate(self, real_estate_id: str, caller: Optional[Identity]) -> RealEstate:
        """
        Delete a listing. Its visits are removed with it by the store and it is
        dropped from every favorites list; lists left empty are deleted.

        Returns:
            The deleted listing
        """
        self.policy.enforce(Resource.REAL_ESTATE, Operation.DELETE, caller)
        listing_id = parse_id(real_estate_id, "Real estate")

        deleted = await self.real_estate_repo.delete(listing_id)
        if deleted is None:
            raise NotFoundError("Real estate", str(listing_id))

        favorites = await self.favorite_repo.remove_real_estate(listing_id)
        logger.info(f"Real estate {listing_id} deleted by {caller.id}, favorites affected: {favorites}")
        return deleted

    async def _get_or_404(self, real_estate_id: str) -> RealEstate:
        listing_id = parse_id(real_estate_id, "Real estate")
        real_estate = await self.real_estate_repo.get_by_id(listing_id)
        if real_estate is None:
            raise NotFoundError("Real estate", str(listing_id))
        return real_estate
