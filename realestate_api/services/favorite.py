"""
Favorites service. A favorites list is an ordered set of existing listings.
"""

from typing import Iterable, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from realestate_api.config import Settings
from realestate_api.repositories.favorite import FavoriteRepository
from realestate_api.repositories.real_estate import RealEstateRepository
from realestate_api.models.favorite import Favorite
from realestate_api.schemas.favorite import FavoriteCreate, FavoriteUpdate
from realestate_api.services.access_policy import AccessPolicy, Identity, Operation, Resource
from realestate_api.utils.exceptions import BadRequestError, NotFoundError
from realestate_api.utils.pagination import resolve_page
from realestate_api.utils.validators import parse_id
import uuid
import logging

logger = logging.getLogger(__name__)


class FavoriteService:
    def __init__(self, db_session: AsyncSession, policy: AccessPolicy, settings: Settings):
        self.db = db_session
        self.policy = policy
        self.settings = settings
        self.favorite_repo = FavoriteRepository(db_session)
        self.real_estate_repo = RealEstateRepository(db_session)

    async def list_favorites(
        self,
        limit: Optional[int],
        page: Optional[int],
        caller: Optional[Identity]
    ) -> List[Favorite]:
        """
        List favorites. The page size must be one of the configured sizes
        and is checked before anything else.

        Raises:
            InvalidPageSizeError: If limit is missing or not an allowed size
        """
        resolved = resolve_page(limit, page, allowed_limits=self.settings.favorite_page_sizes)
        self.policy.enforce(Resource.FAVORITE, Operation.READ, caller)
        return await self.favorite_repo.get_multi(skip=resolved.offset, limit=resolved.limit)

    async def get_favorite(self, favorite_id: str, caller: Optional[Identity]) -> Favorite:
        self.policy.enforce(Resource.FAVORITE, Operation.READ, caller)
        return await self._get_or_404(favorite_id)

    async def create_favorite(self, data: FavoriteCreate, caller: Optional[Identity]) -> Favorite:
        """
        Raises:
            BadRequestError: If any referenced listing does not exist
        """
        self.policy.enforce(Resource.FAVORITE, Operation.CREATE, caller)
        await self._ensure_real_estates_exist(data.real_estates)

        favorite = await self.favorite_repo.create(
            {"real_estate_ids": [str(real_estate_id) for real_estate_id in data.real_estates]}
        )
        logger.info(f"Favorite {favorite.id} created with {len(favorite.real_estate_ids)} listings")
        return favorite

    async def update_favorite(
        self,
        favorite_id: str,
        data: FavoriteUpdate,
        caller: Optional[Identity]
    ) -> Favorite:
        """
        Replace the listings of a favorites list. The list must exist before
        its new references are checked.

        Raises:
            NotFoundError: If the favorites list does not exist
            BadRequestError: If any referenced listing does not exist
        """
        self.policy.enforce(Resource.FAVORITE, Operation.UPDATE, caller)
        favorite = await self._get_or_404(favorite_id)

        if data.real_estates is None:
            return favorite

        await self._ensure_real_estates_exist(data.real_estates)
        updated = await self.favorite_repo.update(
            favorite.id,
            {"real_estate_ids": [str(real_estate_id) for real_estate_id in data.real_estates]}
        )
        if updated is None:
            raise NotFoundError("Favorite", str(favorite.id))
        return updated

    async def delete_favorite(self, favorite_id: str, caller: Optional[Identity]) -> Favorite:
        self.policy.enforce(Resource.FAVORITE, Operation.DELETE, caller)
        parsed_id = parse_id(favorite_id, "Favorite")

        deleted = await self.favorite_repo.delete(parsed_id)
        if deleted is None:
            raise NotFoundError("Favorite", str(parsed_id))
        return deleted

    async def _ensure_real_estates_exist(self, real_estate_ids: Iterable[uuid.UUID]) -> None:
        missing = await self.real_estate_repo.find_missing_ids(real_estate_ids)
        if missing:
            raise BadRequestError(
                "Referenced real estate does not exist",
                field_errors=[
                    {"field": "realEstates", "message": f"Real estate {missing_id} not found", "type": "reference_error"}
                    for missing_id in sorted(str(missing_id) for missing_id in missing)
                ]
            )

    async def _get_or_404(self, favorite_id: str) -> Favorite:
        parsed_id = parse_id(favorite_id, "Favorite")
        favorite = await self.favorite_repo.get_by_id(parsed_id)
        if favorite is None:
            raise NotFoundError("Favorite", str(parsed_id))
        return favorite
