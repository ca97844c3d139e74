"""
Favorite repository.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import String, cast, select
from realestate_api.repositories.base import BaseRepository
from realestate_api.models.favorite import Favorite
from typing import Dict
import uuid
import logging

logger = logging.getLogger(__name__)


class FavoriteRepository(BaseRepository[Favorite]):
    """Repository for favorites lists."""

    def __init__(self, db: AsyncSession):
        super().__init__(Favorite, db)

    async def remove_real_estate(self, real_estate_id: uuid.UUID) -> Dict[str, int]:
        """
        Drop a listing from every favorites list that holds it.
        Lists left without any listing are deleted.

        Returns:
            Number of lists updated and deleted
        """
        target = str(real_estate_id)

        # Text match narrows the candidates, membership is checked exactly below
        query = select(Favorite).where(cast(Favorite.real_estate_ids, String).contains(target))
        result = await self.db.execute(query)

        summary = {"updated": 0, "deleted": 0}
        for favorite in result.scalars().all():
            if target not in (favorite.real_estate_ids or []):
                continue

            remaining = [listing_id for listing_id in favorite.real_estate_ids if listing_id != target]
            if remaining:
                favorite.real_estate_ids = remaining
                summary["updated"] += 1
            else:
                await self.db.delete(favorite)
                summary["deleted"] += 1

        if summary["updated"] or summary["deleted"]:
            await self._commit("remove real estate from")
            logger.debug(f"Removed real estate {target} from favorites: {summary}")
        return summary
