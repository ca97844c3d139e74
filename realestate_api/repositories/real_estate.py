"""
Real estate repository with search filtering.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_
from realestate_api.repositories.base import BaseRepository, MAX_SQL_INTEGER
from realestate_api.models.real_estate import RealEstate
from typing import Optional, List, Iterable, Set
import uuid
import logging

logger = logging.getLogger(__name__)


class RealEstateSearchFilters:
    """Search criteria. Every field left as None is ignored."""

    def __init__(
        self,
        price_min: Optional[float] = None,
        price_max: Optional[float] = None,
        area_min: Optional[float] = None,
        area_max: Optional[float] = None,
        location: Optional[str] = None,
        bedrooms: Optional[int] = None
    ):
        self.price_min = price_min
        self.price_max = price_max
        self.area_min = area_min
        self.area_max = area_max
        self.location = location
        self.bedrooms = bedrooms

    def __repr__(self) -> str:
        return f"<RealEstateSearchFilters({vars(self)})>"


class RealEstateRepository(BaseRepository[RealEstate]):
    """Repository for property listings."""

    def __init__(self, db: AsyncSession):
        super().__init__(RealEstate, db)

    async def search(self, filters: RealEstateSearchFilters) -> List[RealEstate]:
        """
        Return every listing matching all supplied criteria, without pagination.
        """
        # No stored bedroom count can exceed the column range
        if filters.bedrooms is not None and abs(filters.bedrooms) > MAX_SQL_INTEGER:
            return []

        try:
            query = select(RealEstate)

            conditions = self._build_filter_conditions(filters)
            if conditions:
                query = query.where(and_(*conditions))

            query = query.order_by(RealEstate.created_at.asc(), RealEstate.id.asc())

            result = await self.db.execute(query)
            real_estates = list(result.scalars().all())

            logger.debug(f"Real estate search {filters!r} returned {len(real_estates)} results")
            return real_estates
        except Exception as e:
            logger.error(f"Failed to search real estates: {e}")
            raise

    def _build_filter_conditions(self, filters: RealEstateSearchFilters) -> List:
        """
        Build SQLAlchemy filter conditions from search filters.
        """
        conditions = []

        # Price range filters
        if filters.price_min is not None:
            conditions.append(RealEstate.price >= filters.price_min)
        if filters.price_max is not None:
            conditions.append(RealEstate.price <= filters.price_max)

        # Area range filters
        if filters.area_min is not None:
            conditions.append(RealEstate.area >= filters.area_min)
        if filters.area_max is not None:
            conditions.append(RealEstate.area <= filters.area_max)

        # Case-insensitive substring; % and _ in the input match literally
        if filters.location:
            conditions.append(RealEstate.location.icontains(filters.location, autoescape=True))

        if filters.bedrooms is not None:
            conditions.append(RealEstate.bedrooms == filters.bedrooms)

        return conditions

    async def find_missing_ids(self, ids: Iterable[uuid.UUID]) -> Set[uuid.UUID]:
        """Return the subset of ids that do not resolve to a listing."""
        wanted = set(ids)
        if not wanted:
            return set()

        result = await self.db.execute(select(RealEstate.id).where(RealEstate.id.in_(wanted)))
        found = set(result.scalars().all())
        return wanted - found
