"""
Visit scheduling service.
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from realestate_api.repositories.real_estate import RealEstateRepository
from realestate_api.repositories.visit import VisitRepository
from realestate_api.models.visit import Visit
from realestate_api.schemas.visit import VisitCreate, VisitUpdate
from realestate_api.services.access_policy import AccessPolicy, Identity, Operation, Resource
from realestate_api.utils.exceptions import BadRequestError, NotFoundError
from realestate_api.utils.pagination import Page
from realestate_api.utils.validators import parse_id
import uuid
import logging

logger = logging.getLogger(__name__)


class VisitService:
    """Scheduled visits. Any authenticated caller may manage them."""

    def __init__(self, db_session: AsyncSession, policy: AccessPolicy):
        self.db = db_session
        self.policy = policy
        self.visit_repo = VisitRepository(db_session)
        self.real_estate_repo = RealEstateRepository(db_session)

    async def list_visits(self, page: Page, caller: Optional[Identity]) -> List[Visit]:
        self.policy.enforce(Resource.VISIT, Operation.READ, caller)
        return await self.visit_repo.get_multi(skip=page.offset, limit=page.limit)

    async def get_visit(self, visit_id: str, caller: Optional[Identity]) -> Visit:
        self.policy.enforce(Resource.VISIT, Operation.READ, caller)
        return await self._get_or_404(visit_id)

    async def create_visit(self, data: VisitCreate, caller: Optional[Identity]) -> Visit:
        """
        Schedule a visit. Without a date the visit is dated now.

        Raises:
            BadRequestError: If the listing does not exist
        """
        self.policy.enforce(Resource.VISIT, Operation.CREATE, caller)
        await self._ensure_real_estate_exists(data.real_estate)

        create_data = {"real_estate_id": data.real_estate}
        if data.date is not None:
            create_data["date"] = data.date

        visit = await self.visit_repo.create(create_data)
        logger.info(f"Visit {visit.id} scheduled for real estate {visit.real_estate_id}")
        return visit

    async def update_visit(self, visit_id: str, data: VisitUpdate, caller: Optional[Identity]) -> Visit:
        """
        Raises:
            NotFoundError: If the visit does not exist, checked before the new listing
            BadRequestError: If the new listing does not exist
        """
        self.policy.enforce(Resource.VISIT, Operation.UPDATE, caller)
        visit = await self._get_or_404(visit_id)

        update_data = {}
        fields = data.model_dump(exclude_unset=True)
        if "real_estate" in fields:
            await self._ensure_real_estate_exists(fields["real_estate"])
            update_data["real_estate_id"] = fields["real_estate"]
        if "date" in fields:
            update_data["date"] = fields["date"]

        updated = await self.visit_repo.update(visit.id, update_data)
        if updated is None:
            raise NotFoundError("Visit", str(visit.id))
        return updated

    async def delete_visit(self, visit_id: str, caller: Optional[Identity]) -> Visit:
        self.policy.enforce(Resource.VISIT, Operation.DELETE, caller)
        parsed_id = parse_id(visit_id, "Visit")

        deleted = await self.visit_repo.delete(parsed_id)
        if deleted is None:
            raise NotFoundError("Visit", str(parsed_id))
        return deleted

    async def _ensure_real_estate_exists(self, real_estate_id: uuid.UUID) -> None:
        if not await self.real_estate_repo.exists(real_estate_id):
            raise BadRequestError(
                "Referenced real estate does not exist",
                field_errors=[{
                    "field": "realEstate",
                    "message": f"Real estate {real_estate_id} not found",
                    "type": "reference_error"
                }]
            )

    async def _get_or_404(self, visit_id: str) -> Visit:
        parsed_id = parse_id(visit_id, "Visit")
        visit = await self.visit_repo.get_by_id(parsed_id)
        if visit is None:
            raise NotFoundError("Visit", str(parsed_id))
        return visit
