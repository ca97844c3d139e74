"""
Visit repository.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from realestate_api.repositories.base import BaseRepository
from realestate_api.models.visit import Visit


class VisitRepository(BaseRepository[Visit]):
    """Repository for scheduled visits."""

    def __init__(self, db: AsyncSession):
        super().__init__(Visit, db)
