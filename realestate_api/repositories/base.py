"""
Generic async repository shared by users, listings, favorites and visits.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from realestate_api.database import Base
from typing import TypeVar, Generic, Optional, List, Dict, Any, Type
import uuid
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)

# Largest OFFSET/LIMIT the database drivers accept (signed 64-bit)
MAX_SQL_INTEGER = 2 ** 63 - 1


class BaseRepository(Generic[ModelType]):
    """
    CRUD on one model class.

    Every write commits on its own and rolls back on failure; no transaction
    spans more than one call. Pages are ordered by creation time, then id.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    @property
    def model_name(self) -> str:
        return self.model.__name__

    async def _commit(self, action: str, *refresh: ModelType) -> None:
        """Commit the pending change, refreshing the given objects afterwards."""
        try:
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to {action} {self.model_name}: {e}")
            raise

        for obj in refresh:
            await self.db.refresh(obj)

    async def create(self, obj_in: Dict[str, Any]) -> ModelType:
        db_obj = self.model(**obj_in)
        self.db.add(db_obj)
        await self._commit("create", db_obj)
        logger.debug(f"Created {self.model_name} {db_obj.id}")
        return db_obj

    async def bulk_create(self, objects_in: List[Dict[str, Any]]) -> List[ModelType]:
        """Insert several records in one commit."""
        db_objects = [self.model(**obj_data) for obj_data in objects_in]
        self.db.add_all(db_objects)
        await self._commit("bulk create", *db_objects)
        logger.debug(f"Bulk created {len(db_objects)} {self.model_name} records")
        return db_objects

    async def get_by_id(self, id: uuid.UUID) -> Optional[ModelType]:
        result = await self.db.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def get_by_field(self, field: str, value: Any) -> Optional[ModelType]:
        if not hasattr(self.model, field):
            raise ValueError(f"Field '{field}' does not exist on {self.model_name}")

        result = await self.db.execute(select(self.model).where(getattr(self.model, field) == value))
        return result.scalars().first()

    async def get_multi(self, skip: int = 0, limit: int = 100) -> List[ModelType]:
        """
        One page of records in creation order.

        Returns:
            The records, empty when skip is past the last one
        """
        if skip > MAX_SQL_INTEGER:
            logger.debug(f"Offset {skip} is past any possible {self.model_name} record")
            return []

        query = (
            select(self.model)
            .order_by(self.model.created_at.asc(), self.model.id.asc())
            .offset(skip)
            .limit(min(limit, MAX_SQL_INTEGER))
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def update(self, id: uuid.UUID, obj_in: Dict[str, Any]) -> Optional[ModelType]:
        """
        Merge fields into a record. An empty change set returns the record untouched.

        Returns:
            The updated record, or None if it does not exist
        """
        db_obj = await self.get_by_id(id)
        if db_obj is None or not obj_in:
            return db_obj

        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        await self._commit("update", db_obj)
        logger.debug(f"Updated {self.model_name} {id}: {sorted(obj_in)}")
        return db_obj

    async def delete(self, id: uuid.UUID) -> Optional[ModelType]:
        """
        Returns:
            The deleted record, or None if it did not exist
        """
        db_obj = await self.get_by_id(id)
        if db_obj is None:
            return None

        await self.db.delete(db_obj)
        await self._commit("delete")
        logger.debug(f"Deleted {self.model_name} {id}")
        return db_obj

    async def count(self) -> int:
        result = await self.db.execute(select(func.count(self.model.id)))
        return result.scalar()

    async def exists(self, id: uuid.UUID) -> bool:
        result = await self.db.execute(select(func.count(self.model.id)).where(self.model.id == id))
        return result.scalar() > 0
