"""
Visit model: a scheduled visit to one property.
"""

from sqlalchemy import DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from realestate_api.database import Base, utcnow
from datetime import datetime
import uuid


class Visit(Base):
    """Scheduled visit. The date defaults to the moment the visit is created."""

    __tablename__ = "visits"

    real_estate_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("real_estates.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Visited real estate"
    )

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
        comment="Scheduled date of the visit"
    )

    def __repr__(self) -> str:
        return f"<Visit(id={self.id}, real_estate_id={self.real_estate_id}, date={self.date})>"

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "real_estate": str(self.real_estate_id),
            "date": self.date,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
