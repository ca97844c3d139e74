"""
Favorite model: an ordered list of real estate references.
"""

from sqlalchemy import JSON
from sqlalchemy.orm import Mapped, mapped_column
from realestate_api.database import Base
from typing import List


class Favorite(Base):
    """Favorites list. Property ids are stored in the order they were given."""

    __tablename__ = "favorites"

    real_estate_ids: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Ordered real estate ids"
    )

    def __repr__(self) -> str:
        return f"<Favorite(id={self.id}, real_estates={len(self.real_estate_ids or [])})>"

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "real_estates": list(self.real_estate_ids or []),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
