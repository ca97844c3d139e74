"""
Real estate model for property listings.
"""

from sqlalchemy import String, Integer, Numeric, Index
from sqlalchemy.orm import Mapped, mapped_column
from realestate_api.database import Base
from typing import Optional


class RealEstate(Base):
    """
    Property listing. Name, address and price are required; area, location and
    bedrooms are optional attributes used by the search filter.
    """

    __tablename__ = "real_estates"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Listing name"
    )

    address: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        comment="Street address"
    )

    price: Mapped[float] = mapped_column(
        Numeric(precision=14, scale=2, asdecimal=False),
        nullable=False,
        index=True,
        comment="Asking price"
    )

    image: Mapped[Optional[str]] = mapped_column(
        String(1024),
        nullable=True,
        comment="Image URL or path"
    )

    area: Mapped[Optional[float]] = mapped_column(
        Numeric(precision=12, scale=2, asdecimal=False),
        nullable=True,
        comment="Area in square meters"
    )

    location: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        index=True,
        comment="Neighbourhood or city"
    )

    bedrooms: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="Number of bedrooms"
    )

    def __repr__(self) -> str:
        return f"<RealEstate(id={self.id}, name={self.name[:30]}, price={self.price})>"

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "address": self.address,
            "price": self.price,
            "image": self.image,
            "area": self.area,
            "location": self.location,
            "bedrooms": self.bedrooms,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


# Composite index for the price/bedrooms search pattern
search_index = Index(
    "idx_real_estates_price_bedrooms",
    RealEstate.price,
    RealEstate.bedrooms,
)
