"""
Repository layer for data access operations.
"""

from realestate_api.repositories.base import BaseRepository
from realestate_api.repositories.user import UserRepository
from realestate_api.repositories.real_estate import RealEstateRepository, RealEstateSearchFilters
from realestate_api.repositories.favorite import FavoriteRepository
from realestate_api.repositories.visit import VisitRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "RealEstateRepository",
    "RealEstateSearchFilters",
    "FavoriteRepository",
    "VisitRepository",
]
