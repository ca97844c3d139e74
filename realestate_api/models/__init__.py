"""
Database models for the Real Estate Listings API.
Includes User, RealEstate, Favorite and Visit models.
"""

from realestate_api.models.user import User, UserRole
from realestate_api.models.real_estate import RealEstate
from realestate_api.models.favorite import Favorite
from realestate_api.models.visit import Visit

__all__ = [
    "User",
    "UserRole",
    "RealEstate",
    "Favorite",
    "Visit",
]
