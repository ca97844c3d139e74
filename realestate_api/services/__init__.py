"""
Service layer: business rules and access checks on top of the repositories.
"""

from realestate_api.services.access_policy import AccessPolicy, Identity, Operation, Resource
from realestate_api.services.auth import AuthService
from realestate_api.services.user import UserService
from realestate_api.services.real_estate import RealEstateService
from realestate_api.services.favorite import FavoriteService
from realestate_api.services.visit import VisitService
from realestate_api.services.error_handler import ErrorHandlerService

__all__ = [
    "AccessPolicy",
    "Identity",
    "Operation",
    "Resource",
    "AuthService",
    "UserService",
    "RealEstateService",
    "FavoriteService",
    "VisitService",
    "ErrorHandlerService",
]
