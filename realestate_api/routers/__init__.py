"""
API routers for the Real Estate Listings API.
"""

from realestate_api.routers.users import router as users_router
from realestate_api.routers.real_estates import router as real_estates_router
from realestate_api.routers.favorites import router as favorites_router
from realestate_api.routers.visits import router as visits_router

__all__ = ["users_router", "real_estates_router", "favorites_router", "visits_router"]
