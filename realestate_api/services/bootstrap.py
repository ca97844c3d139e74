"""
Startup bootstrap and demo data installation.
"""

from typing import Dict, Optional
from datetime import datetime, timezone
from sqlalchemy.ext.asyncio import AsyncSession
from realestate_api.config import Settings
from realestate_api.models.user import User, UserRole
from realestate_api.repositories import (
    FavoriteRepository,
    RealEstateRepository,
    UserRepository,
    VisitRepository,
)
import logging

logger = logging.getLogger(__name__)


DEMO_USERS = [
    {"name": f"Usuário {number}", "email": f"usuario{number}@example.com"}
    for number in range(1, 6)
]

DEMO_REAL_ESTATES = [
    {"name": "Propriedade 1", "address": "Endereço da propriedade 1", "price": 100000},
    {"name": "Propriedade 2", "address": "Endereço da propriedade 2", "price": 150000},
    {"name": "Propriedade 3", "address": "Endereço da propriedade 3", "price": 200000},
    {"name": "Propriedade 4", "address": "Endereço da propriedade 4", "price": 180000},
    {"name": "Propriedade 5", "address": "Endereço da propriedade 5", "price": 220000},
]

DEMO_VISIT_DATES = [
    datetime(2023, 1, 1, tzinfo=timezone.utc),
    datetime(2023, 2, 15, tzinfo=timezone.utc),
    datetime(2023, 3, 20, tzinfo=timezone.utc),
    datetime(2023, 4, 10, tzinfo=timezone.utc),
    datetime(2023, 5, 5, tzinfo=timezone.utc),
]


async def ensure_admin_user(db: AsyncSession, settings: Settings) -> Optional[User]:
    """
    Create the default administrator unless one already exists.

    Returns:
        The existing or newly created administrator, or None when bootstrap
        is disabled or no admin password is configured
    """
    if not settings.bootstrap_admin:
        logger.info("Admin bootstrap disabled")
        return None

    user_repo = UserRepository(db)

    existing = await user_repo.get_first_admin()
    if existing is not None:
        logger.debug(f"Administrator already present: {existing.email}")
        return existing

    if not settings.admin_password:
        logger.warning("No administrator exists and ADMIN_PASSWORD is not set; skipping admin bootstrap")
        return None

    if await user_repo.email_taken(settings.admin_email):
        logger.warning(f"Cannot create default administrator, {settings.admin_email} is already registered")
        return None

    admin = await user_repo.create_user({
        "name": settings.admin_name,
        "email": settings.admin_email,
        "password": settings.admin_password,
        "role": UserRole.ADMIN,
    })
    logger.info(f"Default administrator created: {admin.email}")
    return admin


async def install_demo_data(db: AsyncSession, demo_password: str) -> Dict[str, int]:
    """
    Insert demo users, listings, favorites and visits.
    Users whose email is already registered are skipped.

    Returns:
        Number of records inserted per kind
    """
    user_repo = UserRepository(db)
    real_estate_repo = RealEstateRepository(db)
    favorite_repo = FavoriteRepository(db)
    visit_repo = VisitRepository(db)

    users_created = 0
    for demo_user in DEMO_USERS:
        if await user_repo.email_taken(demo_user["email"]):
            logger.info(f"Demo user {demo_user['email']} already exists, skipping")
            continue
        await user_repo.create_user({**demo_user, "password": demo_password})
        users_created += 1

    real_estates = await real_estate_repo.bulk_create([dict(data) for data in DEMO_REAL_ESTATES])

    favorites = await favorite_repo.bulk_create([
        {"real_estate_ids": [str(real_estate.id)]} for real_estate in real_estates
    ])

    visits = await visit_repo.bulk_create([
        {"real_estate_id": real_estate.id, "date": date}
        for real_estate, date in zip(real_estates, DEMO_VISIT_DATES)
    ])

    summary = {
        "users": users_created,
        "real_estates": len(real_estates),
        "favorites": len(favorites),
        "visits": len(visits),
    }
    logger.info(f"Demo data installed: {summary}")
    return summary
