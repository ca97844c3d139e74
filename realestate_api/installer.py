"""
Database installer: creates tables, the default administrator and demo data.

Usage:
    realestate-install --demo-password <password>
    realestate-install --admin-only
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from realestate_api.config import Settings, get_settings
from realestate_api.database import (
    create_engine_from_settings,
    create_session_factory,
    create_tables,
    drop_tables,
)
from realestate_api.models.user import UserRole
from realestate_api.repositories.user import UserRepository
from realestate_api.services.bootstrap import ensure_admin_user, install_demo_data

logger = logging.getLogger(__name__)


async def run_install(
    settings: Settings,
    demo_password: Optional[str],
    admin_only: bool = False,
    reset: bool = False
) -> None:
    engine = create_engine_from_settings(settings)
    session_factory = create_session_factory(engine)

    try:
        if reset:
            logger.warning("Dropping all tables")
            await drop_tables(engine)

        await create_tables(engine)

        async with session_factory() as session:
            admin = await ensure_admin_user(session, settings)
            if admin is None:
                logger.warning("No administrator account is available")

            if not admin_only:
                await install_demo_data(session, demo_password)

            user_repo = UserRepository(session)
            logger.info(
                f"Accounts: {await user_repo.count_by_role(UserRole.ADMIN)} administrators, "
                f"{await user_repo.count_by_role(UserRole.USER)} users"
            )
    finally:
        await engine.dispose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Install the Real Estate Listings database")
    parser.add_argument(
        "--demo-password",
        help="Password given to every demo user (at least 8 characters)"
    )
    parser.add_argument("--admin-only", action="store_true", help="Only create the default administrator")
    parser.add_argument("--reset", action="store_true", help="Drop all tables before installing")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Console entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.admin_only and (not args.demo_password or len(args.demo_password) < 8):
        parser.error("--demo-password of at least 8 characters is required unless --admin-only is given")

    try:
        asyncio.run(run_install(
            get_settings(),
            demo_password=args.demo_password,
            admin_only=args.admin_only,
            reset=args.reset
        ))
    except Exception as e:
        logger.error(f"Installation failed: {e}")
        sys.exit(1)

    logger.info("Database installation completed")


if __name__ == "__main__":
    main()
