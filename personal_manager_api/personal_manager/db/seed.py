"""
Seeding utilities for a fresh installation.

Seeds, when no user exists yet:
- An 'admin' account with the Admin role
- A starter profile for that account

Usage:
  python -m personal_manager.db.seed

The admin password comes from SEED_ADMIN_PASSWORD (default 'Admin123!');
change it after the first login.
"""

from __future__ import annotations

import asyncio
import logging
import os

from personal_manager.core.logging import configure_logging
from personal_manager.core.security import get_password_hash
from personal_manager.entities import ADMIN_ROLE, Profile, User
from personal_manager.repositories import RepositoryFactory

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_EMAIL = "admin@example.com"
DEFAULT_ADMIN_PASSWORD = "Admin123!"


# PUBLIC_INTERFACE
async def seed_all(factory: RepositoryFactory) -> bool:
    """
    Seed an admin user and profile when the user collection is empty.

    Returns:
        True if data was written, False if users already existed.
    """
    users = factory.get(User)
    if await users.get_all():
        logger.info("Users already present; skipping seed")
        return False

    password = os.environ.get("SEED_ADMIN_PASSWORD", DEFAULT_ADMIN_PASSWORD)
    admin = await users.add(
        User(
            username=DEFAULT_ADMIN_USERNAME,
            email=DEFAULT_ADMIN_EMAIL,
            password_hash=get_password_hash(password),
            full_name="Administrator",
            role=ADMIN_ROLE,
        )
    )
    await factory.get(Profile).add(
        Profile(
            user_id=admin.id,
            title="Welcome",
            summary="This is your personal site. Edit this profile to introduce yourself.",
        )
    )
    logger.info("Seeded admin user id=%s", admin.id)
    return True


async def _main() -> None:
    factory = RepositoryFactory()
    if factory.backend == "sql":
        from personal_manager.db.session import create_tables, dispose_engine

        await create_tables()
        try:
            await seed_all(factory)
        finally:
            await dispose_engine()
    else:
        await seed_all(factory)


if __name__ == "__main__":
    configure_logging()
    asyncio.run(_main())
