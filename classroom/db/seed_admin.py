"""
Seed script to create the first admin user.

Run once (after the tables exist) with env set:
  ADMIN_EMAIL=admin@example.com
  ADMIN_PASSWORD=YourSecurePassword

  python -m classroom.db.seed_admin

Creates the user with role admin, or promotes an existing user with that email.
"""
import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from classroom.auth.models import User
from classroom.auth.security import hash_password
from classroom.auth.services import get_user_by_email
from classroom.core.config import settings
from classroom.core.enums import UserRole
from classroom.db.session import AsyncSessionLocal, create_all

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_FIRST_NAME = "Platform"
DEFAULT_ADMIN_LAST_NAME = "Admin"


async def seed_admin(db: AsyncSession, email: str, password: str) -> User:
    user = await get_user_by_email(db, email)
    if not user:
        user = User(
            email=email.strip().lower(),
            password_hash=hash_password(password),
            first_name=DEFAULT_ADMIN_FIRST_NAME,
            last_name=DEFAULT_ADMIN_LAST_NAME,
            role=UserRole.ADMIN.value,
        )
        db.add(user)
        logger.info("Created admin user %s", email)
    else:
        user.role = UserRole.ADMIN.value
        user.password_hash = hash_password(password)
        logger.info("Promoted existing user %s to admin", email)
    await db.commit()
    await db.refresh(user)
    return user


async def main() -> None:
    logging.basicConfig(level=settings.log_level.upper())
    if not settings.admin_email or not settings.admin_password:
        logger.warning("ADMIN_EMAIL / ADMIN_PASSWORD not set; nothing to seed.")
        return

    await create_all()
    async with AsyncSessionLocal() as db:
        try:
            await seed_admin(db, settings.admin_email, settings.admin_password)
        except Exception:
            await db.rollback()
            logger.exception("Admin seed failed")
            raise


if __name__ == "__main__":
    asyncio.run(main())
