import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from classroom.auth.models import User
from classroom.core.enums import UserRole
from classroom.core.timeutils import utcnow

logger = logging.getLogger(__name__)


async def list_users(db: AsyncSession) -> List[User]:
    result = await db.execute(select(User).order_by(User.created_at.desc()))
    return list(result.scalars().all())


async def update_user_role(
    db: AsyncSession,
    user_id: UUID,
    role: UserRole,
) -> Optional[User]:
    user = await db.get(User, user_id)
    if not user:
        return None
    previous = user.role
    user.role = role.value
    user.updated_at = utcnow()
    await db.commit()
    await db.refresh(user)
    logger.info("User %s role changed from %s to %s", user.id, previous, user.role)
    return user
