from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import APIKeyCookie
from sqlalchemy.ext.asyncio import AsyncSession

from classroom.auth.schemas import CurrentUser
from classroom.auth.services import resolve_session_user
from classroom.core.config import settings
from classroom.core.exceptions import ServiceError
from classroom.db.session import get_db


session_cookie = APIKeyCookie(name=settings.session_cookie_name, auto_error=False)


async def get_current_user(
    session_id: Optional[str] = Depends(session_cookie),
    db: AsyncSession = Depends(get_db),
) -> CurrentUser:
    """Resolve the authenticated user from the session cookie."""
    try:
        user = await resolve_session_user(db, session_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return CurrentUser(
        id=user.id,
        email=user.email,
        role=user.role,
        first_name=user.first_name,
        last_name=user.last_name,
    )
