import logging
from typing import Optional, Tuple

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from classroom.auth.models import User, UserSession
from classroom.auth.schemas import LoginRequest, RegisterRequest
from classroom.auth.security import create_session_id, hash_password, verify_password
from classroom.core.enums import UserRole
from classroom.core.exceptions import ConflictError, InternalError, ServiceError, UnauthorizedError
from classroom.core.timeutils import as_utc, utcnow

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(func.lower(User.email) == email.strip().lower()))
    return result.scalar_one_or_none()


async def _start_session(
    db: AsyncSession, user: User, previous_session_id: Optional[str]
) -> UserSession:
    """Regenerate: drop whatever session the client presented and issue a fresh id."""
    if previous_session_id:
        await db.execute(delete(UserSession).where(UserSession.id == previous_session_id))
    # Sweep sessions past their TTL, including ones whose cookie never comes back
    await db.execute(delete(UserSession).where(UserSession.expires_at <= utcnow()))
    session_id, expires_at = create_session_id()
    session = UserSession(id=session_id, user_id=user.id, expires_at=expires_at)
    db.add(session)
    return session


async def register_user(
    db: AsyncSession,
    payload: RegisterRequest,
    previous_session_id: Optional[str] = None,
) -> Tuple[User, UserSession]:
    # 1. Email must be unused (case-insensitive)
    if await get_user_by_email(db, payload.email):
        raise ConflictError("Email already registered")

    try:
        # 2. New users are always students; admins promote them later
        user = User(
            email=payload.email.strip().lower(),
            password_hash=hash_password(payload.password),
            first_name=payload.first_name,
            last_name=payload.last_name,
            role=UserRole.STUDENT.value,
        )
        db.add(user)
        await db.flush()  # to populate user.id

        # 3. Bind a fresh session to the new identity
        session = await _start_session(db, user, previous_session_id)
        await db.commit()
        await db.refresh(user)
    except IntegrityError as e:
        await db.rollback()
        # Lost a race against a concurrent registration with the same email
        raise ConflictError("Email already registered") from e
    except ServiceError:
        raise
    except Exception as e:
        await db.rollback()
        logger.exception("Registration failed for %s", payload.email)
        raise InternalError("Registration failed") from e

    logger.info("Registered user %s", user.id)
    return user, session


async def login_user(
    db: AsyncSession,
    payload: LoginRequest,
    previous_session_id: Optional[str] = None,
) -> Tuple[User, UserSession]:
    # Unknown email and wrong password share one message so accounts cannot be enumerated
    user = await get_user_by_email(db, payload.email)
    if not user or not verify_password(payload.password, user.password_hash):
        logger.info("Rejected login attempt")
        raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

    session = await _start_session(db, user, previous_session_id)
    await db.commit()
    return user, session


async def logout_session(db: AsyncSession, session_id: Optional[str]) -> None:
    if not session_id:
        return
    await db.execute(delete(UserSession).where(UserSession.id == session_id))
    await db.commit()


async def resolve_session_user(db: AsyncSession, session_id: Optional[str]) -> User:
    """Session id -> live user. Raises UnauthorizedError on any miss."""
    if not session_id:
        raise UnauthorizedError()

    session = await db.get(UserSession, session_id)
    if session is None:
        raise UnauthorizedError()

    if as_utc(session.expires_at) <= utcnow():
        await db.delete(session)
        await db.commit()
        raise UnauthorizedError()

    user = await db.get(User, session.user_id)
    if user is None:
        raise UnauthorizedError()
    return user
