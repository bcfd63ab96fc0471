from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi import status as http_status
from sqlalchemy.ext.asyncio import AsyncSession

from classroom.auth.dependencies import get_current_user, session_cookie
from classroom.auth.models import User, UserSession
from classroom.auth.schemas import CurrentUser, LoginRequest, MessageResponse, RegisterRequest, UserResponse
from classroom.auth.services import ServiceError, login_user, logout_session, register_user
from classroom.core.config import settings
from classroom.db.session import get_db

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _set_session_cookie(response: Response, session: UserSession) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session.id,
        max_age=settings.session_ttl_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=http_status.HTTP_201_CREATED,
)
async def register(
    payload: RegisterRequest,
    response: Response,
    previous_session_id: Optional[str] = Depends(session_cookie),
    db: AsyncSession = Depends(get_db),
) -> User:
    try:
        user, session = await register_user(db, payload, previous_session_id)
    except ServiceError as e:
        if e.status_code == http_status.HTTP_500_INTERNAL_SERVER_ERROR:
            raise HTTPException(status_code=e.status_code, detail="Registration failed")
        raise HTTPException(status_code=e.status_code, detail=e.message)
    _set_session_cookie(response, session)
    return user


@router.post(
    "/login",
    response_model=UserResponse,
    status_code=http_status.HTTP_200_OK,
)
async def login(
    payload: LoginRequest,
    response: Response,
    previous_session_id: Optional[str] = Depends(session_cookie),
    db: AsyncSession = Depends(get_db),
) -> User:
    try:
        user, session = await login_user(db, payload, previous_session_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    _set_session_cookie(response, session)
    return user


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    session_id: Optional[str] = Depends(session_cookie),
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    await logout_session(db, session_id)
    response.delete_cookie(settings.session_cookie_name)
    return MessageResponse(message="Logged out successfully")


@router.get("/user", response_model=UserResponse)
async def read_current_user(
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> User:
    user = await db.get(User, current_user.id)
    if user is None:
        raise HTTPException(status_code=http_status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return user
