from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from classroom.auth.rbac import require_admin
from classroom.auth.schemas import UserResponse
from classroom.db.session import get_db

from .schemas import RoleUpdate
from . import service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get(
    "",
    response_model=List[UserResponse],
    dependencies=[Depends(require_admin)],
)
async def list_users(
    db: AsyncSession = Depends(get_db),
):
    return await service.list_users(db)


@router.patch(
    "/{user_id}/role",
    response_model=UserResponse,
    dependencies=[Depends(require_admin)],
)
async def update_user_role(
    user_id: UUID,
    payload: RoleUpdate,
    db: AsyncSession = Depends(get_db),
):
    user = await service.update_user_role(db, user_id, payload.role)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user
