from fastapi import Depends, HTTPException, status

from classroom.auth.dependencies import get_current_user
from classroom.auth.schemas import CurrentUser
from classroom.core.enums import STAFF_ROLES, UserRole


async def require_admin(
    current_user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """Require the admin role. Used for user management."""
    if current_user.role != UserRole.ADMIN.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admins can perform this action",
        )
    return current_user


def require_roles(*roles: str):
    """
    Dependency factory to enforce one of the given roles.

    Example:
        Depends(require_roles("lecturer", "admin"))
    """

    async def _checker(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user

    return _checker


require_staff = require_roles(*STAFF_ROLES)


def can_manage_class(current_user: CurrentUser, lecturer_id) -> bool:
    """Owning lecturer or any admin."""
    return current_user.is_admin or current_user.id == lecturer_id
