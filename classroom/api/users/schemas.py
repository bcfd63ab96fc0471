from pydantic import BaseModel

from classroom.core.enums import UserRole


class RoleUpdate(BaseModel):
    role: UserRole
