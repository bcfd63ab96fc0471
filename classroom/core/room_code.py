"""
Room code generation.

- room_code is the public, human-enterable join key for a class (e.g. 3F9A1C0B).
- class id (UUID) remains the internal key used for management; room_code is
  never used as a foreign key and is never regenerated after creation.
"""
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from classroom.core.exceptions import InternalError
from classroom.core.models import LiveClass

ROOM_CODE_LENGTH = 8


def generate_room_code_candidate() -> str:
    """Single candidate (no DB check): first 8 hex chars of a random UUID, uppercased."""
    return uuid.uuid4().hex[:ROOM_CODE_LENGTH].upper()


def normalize_room_code(code: str) -> str:
    return (code or "").strip().upper()


async def generate_room_code(db: AsyncSession, max_attempts: int = 10) -> str:
    """
    Generate a room code not used by any existing class.
    Retries with a fresh candidate on collision.
    """
    for _ in range(max_attempts):
        code = generate_room_code_candidate()
        result = await db.execute(
            select(LiveClass.id).where(LiveClass.room_code == code)
        )
        if result.scalar_one_or_none() is None:
            return code
    raise InternalError("Could not generate unique room code")
