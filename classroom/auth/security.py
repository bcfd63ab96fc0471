from datetime import datetime, timedelta
import secrets
from typing import Optional, Tuple

import bcrypt

from classroom.core.config import settings
from classroom.core.timeutils import utcnow


def hash_password(plain_password: str) -> str:
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(plain_password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # In case the stored hash is invalid/corrupted
        return False


def create_session_id(*, expires_days: Optional[int] = None) -> Tuple[str, datetime]:
    if expires_days is None:
        expires_days = settings.session_ttl_days
    expire = utcnow() + timedelta(days=expires_days)
    session_id = secrets.token_urlsafe(48)
    return session_id, expire
