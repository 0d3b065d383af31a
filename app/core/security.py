import hmac
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt

from app.core import config

logger = logging.getLogger(__name__)

ADMIN_SUBJECT = "admin"


def verify_admin_password(candidate: str) -> bool:
    """Constant-time check of a candidate against the shared admin secret."""
    if not candidate:
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), config.ADMIN_PASSWORD.encode("utf-8"))


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Decode and verify a token. Raises jose.JWTError when invalid or expired."""
    return jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
