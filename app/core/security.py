import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional

from jose import jwt
from app.core import config

logger = logging.getLogger(__name__)


def verify_admin_credentials(username: str, password: str) -> bool:
    """
    Check a username/password pair against the configured admin account.

    Both comparisons always run so the timing does not reveal which field failed.
    """
    username_ok = secrets.compare_digest(
        (username or "").encode("utf-8"), config.ADMIN_USERNAME.encode("utf-8")
    )
    password_ok = secrets.compare_digest(
        (password or "").encode("utf-8"), config.ADMIN_PASSWORD.encode("utf-8")
    )
    return username_ok and password_ok


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=config.ADMIN_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Decode and verify a token; raises jose.JWTError when invalid or expired."""
    return jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
