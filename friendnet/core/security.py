# friendnet/core/security.py

from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from jose import JWTError, jwt
from passlib.context import CryptContext

from friendnet.core.config import settings

# 設定密碼加密方式為 bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def _truncate(password: str) -> str:
    """
    Bcrypt 有一個硬性限制：密碼不能超過 72 bytes。
    過長的密碼先截斷到 71 bytes，雜湊和驗證都走同一條路。
    """
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > 71:
        return password_bytes[:71].decode("utf-8", errors="ignore")
    return password


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    # OAuth-only users have no password at all
    if not hashed_password:
        return False
    return pwd_context.verify(_truncate(plain_password), hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(_truncate(password))


def create_access_token(data: dict, expires_delta: Union[timedelta, None] = None) -> str:
    """
    製作 JWT 識別證 (Token)
    """
    to_encode = data.copy()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(timezone.utc) + expires_delta

    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """Return the token payload, or None when the token is invalid or expired."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
