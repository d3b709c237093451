# friendnet/common/deps.py

from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from friendnet.core.errors import UnauthorizedError
from friendnet.core.security import decode_access_token
from friendnet.db.session import get_db
from friendnet.models.user import User
from friendnet.services.friend_service import FriendService
from friendnet.services.post_service import PostService
from friendnet.services.user_service import UserService

# 定義登入網址；沒帶 token 時由 get_current_user 自己回 401
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)


def get_friend_service(db: Session = Depends(get_db)) -> FriendService:
    return FriendService(db=db)


def get_post_service(db: Session = Depends(get_db)) -> PostService:
    return PostService(db=db)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db=db)


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """The signed-in user, or 401 when there is no valid session."""
    if not token:
        raise UnauthorizedError()
    payload = decode_access_token(token)
    if payload is None or not payload.get("sub"):
        raise UnauthorizedError()

    user = db.get(User, payload["sub"])
    if user is None:
        raise UnauthorizedError()
    return user
