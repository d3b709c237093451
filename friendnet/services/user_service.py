# friendnet/services/user_service.py

import logging
from typing import List, Optional

from sqlalchemy import and_, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from friendnet.core.errors import BadRequestError, NotFoundError, UnauthorizedError
from friendnet.core.security import get_password_hash, verify_password
from friendnet.models.friend import Friend, FriendRequest
from friendnet.models.user import (
    Account,
    OAuthProfile,
    ProfileCounts,
    ProfileRead,
    SearchResult,
    User,
    UserCreate,
    UserUpdate,
)
from friendnet.services.friend_service import FriendService, resolve_relationship_status
from friendnet.services.post_service import PostService

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2


class UserService:

    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def _by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.lower()).first()

    def _username_taken(self, username: str, exclude_id: Optional[str] = None) -> bool:
        query = self.db.query(User).filter(User.username == username)
        if exclude_id:
            query = query.filter(User.id != exclude_id)
        return query.first() is not None

    # --- 帳號 ---

    def register(self, user_in: UserCreate) -> User:
        if self._by_email(user_in.email):
            raise BadRequestError("Email already registered")
        if user_in.username and self._username_taken(user_in.username):
            raise BadRequestError("Username already taken")

        user = User(
            name=user_in.name,
            email=user_in.email.lower(),
            username=user_in.username,
            hashed_password=get_password_hash(user_in.password),
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise BadRequestError("Email or username already registered") from exc
        self.db.refresh(user)
        logger.info("User %s registered", user.id)
        return user

    def authenticate(self, login: str, password: str) -> User:
        """Credentials sign-in: ``login`` may be an email or a username."""
        user = self.db.query(User).filter(
            or_(User.email == login.lower(), User.username == login)
        ).first()
        if user is None or not verify_password(password, user.hashed_password):
            raise UnauthorizedError("Invalid credentials")
        return user

    def sign_in_with_oauth(self, profile: OAuthProfile) -> User:
        """
        Resolve the user behind an OAuth sign-in.

        An already linked account wins. Otherwise the account is linked to the
        user holding the same email, and only when there is none is a new user
        created.
        """
        account = self.db.query(Account).filter(
            Account.provider == profile.provider,
            Account.provider_account_id == profile.provider_account_id,
        ).first()
        if account is not None:
            return account.user

        user = self._by_email(profile.email) if profile.email else None
        if user is None:
            user = User(
                name=profile.name,
                email=profile.email.lower() if profile.email else None,
                image=profile.image,
            )
            self.db.add(user)
            self.db.flush()
            logger.info("User %s created from %s sign-in", user.id, profile.provider)
        else:
            logger.info("Linking %s account to existing user %s", profile.provider, user.id)

        self.db.add(Account(
            user_id=user.id,
            provider=profile.provider,
            provider_account_id=profile.provider_account_id,
        ))
        self.db.commit()
        self.db.refresh(user)
        return user

    # --- 個人檔案 ---

    def get_profile(self, user_id: str) -> ProfileRead:
        user = self.get_user(user_id)
        return ProfileRead(
            id=user.id,
            name=user.name,
            username=user.username,
            image=user.image,
            bio=user.bio,
            created_at=user.created_at,
            count=ProfileCounts(
                posts=PostService(self.db).count_posts(user.id),
                friends=FriendService(self.db).count_friends(user.id),
            ),
        )

    def update_profile(self, user: User, user_in: UserUpdate) -> ProfileRead:
        update_data = user_in.model_dump(exclude_unset=True)
        username = update_data.get("username")
        if username and self._username_taken(username, exclude_id=user.id):
            raise BadRequestError("Username already taken")

        for key, value in update_data.items():
            setattr(user, key, value)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return self.get_profile(user.id)

    # --- 搜尋 ---

    def search(self, current_user_id: str, query: Optional[str]) -> List[SearchResult]:
        if not query or len(query) < MIN_QUERY_LENGTH:
            raise BadRequestError(f"Search query must be at least {MIN_QUERY_LENGTH} characters")

        contains = f"%{query}%"
        users = self.db.query(User).filter(
            User.id != current_user_id,
            or_(
                User.name.ilike(contains),
                User.username.ilike(contains),
                User.email.ilike(f"{query}%"),
            ),
        ).all()
        if not users:
            return []

        ids = [u.id for u in users]
        friendships = self.db.query(Friend).filter(
            or_(
                and_(Friend.user_id == current_user_id, Friend.friend_id.in_(ids)),
                and_(Friend.friend_id == current_user_id, Friend.user_id.in_(ids)),
            )
        ).all()
        requests = self.db.query(FriendRequest).filter(
            or_(
                and_(FriendRequest.sender_id == current_user_id, FriendRequest.receiver_id.in_(ids)),
                and_(FriendRequest.receiver_id == current_user_id, FriendRequest.sender_id.in_(ids)),
            )
        ).all()

        return [
            SearchResult(
                id=u.id,
                name=u.name,
                image=u.image,
                username=u.username,
                email=u.email,
                status=resolve_relationship_status(current_user_id, u.id, friendships, requests),
            )
            for u in users
        ]
