# friendnet/services/friend_service.py

import logging
from typing import Iterable, List, Optional

from sqlalchemy import and_, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from friendnet.core.errors import BadRequestError, NotFoundError
from friendnet.models.friend import (
    ACCEPTED,
    PENDING,
    REJECTED,
    Friend,
    FriendRead,
    FriendRequest,
    FriendRequestRead,
)
from friendnet.models.user import DEFAULT_AVATAR, User

logger = logging.getLogger(__name__)

# relationship status shown next to search results
NONE = "none"
FRIENDS = "friends"
SENT = "sent"
RECEIVED = "received"


def resolve_relationship_status(
    current_user_id: str,
    other_user_id: str,
    friendships: Iterable[Friend],
    requests: Iterable[FriendRequest],
) -> str:
    """
    Friends win over any request. Otherwise a pending request reads as
    ``sent`` or ``received`` from the caller's side, and a settled one
    reports its own status.
    """
    pair = {current_user_id, other_user_id}
    if any({f.user_id, f.friend_id} == pair for f in friendships):
        return FRIENDS

    request = next((r for r in requests if {r.sender_id, r.receiver_id} == pair), None)
    if request is None:
        return NONE
    if request.status == PENDING:
        return SENT if request.sender_id == current_user_id else RECEIVED
    return request.status


class FriendService:

    def __init__(self, db: Session):
        self.db = db

    def _request_between(self, a: str, b: str) -> Optional[FriendRequest]:
        return self.db.query(FriendRequest).filter(
            or_(
                and_(FriendRequest.sender_id == a, FriendRequest.receiver_id == b),
                and_(FriendRequest.sender_id == b, FriendRequest.receiver_id == a),
            )
        ).first()

    def are_friends(self, a: str, b: str) -> bool:
        return self.db.query(Friend).filter(
            or_(
                and_(Friend.user_id == a, Friend.friend_id == b),
                and_(Friend.user_id == b, Friend.friend_id == a),
            )
        ).first() is not None

    def _pending_for(self, request_id: str, receiver_id: str) -> FriendRequest:
        req = self.db.query(FriendRequest).filter(
            FriendRequest.id == request_id,
            FriendRequest.receiver_id == receiver_id,
            FriendRequest.status == PENDING,
        ).first()
        if req is None:
            raise NotFoundError("Friend request not found")
        return req

    # --- 查詢 ---

    def list_friends(self, user_id: str) -> List[FriendRead]:
        rows = (
            self.db.query(Friend, User)
            .join(User, Friend.friend_id == User.id)
            .filter(Friend.user_id == user_id)
            .order_by(Friend.created_at.desc())
            .all()
        )
        return [
            FriendRead(
                id=f.id,
                user_id=u.id,
                name=u.name or "Unknown",
                image=u.image or DEFAULT_AVATAR,
                username=u.username,
            )
            for f, u in rows
        ]

    def list_pending_requests(self, user_id: str) -> List[FriendRequestRead]:
        rows = (
            self.db.query(FriendRequest, User)
            .join(User, FriendRequest.sender_id == User.id)
            .filter(FriendRequest.receiver_id == user_id, FriendRequest.status == PENDING)
            .order_by(FriendRequest.created_at.desc())
            .all()
        )
        return [
            FriendRequestRead(
                id=r.id,
                user_id=u.id,
                name=u.name or "Unknown",
                image=u.image or DEFAULT_AVATAR,
                username=u.username,
                created_at=r.created_at,
            )
            for r, u in rows
        ]

    def count_friends(self, user_id: str) -> int:
        return self.db.query(Friend).filter(Friend.user_id == user_id).count()

    # --- 狀態變更 ---

    def send_request(self, sender_id: str, receiver_id: Optional[str]) -> FriendRequest:
        if not receiver_id:
            raise BadRequestError("User ID is required")
        if receiver_id == sender_id:
            raise BadRequestError("Cannot send friend request to yourself")

        if self.db.get(User, receiver_id) is None:
            raise NotFoundError("User not found")
        if self._request_between(sender_id, receiver_id) is not None:
            raise BadRequestError("A friend request already exists")
        if self.are_friends(sender_id, receiver_id):
            raise BadRequestError("Already friends")

        req = FriendRequest(sender_id=sender_id, receiver_id=receiver_id, status=PENDING)
        self.db.add(req)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise BadRequestError("A friend request already exists") from exc
        self.db.refresh(req)

        logger.info("Friend request %s sent from %s to %s", req.id, sender_id, receiver_id)
        return req

    def accept_request(self, receiver_id: str, request_id: Optional[str]) -> Friend:
        if not request_id:
            raise BadRequestError("Request ID is required")
        req = self._pending_for(request_id, receiver_id)

        req.status = ACCEPTED
        friendship = Friend(user_id=receiver_id, friend_id=req.sender_id)
        self.db.add(friendship)
        self.db.add(Friend(user_id=req.sender_id, friend_id=receiver_id))
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise BadRequestError("Already friends") from exc
        self.db.refresh(friendship)

        logger.info("Friend request %s accepted by %s", request_id, receiver_id)
        return friendship

    def reject_request(self, receiver_id: str, request_id: Optional[str]) -> FriendRequest:
        if not request_id:
            raise BadRequestError("Request ID is required")
        req = self._pending_for(request_id, receiver_id)

        req.status = REJECTED
        self.db.commit()
        self.db.refresh(req)

        logger.info("Friend request %s rejected by %s", request_id, receiver_id)
        return req
