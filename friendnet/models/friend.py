# friendnet/models/friend.py

from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint

from friendnet.db.base_class import utcnow
from friendnet.models.base import Base, CamelModel

PENDING = "pending"
ACCEPTED = "accepted"
REJECTED = "rejected"


def _pair_low(context) -> str:
    params = context.get_current_parameters()
    return min(params["sender_id"], params["receiver_id"])


def _pair_high(context) -> str:
    params = context.get_current_parameters()
    return max(params["sender_id"], params["receiver_id"])


class FriendRequest(Base):
    __tablename__ = "friend_requests"
    # 不分方向，同一對使用者只能有一筆邀請
    __table_args__ = (UniqueConstraint("pair_low", "pair_high", name="uq_friend_request_pair"),)

    sender_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    pair_low = Column(String(36), default=_pair_low, nullable=False)
    pair_high = Column(String(36), default=_pair_high, nullable=False)
    status = Column(String(20), default=PENDING, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class Friend(Base):
    # 接受邀請時兩個方向各寫一筆，各自用 user_id 就查得到
    __tablename__ = "friends"
    __table_args__ = (UniqueConstraint("user_id", "friend_id", name="uq_friend_pair"),)

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    friend_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)


class SendFriendRequest(CamelModel):
    user_id: Optional[str] = None


class RespondFriendRequest(CamelModel):
    request_id: Optional[str] = None


class FriendRead(CamelModel):
    id: str
    user_id: str
    name: str
    image: str
    username: Optional[str] = None


class FriendRequestRead(CamelModel):
    id: str
    user_id: str
    name: str
    image: str
    username: Optional[str] = None
    created_at: datetime
