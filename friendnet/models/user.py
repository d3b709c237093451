# friendnet/models/user.py

from datetime import datetime
from typing import Optional

from pydantic import Field
from sqlalchemy import Column, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from friendnet.models.base import Base, CamelModel

DEFAULT_AVATAR = "/default-avatar.jpg"


class User(Base):
    __tablename__ = "users"

    name = Column(String(100), nullable=True)
    username = Column(String(50), unique=True, index=True, nullable=True)
    email = Column(String(255), unique=True, index=True, nullable=True)
    image = Column(String(500), nullable=True)
    bio = Column(Text, nullable=True)

    # OAuth 帳號沒有密碼
    hashed_password = Column(String(255), nullable=True)

    accounts = relationship("Account", back_populates="user", cascade="all, delete-orphan")
    posts = relationship("Post", back_populates="user", cascade="all, delete-orphan")


class Account(Base):
    """An OAuth identity linked to a user."""

    __tablename__ = "accounts"
    __table_args__ = (UniqueConstraint("provider", "provider_account_id", name="uq_account_provider"),)

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(20), default="oauth", nullable=False)
    provider = Column(String(50), nullable=False)
    provider_account_id = Column(String(255), nullable=False)

    user = relationship("User", back_populates="accounts")


class UserCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    username: Optional[str] = Field(default=None, min_length=2, max_length=50)
    password: str = Field(min_length=6)


class UserUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    username: Optional[str] = Field(default=None, min_length=2, max_length=50)
    bio: Optional[str] = Field(default=None, max_length=500)
    image: Optional[str] = Field(default=None, max_length=500)


class UserSummary(CamelModel):
    id: str
    name: Optional[str] = None
    image: Optional[str] = None


class UserRead(CamelModel):
    id: str
    name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    image: Optional[str] = None
    bio: Optional[str] = None
    created_at: datetime


class ProfileCounts(CamelModel):
    posts: int
    friends: int


class ProfileRead(CamelModel):
    id: str
    name: Optional[str] = None
    username: Optional[str] = None
    image: Optional[str] = None
    bio: Optional[str] = None
    created_at: datetime
    count: ProfileCounts = Field(alias="_count")


class SearchResult(CamelModel):
    id: str
    name: Optional[str] = None
    image: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    status: str


class OAuthProfile(CamelModel):
    provider: str
    provider_account_id: str
    email: Optional[str] = None
    name: Optional[str] = None
    image: Optional[str] = None
