# friendnet/models/post.py

from datetime import datetime
from typing import List, Optional

from pydantic import Field
from sqlalchemy import Column, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from friendnet.models.base import Base, CamelModel
from friendnet.models.user import UserSummary


class Post(Base):
    __tablename__ = "posts"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    image = Column(String(500), nullable=True)

    user = relationship("User", back_populates="posts")
    comments = relationship("Comment", back_populates="post", cascade="all, delete-orphan")
    likes = relationship("Like", back_populates="post", cascade="all, delete-orphan")


class Comment(Base):
    __tablename__ = "comments"

    post_id = Column(String(36), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)

    post = relationship("Post", back_populates="comments")
    user = relationship("User")


class Like(Base):
    __tablename__ = "likes"
    # 一個人對同一篇文章只能按一次讚
    __table_args__ = (UniqueConstraint("user_id", "post_id", name="uq_like_user_post"),)

    post_id = Column(String(36), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    post = relationship("Post", back_populates="likes")


class PostCreate(CamelModel):
    content: str = Field(min_length=1, max_length=2000)
    image: Optional[str] = Field(default=None, max_length=500)


class CommentCreate(CamelModel):
    content: str = Field(min_length=1, max_length=500)


class PostCounts(CamelModel):
    likes: int
    comments: int


class LikeUser(CamelModel):
    user_id: str


class LikeRead(CamelModel):
    id: str
    user_id: str
    post_id: str
    created_at: datetime


class PostRead(CamelModel):
    id: str
    content: str
    image: Optional[str] = None
    created_at: datetime
    user: UserSummary
    count: PostCounts = Field(alias="_count")
    likes: List[LikeUser] = []


class CommentRead(CamelModel):
    id: str
    content: str
    created_at: datetime
    post_id: str
    user: UserSummary
