# friendnet/services/post_service.py

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from friendnet.core.errors import ConflictError, NotFoundError
from friendnet.models.post import (
    Comment,
    CommentCreate,
    CommentRead,
    Like,
    LikeUser,
    Post,
    PostCounts,
    PostCreate,
    PostRead,
)
from friendnet.models.user import UserSummary

logger = logging.getLogger(__name__)


def to_post_read(post: Post) -> PostRead:
    return PostRead(
        id=post.id,
        content=post.content,
        image=post.image,
        created_at=post.created_at,
        user=UserSummary.model_validate(post.user),
        count=PostCounts(likes=len(post.likes), comments=len(post.comments)),
        likes=[LikeUser(user_id=like.user_id) for like in post.likes],
    )


def to_comment_read(comment: Comment) -> CommentRead:
    return CommentRead(
        id=comment.id,
        content=comment.content,
        created_at=comment.created_at,
        post_id=comment.post_id,
        user=UserSummary.model_validate(comment.user),
    )


class PostService:

    def __init__(self, db: Session):
        self.db = db

    def get_post(self, post_id: str) -> Post:
        post = self.db.get(Post, post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    def _find_like(self, user_id: str, post_id: str) -> Optional[Like]:
        return self.db.query(Like).filter(Like.user_id == user_id, Like.post_id == post_id).first()

    def list_posts(self, user_id: Optional[str] = None) -> List[PostRead]:
        query = self.db.query(Post).options(
            selectinload(Post.user), selectinload(Post.likes), selectinload(Post.comments)
        )
        if user_id:
            query = query.filter(Post.user_id == user_id)
        return [to_post_read(p) for p in query.order_by(Post.created_at.desc()).all()]

    def count_posts(self, user_id: str) -> int:
        return self.db.query(Post).filter(Post.user_id == user_id).count()

    def create_post(self, user_id: str, post_in: PostCreate) -> PostRead:
        post = Post(user_id=user_id, **post_in.model_dump())
        self.db.add(post)
        self.db.commit()
        self.db.refresh(post)
        logger.info("Post %s created by %s", post.id, user_id)
        return to_post_read(post)

    # --- 留言 ---

    def list_comments(self, post_id: str) -> List[CommentRead]:
        self.get_post(post_id)
        comments = (
            self.db.query(Comment)
            .options(selectinload(Comment.user))
            .filter(Comment.post_id == post_id)
            .order_by(Comment.created_at.desc())
            .all()
        )
        return [to_comment_read(c) for c in comments]

    def add_comment(self, user_id: str, post_id: str, comment_in: CommentCreate) -> CommentRead:
        self.get_post(post_id)
        comment = Comment(user_id=user_id, post_id=post_id, content=comment_in.content)
        self.db.add(comment)
        self.db.commit()
        self.db.refresh(comment)
        return to_comment_read(comment)

    # --- 按讚 ---

    def like_post(self, user_id: str, post_id: str) -> Like:
        self.get_post(post_id)
        if self._find_like(user_id, post_id) is not None:
            raise ConflictError("Post already liked")

        like = Like(user_id=user_id, post_id=post_id)
        self.db.add(like)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictError("Post already liked") from exc
        self.db.refresh(like)
        return like

    def unlike_post(self, user_id: str, post_id: str) -> None:
        self.get_post(post_id)
        like = self._find_like(user_id, post_id)
        if like is None:
            raise NotFoundError("Post not liked")
        self.db.delete(like)
        self.db.commit()
