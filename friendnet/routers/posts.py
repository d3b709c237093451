# friendnet/routers/posts.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from friendnet.common import mock_data
from friendnet.common.deps import get_current_user, get_post_service
from friendnet.common.fallback import read_with_fallback
from friendnet.models.post import CommentCreate, CommentRead, LikeRead, PostCreate, PostRead
from friendnet.models.user import User
from friendnet.services.post_service import PostService

router = APIRouter()


@router.get("", response_model=List[PostRead])
def list_posts(
    response: Response,
    user_id: Optional[str] = Query(None, alias="userId"),
    service: PostService = Depends(get_post_service),
):
    return read_with_fallback(
        lambda: service.list_posts(user_id),
        mock_data.mock_posts,
        response,
        "Failed to fetch posts",
    )


@router.post("", response_model=PostRead, status_code=status.HTTP_201_CREATED)
def create_post(
    post_in: PostCreate,
    current_user: User = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    return service.create_post(current_user.id, post_in)


@router.get("/{post_id}/comments", response_model=List[CommentRead])
def list_comments(
    post_id: str,
    response: Response,
    service: PostService = Depends(get_post_service),
):
    return read_with_fallback(
        lambda: service.list_comments(post_id),
        lambda: mock_data.mock_comments(post_id),
        response,
        "Failed to fetch comments",
    )


@router.post("/{post_id}/comments", response_model=CommentRead, status_code=status.HTTP_201_CREATED)
def add_comment(
    post_id: str,
    comment_in: CommentCreate,
    current_user: User = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    return service.add_comment(current_user.id, post_id, comment_in)


@router.post("/{post_id}/like", response_model=LikeRead, status_code=status.HTTP_201_CREATED)
def like_post(
    post_id: str,
    current_user: User = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    return service.like_post(current_user.id, post_id)


@router.delete("/{post_id}/like")
def unlike_post(
    post_id: str,
    current_user: User = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    service.unlike_post(current_user.id, post_id)
    return {"success": True}
