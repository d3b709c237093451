# friendnet/routers/friends.py

from typing import List

from fastapi import APIRouter, Depends, Response

from friendnet.common import mock_data
from friendnet.common.deps import get_current_user, get_friend_service
from friendnet.common.fallback import read_with_fallback
from friendnet.models.friend import FriendRead, FriendRequestRead, RespondFriendRequest, SendFriendRequest
from friendnet.models.user import User
from friendnet.services.friend_service import FriendService

router = APIRouter()


@router.get("", response_model=List[FriendRead])
def get_friend_list(
    response: Response,
    current_user: User = Depends(get_current_user),
    service: FriendService = Depends(get_friend_service),
):
    return read_with_fallback(
        lambda: service.list_friends(current_user.id),
        mock_data.mock_friends,
        response,
        "Failed to fetch friends",
    )


@router.get("/requests", response_model=List[FriendRequestRead])
def get_friend_requests(
    response: Response,
    current_user: User = Depends(get_current_user),
    service: FriendService = Depends(get_friend_service),
):
    # 別人加我，且狀態是 pending 的
    return read_with_fallback(
        lambda: service.list_pending_requests(current_user.id),
        mock_data.mock_friend_requests,
        response,
        "Failed to fetch friend requests",
    )


@router.post("/send")
def send_friend_request(
    body: SendFriendRequest = SendFriendRequest(),
    current_user: User = Depends(get_current_user),
    service: FriendService = Depends(get_friend_service),
):
    req = service.send_request(current_user.id, body.user_id)
    return {
        "success": True,
        "data": {"id": req.id, "status": req.status, "created": req.created_at.isoformat()},
    }


@router.post("/accept")
def accept_friend_request(
    body: RespondFriendRequest = RespondFriendRequest(),
    current_user: User = Depends(get_current_user),
    service: FriendService = Depends(get_friend_service),
):
    friendship = service.accept_request(current_user.id, body.request_id)
    return {"success": True, "data": {"requestId": body.request_id, "friendshipId": friendship.id}}


@router.post("/reject")
def reject_friend_request(
    body: RespondFriendRequest = RespondFriendRequest(),
    current_user: User = Depends(get_current_user),
    service: FriendService = Depends(get_friend_service),
):
    req = service.reject_request(current_user.id, body.request_id)
    return {"success": True, "data": {"requestId": req.id, "status": req.status}}
