# friendnet/routers/users.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from friendnet.common.deps import get_current_user, get_user_service
from friendnet.models.user import ProfileRead, SearchResult, User, UserUpdate
from friendnet.services.user_service import UserService

router = APIRouter()


# /search 和 /me 要放在 /{user_id} 前面
@router.get("/search", response_model=List[SearchResult])
def search_users(
    q: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return service.search(current_user.id, q)


@router.patch("/me", response_model=ProfileRead)
def update_me(
    user_in: UserUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return service.update_profile(current_user, user_in)


@router.get("/{user_id}", response_model=ProfileRead)
def read_profile(user_id: str, service: UserService = Depends(get_user_service)):
    return service.get_profile(user_id)
