# friendnet/routers/auth.py

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm

from friendnet.common.deps import get_current_user, get_user_service, oauth2_scheme
from friendnet.core.config import settings
from friendnet.core.security import create_access_token, decode_access_token
from friendnet.models.user import User, UserCreate, UserRead
from friendnet.services.user_service import UserService

router = APIRouter()


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(user_in: UserCreate, service: UserService = Depends(get_user_service)):
    return service.register(user_in)


@router.post("/token")
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    service: UserService = Depends(get_user_service),
):
    # username 欄位可以填 email 或 username
    user = service.authenticate(form_data.username, form_data.password)
    return {"access_token": create_access_token(data={"sub": user.id}), "token_type": "bearer"}


@router.get("/session")
def read_session(token: str = Depends(oauth2_scheme), current_user: User = Depends(get_current_user)):
    payload = decode_access_token(token)
    return {
        "user": UserRead.model_validate(current_user).model_dump(by_alias=True, mode="json"),
        "expires": datetime.fromtimestamp(payload["exp"], tz=timezone.utc).isoformat(),
    }


@router.get("/providers")
def list_providers():
    return {"providers": settings.enabled_providers()}
