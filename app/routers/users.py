# app/routers/users.py
from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from app.core.auth import get_app_settings, get_identity, get_session_user
from app.core.config import Settings
from app.database import get_session
from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user import (
    LoginResponse,
    MeRead,
    ResolvedIdentity,
    UserCredentials,
    UserRead,
)
from app.services.user_service import UserService

router = APIRouter(tags=["Users"])

repo = UserRepository()
service = UserService(repo)


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(
    payload: UserCredentials,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    """
    Create an account. 409 if the username is taken.
    """
    return service.register(session, payload, settings)


@router.post("/login", response_model=LoginResponse)
def login(
    payload: UserCredentials,
    response: Response,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    """
    Check credentials and start a session.

    The token is returned in the body (for Authorization: Bearer) and
    also set as an HttpOnly cookie.
    """
    result = service.login(session, payload, settings)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=result.access_token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
    )
    return result


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
    user: User | None = Depends(get_session_user),
):
    """
    End the session: revoke the caller's tokens and drop the cookie.

    Always 204, also for guests and already-dead tokens.
    """
    if user is not None:
        service.logout(session, user)
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME)
    return response


@router.get("/me", response_model=MeRead)
def read_me(identity: ResolvedIdentity | None = Depends(get_identity)):
    """
    Tell the caller whether they are logged in, and as whom.
    """
    if identity is None:
        return MeRead(logged_in=False)
    return MeRead(logged_in=True, user_id=identity.user_id)
