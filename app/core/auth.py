# app/core/auth.py
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import Session

from app.core.config import Settings
from app.core.lookup import Found
from app.database import get_session
from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user import ResolvedIdentity

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately
#   so we can support "guest" mode and fall back to the session cookie.
bearer_scheme = HTTPBearer(auto_error=False)

user_repo = UserRepository()


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


# ----- Passwords -----


def hash_password(password: str, rounds: int) -> str:
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def check_password(password: str, hashed: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))


# ----- Tokens -----


def create_access_token(user: User, settings: Settings) -> str:
    """
    Issue a signed session token for ``user``.

    Claims:
      - sub: user id (string, as JWT requires)
      - ver: the user's token_version; logout bumps it, which revokes
        every token issued before
      - exp: now + ACCESS_TOKEN_EXPIRE_MINUTES
    """
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    claims = {"sub": str(user.id), "ver": user.token_version, "exp": expire}
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


def decode_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """
    Decode and verify a session token.

    Raises:
        HTTPException(401): if token is invalid/expired.
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


# ----- Dependencies -----


def _read_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
    settings: Settings,
) -> str | None:
    """Bearer token first, else the session cookie set by /login."""
    if credentials is not None:
        return credentials.credentials
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def resolve_token(token: str, settings: Settings, session: Session) -> User:
    """
    Turn a session token into the live user row.

    Raises:
        HTTPException(401): if the token is malformed or expired, points at
        a user that no longer exists, or was revoked by a logout.
    """
    payload = decode_access_token(token, settings)
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid sub in token",
        )

    result = user_repo.get_by_id(session, user_id)
    if not isinstance(result, Found):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown user",
        )

    if payload.get("ver") != result.value.token_version:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session has ended",
        )

    return result.value


def get_identity(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
    session: Session = Depends(get_session),
) -> ResolvedIdentity | None:
    """
    Resolve the caller to a user id.

    Flow:
      1. Take the bearer token, else the session cookie.
      2. No token => guest => return None.
      3. Otherwise the token must resolve (see `resolve_token`) or 401.
    """
    token = _read_token(request, credentials, settings)
    if not token:
        return None  # guest mode

    user = resolve_token(token, settings, session)
    return ResolvedIdentity(user_id=user.id)


def get_session_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
    session: Session = Depends(get_session),
) -> User | None:
    """
    Like `get_identity`, but a dead or bad token reads as "no session"
    instead of 401. Used by /logout, which must always succeed.
    """
    token = _read_token(request, credentials, settings)
    if not token:
        return None
    try:
        return resolve_token(token, settings, session)
    except HTTPException:
        return None


def require_identity(
    identity: ResolvedIdentity | None = Depends(get_identity),
) -> ResolvedIdentity:
    """
    Enforce authentication.

    Raises:
        HTTPException(401): if the caller is a guest.
    """
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not logged in",
        )
    return identity
