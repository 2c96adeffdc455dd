# app/services/user_service.py
from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.auth import check_password, create_access_token, hash_password
from app.core.config import Settings
from app.core.lookup import Found
from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user import LoginResponse, UserCredentials


class UserService:
    """
    Business logic for User.

    Responsibilities:
      - registration with bcrypt-hashed passwords
      - credential check and session token issue
      - session revocation on logout
      - map domain errors to HTTP errors
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    def register(
        self,
        session: Session,
        payload: UserCredentials,
        settings: Settings,
    ) -> User:
        """
        Raises:
            HTTPException(409): if the username is taken.
        """
        if isinstance(self.repo.get_by_username(session, payload.username), Found):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Username already taken",
            )

        user = User(
            username=payload.username,
            password=hash_password(payload.password, settings.BCRYPT_ROUNDS),
        )
        return self.repo.create(session, user)

    def login(
        self,
        session: Session,
        payload: UserCredentials,
        settings: Settings,
    ) -> LoginResponse:
        """
        Check credentials and issue a session token.

        Unknown username and wrong password give the same 401.
        """
        result = self.repo.get_by_username(session, payload.username)
        if not isinstance(result, Found) or not check_password(
            payload.password, result.value.password
        ):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
            )

        token = create_access_token(result.value, settings)
        return LoginResponse(message="Login successful", access_token=token)

    def logout(self, session: Session, user: User) -> User:
        """
        End the user's sessions server-side.

        Bumping token_version makes every token issued so far fail the
        version check in `resolve_token`, including copies of the cookie.
        """
        user.token_version += 1
        return self.repo.update(session, user)
