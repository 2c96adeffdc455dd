# app/repositories/user_repo.py
from sqlmodel import Session, select

from app.core.lookup import Lookup, lookup_of
from app.models.user import User


class UserRepository:
    """
    Data access layer for User.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic
    """

    def get_by_id(self, session: Session, user_id: int) -> Lookup[User]:
        """Found(User) by primary key, or NotFound."""
        return lookup_of(session.get(User, user_id))

    def get_by_username(self, session: Session, username: str) -> Lookup[User]:
        """Found(User) by unique username, or NotFound."""
        stmt = select(User).where(User.username == username)
        return lookup_of(session.exec(stmt).first())

    def create(self, session: Session, user: User) -> User:
        """Insert a new User and return the persisted row."""
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def update(self, session: Session, user: User) -> User:
        """Persist changes to an existing User."""
        session.add(user)
        session.commit()
        session.refresh(user)
        return user
