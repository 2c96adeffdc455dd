# app/models/user.py
from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Registered user.

    `password` holds the bcrypt hash, never the plain text, and is never
    part of a response schema.
    """

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)

    username: str = Field(
        unique=True,
        index=True,
    )

    password: str = Field(
        description="bcrypt hash",
    )

    # Embedded in every session token; bumping it revokes them all.
    token_version: int = Field(default=0)
