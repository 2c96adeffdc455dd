# app/schemas/user.py
from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


class UserCredentials(SQLModel):
    """
    Payload for /register and /login.

    Validation rules:
      - username cannot be empty or whitespace
      - password must be 1..72 bytes once UTF-8 encoded
    """

    model_config = ConfigDict(extra="forbid")

    username: str = Field(max_length=50)
    password: str = Field(min_length=1)

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username cannot be empty")
        return v

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class UserRead(SQLModel):
    """Response schema returned to clients (no password hash)."""

    id: int
    username: str


class LoginResponse(SQLModel):
    message: str
    access_token: str
    token_type: str = "bearer"


class MeRead(SQLModel):
    logged_in: bool
    user_id: int | None = None


class ResolvedIdentity(SQLModel):
    """
    The authenticated caller, as produced by the auth dependency.
    Order and review operations take this instead of reading the session.
    """

    model_config = ConfigDict(frozen=True)

    user_id: int
