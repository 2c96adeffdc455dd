# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Everything has a development default so the service boots with a local
    SQLite file. Override in production (.env):
      - DATABASE_URL
      - JWT_SECRET (signing secret for session tokens)
    """

    PROJECT_NAME: str = "Storefront API"
    API_PREFIX: str = "/api"

    # Store
    DATABASE_URL: str = "sqlite:///./store.db"
    DB_ECHO: bool = False
    SEED_SAMPLE_DATA: bool = True

    # Session tokens (JWT)
    JWT_SECRET: str = "change-me"
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 24 * 60
    SESSION_COOKIE_NAME: str = "session"

    # bcrypt cost factor
    BCRYPT_ROUNDS: int = 12

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
