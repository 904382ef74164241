"""
core/config.py
--------------
ManageRH settings, read from the environment or a .env file.

SECRET_KEY and DATABASE_URL have no default: the app refuses to start
without them. DATABASE_URL may use the plain postgres:// or postgresql://
scheme most hosting providers hand out; it is rewritten to the asyncpg
driver the engine needs.
"""

from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ASYNC_POSTGRES_SCHEME = "postgresql+asyncpg://"
SYNC_POSTGRES_SCHEMES = ("postgres://", "postgresql://")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── App ──────────────────────────────────────────────────────────────
    APP_NAME: str = "ManageRH"
    APP_ENV: str = "development"
    DEBUG: bool = False

    # ── Sessions & passwords ─────────────────────────────────────────────
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    SESSION_EXPIRE_MINUTES: int = 24 * 60
    BCRYPT_ROUNDS: int = 10

    # ── Database ─────────────────────────────────────────────────────────
    DATABASE_URL: str

    # ── CORS ─────────────────────────────────────────────────────────────
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000"]

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def parse_origins(cls, v):
        if isinstance(v, str):
            import json
            return json.loads(v)
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def check_rounds(cls, v: int) -> int:
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @field_validator("DATABASE_URL")
    @classmethod
    def use_async_driver(cls, v: str) -> str:
        for scheme in SYNC_POSTGRES_SCHEMES:
            if v.startswith(scheme):
                return ASYNC_POSTGRES_SCHEME + v[len(scheme):]
        return v

    @field_validator("SESSION_EXPIRE_MINUTES")
    @classmethod
    def check_expiry(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("SESSION_EXPIRE_MINUTES must be positive")
        return v


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
