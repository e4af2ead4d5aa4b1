# File: app/core/config.py

import os
from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel, AnyHttpUrl, ConfigDict, field_validator  # BaseSettings not needed


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    # env defaults below are raw strings; run them through the validators too
    model_config = ConfigDict(validate_default=True)

    # Basic app info
    PROJECT_NAME: str = "Task Tracker API"
    VERSION: str = "0.1.0"

    api_prefix: str = os.getenv("API_PREFIX", "/api")
    debug: bool = _env_bool("DEBUG", False)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    backend_cors_origins: List[AnyHttpUrl] = os.getenv("BACKEND_CORS_ORIGINS", "")

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./task_tracker.db")

    # Security / auth
    # Tokens are signed with secret_key; previous_secret_keys are still
    # accepted on verification so keys can be rotated without logging
    # everybody out.
    secret_key: str = os.getenv("SECRET_KEY", "CHANGE_ME_IN_PRODUCTION")
    previous_secret_keys: List[str] = os.getenv("PREVIOUS_SECRET_KEYS", "")
    algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24))  # 24h
    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", 12))

    # Read-through cache in front of task lookups
    cache_enabled: bool = _env_bool("CACHE_ENABLED", True)
    cache_max_entries: int = int(os.getenv("CACHE_MAX_ENTRIES", 1024))

    # Bootstrap admin (see seed_admin.py)
    first_admin_email: Optional[str] = os.getenv("FIRST_ADMIN_EMAIL") or None
    first_admin_password: Optional[str] = os.getenv("FIRST_ADMIN_PASSWORD") or None

    @field_validator("backend_cors_origins", "previous_secret_keys", mode="before")
    @classmethod
    def split_comma_separated(cls, v):
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        if isinstance(v, list):
            return v
        return []


@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
