import json
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from user_service.domain.user import User
from user_service.entrypoints.schemas.user import MAX_USER_ID, MIN_USER_ID
from user_service.services.codec import user_from_mapping


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("USER_SERVICE_URL_PREFIX", mode="before")
    @classmethod
    def strip_prefix(cls, value: str) -> str:
        value = (value or "").strip().rstrip("/")
        if value and not value.startswith("/"):
            value = f"/{value}"
        return value

    @field_validator("USER_SERVICE_LOG_LEVEL", mode="before")
    @classmethod
    def upper_level(cls, value: str) -> str:
        return str(value).strip().upper()

    USER_SERVICE_URL_PREFIX: str = Field(default="", description="API URL prefix")
    USER_SERVICE_ID_SEED: int = Field(
        default=123, ge=MIN_USER_ID, le=MAX_USER_ID, description="Initial value of the user id counter"
    )
    USER_SERVICE_SEED_PATH: str = Field(default="", description="Path to a JSON file with initial users")
    USER_SERVICE_HOST: str = Field(default="0.0.0.0", description="Bind host")
    USER_SERVICE_PORT: int = Field(default=8080, description="Bind port")
    USER_SERVICE_LOG_LEVEL: str = Field(default="INFO", description="Logging level name")
    DEBUG: int = Field(default=0, description="Debug mode flag")


settings = Settings()


def load_seed_users(path: str) -> List[User]:
    """Read ``{"users": [...]}`` from ``path``; no path or no file means no users."""
    if not path:
        return []
    seed_path = Path(path)
    if not seed_path.exists():
        return []
    payload = json.loads(seed_path.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        entries = payload.get("users", [])
    else:
        entries = payload
    if not isinstance(entries, list):
        raise ValueError(f"Seed file {seed_path} must contain a list of users")
    if not all(isinstance(entry, dict) for entry in entries):
        raise ValueError(f"Seed file {seed_path} must contain user objects")
    return [user_from_mapping(entry) for entry in entries]
