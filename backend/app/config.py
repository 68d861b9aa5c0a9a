"""Server settings read from the environment (and backend/.env when present)."""

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PORT = 8080
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseModel):
    # Populated from env var names so validation errors name the variable.
    model_config = ConfigDict(populate_by_name=True)

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    ws_path: str = Field(default="/ws", alias="WS_PATH")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"must be one of {list(LOG_LEVELS)}")
        return level

    @field_validator("ws_path")
    @classmethod
    def _absolute_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("must start with '/'")
        return value


def _split_origins(value: str) -> list[str]:
    origins = [o.strip() for o in value.split(",") if o.strip()]
    return origins or ["*"]


def load_settings() -> Settings:
    """Build Settings from the environment. Unset or blank variables keep their defaults.

    Raises pydantic.ValidationError naming the offending variable (e.g. PORT).
    """
    load_dotenv(os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"))
    raw: dict[str, object] = {}
    for key in ("HOST", "PORT", "LOG_LEVEL", "WS_PATH"):
        value = os.environ.get(key, "").strip()
        if value:
            raw[key] = value
    if "CORS_ORIGINS" in os.environ:
        raw["CORS_ORIGINS"] = _split_origins(os.environ["CORS_ORIGINS"])
    return Settings.model_validate(raw)


@lru_cache
def get_settings() -> Settings:
    return load_settings()
