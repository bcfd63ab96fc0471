import json
from typing import List, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = Field(..., alias="DATABASE_URL")

    session_cookie_name: str = Field("classroom_sid", alias="SESSION_COOKIE_NAME")
    session_ttl_days: int = Field(7, alias="SESSION_TTL_DAYS")
    session_cookie_secure: bool = Field(False, alias="SESSION_COOKIE_SECURE")

    room_code_max_attempts: int = Field(10, alias="ROOM_CODE_MAX_ATTEMPTS")

    # JSON list or comma-separated string
    cors_origins: Union[List[str], str] = Field(default_factory=lambda: ["*"], alias="CORS_ORIGINS")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    auto_create_tables: bool = Field(True, alias="AUTO_CREATE_TABLES")

    admin_email: Optional[str] = Field(None, alias="ADMIN_EMAIL")
    admin_password: Optional[str] = Field(None, alias="ADMIN_PASSWORD")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, value):
        if isinstance(value, str):
            raw = value.strip()
            if raw.startswith("["):
                return json.loads(raw)
            return [item.strip() for item in raw.split(",") if item.strip()]
        return value

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
