"""Application configuration."""

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dbwiki.core.models import TITLE_PATTERN


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_url: str = "sqlite:///data/wiki.db"
    create_schema: bool = True
    pool_size: int = 5
    pool_max_overflow: int = 5
    pool_recycle: int = 30

    front_page: str = "FrontPage"
    app_title: str = "DBWiki"
    debug: bool = False

    host: str = "127.0.0.1"
    port: int = 8080
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="DBWIKI_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @field_validator("front_page")
    @classmethod
    def _check_front_page(cls, value: str) -> str:
        if not TITLE_PATTERN.fullmatch(value):
            raise ValueError(f"front page {value!r} is not a valid page title")
        return value


settings = Settings()
