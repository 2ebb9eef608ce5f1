"""
Configuration management for Player Backend.
Uses pydantic-settings for environment variable parsing.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./players.db",
        description="Async SQLAlchemy connection URL (aiosqlite or asyncpg driver)"
    )

    # Debug
    debug_mode: bool = Field(
        default=False,
        description="Echo SQL statements to the log"
    )

    # Listing defaults
    default_page_size: int = Field(
        default=3,
        description="Page size used when the client does not send pageSize"
    )
    default_order: str = Field(
        default="id",
        description="Sort field used when the client does not send order"
    )

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    log_level: str = Field(default="INFO")

    # Database pooling
    db_pool_size: int = Field(
        default=5,
        description="Database connection pool size"
    )
    db_max_overflow: int = Field(
        default=10,
        description="Maximum database connections above pool size"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Use dependency injection in FastAPI routes.
    """
    return Settings()
