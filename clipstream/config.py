"""
ClipStream Configuration
Centralized settings management using Pydantic Settings
"""

from pydantic_settings import BaseSettings, NoDecode
from pydantic import Field, field_validator
from typing import Annotated, List
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # ==========================================================================
    # Application
    # ==========================================================================
    app_name: str = "ClipStream"
    debug: bool = False
    app_version: str = "1.0.0"
    log_level: str = Field(default="INFO", description="Root log level")

    # ==========================================================================
    # Security
    # ==========================================================================
    jwt_secret: str = Field(default="change-me", description="Secret used to verify bearer tokens")
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    # Comma-separated in the environment, so skip the JSON decoding
    cors_allowed_origins: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://127.0.0.1:3000"
        ],
        description="Allowed CORS origins"
    )

    # ==========================================================================
    # Ingestion
    # ==========================================================================
    metadata_timeout_seconds: float = Field(default=20.0, ge=5, le=60, description="Upper bound for a provider call")
    metadata_max_retries: int = Field(default=1, ge=0, le=3, description="Retries for transient provider errors")

    # ==========================================================================
    # Feeds
    # ==========================================================================
    default_page_size: int = Field(default=10, ge=1, le=100)
    max_page_size: int = Field(default=50, ge=1, le=100)

    # ==========================================================================
    # Paths
    # ==========================================================================
    data_dir: str = Field(default="data", description="Persistent application data directory")
    database_name: str = Field(default="clipstream.db", description="SQLite file inside data_dir")

    @field_validator("cors_allowed_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
