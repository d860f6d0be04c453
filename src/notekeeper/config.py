"""
App configuration - pydantic settings, values come from env vars or .env
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """App settings - loads from .env file"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # basic app stuff
    app_name: str = Field(default="NoteKeeper API")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)

    # server config
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    reload: bool = Field(default=False)

    # DB settings
    database_url: str = Field(default="sqlite+aiosqlite:///./notekeeper.db")
    database_echo: bool = Field(default=False)  # useful for debugging

    # CORS
    cors_origins: list[str] = Field(
        default=["http://localhost:3000"], description="CORS allowed origins"
    )
    cors_allow_credentials: bool = Field(default=True, description="CORS allow credentials")

    # Users
    default_roles: list[str] = Field(
        default=["Employee"], description="Roles given to users created without any"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s", description="Log format"
    )
    log_dir: str = Field(default="logs", description="Directory for rotating log files")
    log_to_file: bool = Field(default=True, description="Write rotating log files")

    # Environment
    environment: str = Field(default="development", description="Environment name")


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings."""
    return settings
