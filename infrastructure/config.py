from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # make it absolute so reload/CWD doesn't break it
        env_file=Path(__file__).resolve().parents[1] / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = Field(default="SnapShelf", validation_alias="APP_NAME")
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        validation_alias="APP_ENV",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_dir: Path | None = Field(
        default=None,
        validation_alias="LOG_DIR",
        description="Directory for rotating log files. Logs go to stdout only when unset.",
    )

    # API
    api_host: str = Field(default="127.0.0.1", validation_alias="API_HOST")
    api_port: int = Field(default=8000, validation_alias="API_PORT")

    # Storage
    storage_root: Path = Field(
        default=Path(__file__).resolve().parents[1] / "storage",
        validation_alias="STORAGE_ROOT",
    )
    max_file_size: int = Field(
        default=10 << 20,
        gt=0,
        validation_alias="MAX_FILE_SIZE",
        description="Maximum upload size in bytes.",
    )

    # Lifetimes
    default_lifetime_days: int = Field(
        default=7,
        ge=0,
        validation_alias="DEFAULT_LIFETIME_DAYS",
        description="Lifetime applied when an upload does not ask for one. 0 for infinite.",
    )
    max_lifetime_days: int = Field(
        default=0,
        ge=0,
        validation_alias="MAX_LIFETIME_DAYS",
        description="Upper bound on lifetimes. 0 for unlimited retention.",
    )

    # Expiration sweeper
    sweeper_enabled: bool = Field(default=True, validation_alias="SWEEPER_ENABLED")
    sweep_interval_seconds: float = Field(
        default=3600.0,
        gt=0,
        validation_alias="SWEEP_INTERVAL_SECONDS",
    )

    # Front-end proxy
    x_accel_prefix: str = Field(
        default="",
        validation_alias="X_ACCEL_PREFIX",
        description="When set, fetches answer with X-Accel-Redirect: <prefix>/<identifier>.",
    )

    # Lutim compatibility
    motd: str = Field(default="", validation_alias="MOTD")
    contact_url: str = Field(
        default="https://github.com/snapshelf/snapshelf",
        validation_alias="CONTACT_URL",
    )


@lru_cache
def get_settings() -> Settings:
    """Build the settings once per process."""
    return Settings()
