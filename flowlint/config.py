"""Configuration management for flowlint."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """flowlint configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="FLOWLINT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Typo detection
    typo_min_length: int = 2
    typo_max_distance: int = 2
    typo_max_length_delta: int = 2

    # Lines longer than this are skipped by every analyzer pass
    max_line_length: int = 10000

    # Scheduler: one analysis pass per display frame
    frame_interval_seconds: float = 1 / 60

    # API Configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8001
    api_reload: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "console"


settings = Settings()
