"""Application settings using Pydantic BaseSettings."""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Support Dispatch"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Dispatcher
    dispatcher_workers: int = 5
    intake_queue_capacity: int = 100
    worker_poll_interval: float = 0.1

    # Escalation
    escalation_queue_capacity: int = 50
    escalation_handling_delay: float = 0.5

    # Timeouts
    request_timeout: float = 3.0
    shutdown_timeout: float = 5.0

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in _VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_VALID_LOG_LEVELS}, got '{v}'")
        return upper

    @model_validator(mode="after")
    def validate_sizes_positive(self) -> "Settings":
        for field_name in (
            "dispatcher_workers",
            "intake_queue_capacity",
            "escalation_queue_capacity",
        ):
            value = getattr(self, field_name)
            if value <= 0:
                raise ValueError(f"{field_name} must be positive, got {value}")
        return self

    @model_validator(mode="after")
    def validate_timeouts_positive(self) -> "Settings":
        for field_name in (
            "request_timeout",
            "shutdown_timeout",
            "worker_poll_interval",
        ):
            value = getattr(self, field_name)
            if value <= 0:
                raise ValueError(f"{field_name} must be positive, got {value}")
        if self.escalation_handling_delay < 0:
            raise ValueError(
                f"escalation_handling_delay must not be negative, got {self.escalation_handling_delay}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
