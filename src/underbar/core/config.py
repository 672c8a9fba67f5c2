import os

from pydantic import BaseModel, Field, field_validator

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    LOG_LEVEL: str = "INFO"
    TIMER_DAEMON: bool = Field(
        default=True, description="Run delay/throttle timers as daemon threads."
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def _check_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level '{value}'")
        return value

    @classmethod
    def load(cls) -> "Settings":
        daemon = os.getenv("UNDERBAR_TIMER_DAEMON", "true")

        return cls(
            LOG_LEVEL=os.getenv("UNDERBAR_LOG_LEVEL", "INFO"),
            TIMER_DAEMON=daemon.strip().lower() in _TRUTHY,
        )


settings = Settings.load()
