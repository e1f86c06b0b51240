"""Application configuration using Pydantic v2 Settings.

Centralized configuration that loads from environment variables
and provides type-safe access throughout the library.
"""

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Library settings loaded from environment variables.

    All settings have sensible defaults and can be overridden via
    ``FORMBINDER_`` prefixed environment variables or a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="FORMBINDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Strategy Selection
    form_builder_type: str = Field(
        default="html",
        description="Form builder strategy to use: 'html'.",
    )
    bean_inspector_type: str = Field(
        default="model",
        description="Bean inspector strategy to use: 'model' (pydantic models and dataclasses).",
    )

    # Form Generation
    truthy_values: list[str] = Field(
        default=["true", "t", "1", "y", "yes", "on"],
        description="Submitted tokens that check a boolean checkbox.",
    )
    template_encoding: str = Field(
        default="utf-8",
        description="Character encoding of template files.",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR.",
    )
    log_dir: Path | None = Field(
        default=None,
        description="Directory for log files, None to only log to the console.",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        return v.upper()

    @field_validator("truthy_values")
    @classmethod
    def normalize_truthy_values(cls, v: list[str]) -> list[str]:
        """Compare truthy tokens case-insensitively."""
        return [token.strip().lower() for token in v if token.strip()]

    def configure_logging(self) -> None:
        """Configure global logging based on settings."""
        import structlog

        level = getattr(logging, self.log_level, logging.INFO)

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        logging.basicConfig(
            format="%(message)s",
            level=level,
        )

        logging.getLogger("formbinder").setLevel(level)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global Settings instance.

    Returns:
        The singleton Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        _settings.configure_logging()
    return _settings
