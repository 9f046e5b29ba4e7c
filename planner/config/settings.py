from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from planner.calendar.locale import DEFAULT_LOCALE, LOCALES


def get_storage_path() -> str:
    """Default location of the key-value storage file (~/.planner/storage.json)."""
    return str(Path.home() / ".planner" / "storage.json")


class Settings(BaseSettings):
    api_url: str = Field(
        default="http://localhost:3333",  # Default for local dev; the API server listens on 3333
        validation_alias="PLANNER_API_URL",
    )
    api_timeout: float = Field(default=10.0, validation_alias="PLANNER_API_TIMEOUT")
    owner_name: str = Field(default="", validation_alias="PLANNER_OWNER_NAME")
    owner_email: str = Field(default="", validation_alias="PLANNER_OWNER_EMAIL")
    storage_path: str = Field(
        default_factory=get_storage_path,
        validation_alias="PLANNER_STORAGE_PATH",
    )
    locale: str = Field(
        default=DEFAULT_LOCALE,
        validation_alias="PLANNER_LOCALE",
        description="Date locale used for calendar labels",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="PLANNER_LOG_FILE")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("locale")
    @classmethod
    def validate_locale(cls, value: str) -> str:
        """Fall back to the default locale when the configured one is unknown."""
        if value not in LOCALES:
            logger.warning(f"Unknown PLANNER_LOCALE '{value}'. Valid locales are: {', '.join(LOCALES)}. Defaulting to {DEFAULT_LOCALE}.")
            return DEFAULT_LOCALE
        return value

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("owner_email")
    @classmethod
    def validate_owner(cls, value: str) -> str:
        """Warn when trips would be created without an owner."""
        if not value:
            logger.warning(
                "PLANNER_OWNER_EMAIL is not set. Trips created from this client will have no owner e-mail. "
                "Set it in .env file or environment variables."
            )
        return value

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
