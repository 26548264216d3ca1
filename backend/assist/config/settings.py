# /assist/config/settings.py

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Runtime
    environment: str = Field(default="production", description="development renders console logs")
    log_level: str = "INFO"
    # Opt-in: embedding applications usually own the logging setup
    configure_logging: bool = False

    # Conversation pacing (0 disables the artificial reply delay)
    response_delay_seconds: float = 0.0

    # Flow behaviour
    benefit_field_id: str = "benefit-types"
    text_max_length: int = 100

    # Export
    export_lines_per_page: int = 45
    export_line_width: int = 90

    model_config = SettingsConfigDict(
        env_prefix="ASSIST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---------------- Validators ---------------- #

    @field_validator("response_delay_seconds")
    @classmethod
    def delay_must_not_be_negative(cls, v):
        if v < 0:
            raise ValueError("ASSIST_RESPONSE_DELAY_SECONDS cannot be negative")
        return v

    @field_validator("export_lines_per_page")
    @classmethod
    def page_must_fit_content(cls, v):
        # Title block plus at least one section heading must fit on a page
        if v < 10:
            raise ValueError("ASSIST_EXPORT_LINES_PER_PAGE must be at least 10")
        return v

    @field_validator("export_line_width", "text_max_length")
    @classmethod
    def must_be_positive(cls, v):
        if v <= 0:
            raise ValueError("Value must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


settings = Settings()
