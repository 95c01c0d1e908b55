"""
Application Settings
===================

Runtime settings for the PDF renderer using Pydantic Settings.
Supports development, testing, and production environments.
"""

from typing import List, Union
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import json

from pagepdf.core.errors import ConfigurationError


class Settings(BaseSettings):
    """Renderer settings with environment variable support."""

    # Application Configuration
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )
    log_level: str = Field(default="WARNING", description="Logging level")

    # Browser Configuration
    playwright_headless: bool = Field(default=True, description="Run browser in headless mode")
    browser_args: List[str] = Field(
        default=["--no-sandbox"], description="Extra command line arguments for Chromium"
    )
    navigation_timeout: int = Field(
        default=30000, ge=0, description="Navigation timeout in milliseconds (0 disables)"
    )
    network_idle_ms: int = Field(
        default=500, ge=0, description="Quiet window required by the network idle conditions"
    )
    engine_debug_filter: str = Field(
        default="pw:browser*", description="DEBUG filter handed to the Playwright driver"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = {"development", "testing", "production"}
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("browser_args", mode="before")
    @classmethod
    def parse_browser_args(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse browser arguments from string or list."""
        if isinstance(v, str):
            # Handle JSON-like string: ["--no-sandbox", "--disable-gpu"]
            v = v.strip()
            if v.startswith("[") and v.endswith("]"):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            # Handle comma-separated string: "--no-sandbox,--disable-gpu"
            return [arg.strip() for arg in v.split(",") if arg.strip()]
        return v

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, env_prefix="PAGEPDF_"
    )


# Global settings instance - will be initialized when needed
settings = None


def _load_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid PAGEPDF_* settings: {e}") from e


def get_settings() -> Settings:
    """Get the global settings instance.

    Raises:
        ConfigurationError: If the environment holds invalid PAGEPDF_* values
    """
    global settings
    if settings is None:
        settings = _load_settings()
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = _load_settings()
    return settings
