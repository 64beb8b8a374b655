"""
Application Settings
===================

Application settings and environment configuration using Pydantic Settings.
Supports development, testing, and production environments.

The parser and serializer never read settings; only the compile pipeline and
the command line interface do.
"""

from typing import Optional
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Main application settings with environment variable support."""

    # Application Configuration
    app_name: str = Field(default="braceml", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Logging Configuration
    log_level: str = Field(default="WARNING", description="Logging level")
    log_file: Optional[Path] = Field(default=None, description="Optional rotating log file")

    # Formatter Configuration
    format_output: bool = Field(default=True, description="Pretty-print generated HTML")
    formatter: str = Field(default="soup", description="Formatter backend: soup, none")
    indent_size: int = Field(default=2, ge=0, le=16, description="Indentation width")
    use_tabs: bool = Field(default=False, description="Indent with tabs")
    indent_attributes: bool = Field(default=False, description="One attribute per line")
    indent_cdata: bool = Field(default=False, description="Reindent script/style contents")
    strip_comments: bool = Field(default=False, description="Drop HTML comments")

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

    @field_validator("formatter")
    @classmethod
    def validate_formatter(cls, v: str) -> str:
        """Validate formatter backend name."""
        allowed = {"soup", "none"}
        if v.lower() not in allowed:
            raise ValueError(f"Formatter must be one of: {allowed}")
        return v.lower()

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, env_prefix="BRACEML_"
    )


# Global settings instance - will be initialized when needed
settings = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = Settings()
    return settings
