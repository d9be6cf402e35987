"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
Settings are read from environment variables, a ``.env`` file and default
values, and are only consumed by the composition root: the ``Application``
itself never reads the environment.
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from proton.shared import EnumEnvironment, EnumLogLevel


class KernelSettings(BaseSettings):
    """Kernel configuration settings."""

    title: str = Field(default="Proton", description="Application title")
    debug: bool = Field(
        default=False,
        description="Expose stack traces in error responses",
        validation_alias=AliasChoices("KERNEL_DEBUG", "DEBUG"),
    )

    model_config = SettingsConfigDict(
        env_prefix="KERNEL_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format",
    )
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    kernel: KernelSettings = Field(default_factory=KernelSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Settings factory.

    Patched in tests to provide settings per environment.
    """
    return AppSettings()
