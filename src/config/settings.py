"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use ATCODE_ prefix (e.g., ATCODE_CWD=/srv/site).

Settings can also be loaded from a .env file in the project root.
"""

import time

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use ATCODE_ prefix.

    Examples:
        ATCODE_CWD=/home/user/project
        ATCODE_DATE_FORMAT=%Y-%m-%d
        ATCODE_DEBUG_MODE=true
    """

    model_config = SettingsConfigDict(
        env_prefix="ATCODE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Built-in shortcode configuration
    cwd: str = Field(
        default="",
        description="Default value returned by the [@cwd] built-in when no cwd is passed explicitly",
    )

    date_format: str = Field(
        default="%x",
        description="strftime format for the [@date] built-in (%x is the host locale's date)",
    )

    time_format: str = Field(
        default="%X",
        description="strftime format for the [@time] built-in (%X is the host locale's time)",
    )

    debug_mode: bool = Field(
        default=False,
        description="Trace every match and handler call, regardless of verbosity",
    )

    def date_now(self) -> str:
        """
        Current local date rendered with date_format.

        Example:
            AppSettings(date_format="%Y-%m-%d").date_now()  # e.g. '2026-10-19'
        """
        return time.strftime(self.date_format)

    def time_now(self) -> str:
        """Current local time rendered with time_format."""
        return time.strftime(self.time_format)


# Singleton instance - import this in your code
appsettings = AppSettings()
