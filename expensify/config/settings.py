"""
Configuration Management for Expensify

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
This makes it easy to see what external dependencies exist and
ensures all required configuration is validated at startup.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


ErrorMessageStyle = Literal["specific", "generic"]


class GoogleSheetsSettings(BaseSettings):
    """Google Sheets storage configuration (remote-backed variant)."""

    model_config = SettingsConfigDict(
        env_prefix="GOOGLE_SHEETS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    credentials_path: str = Field(
        ...,
        description="Path to Google service account credentials JSON"
    )
    spreadsheet_id: str = Field(
        ...,
        description="ID of the Google Sheets spreadsheet to use"
    )

    # Sheet names within the spreadsheet
    expenses_sheet_name: str = Field(
        default="Expenses",
        description="Name of the sheet for expenses"
    )
    users_sheet_name: str = Field(
        default="Users",
        description="Name of the sheet for registered users"
    )

    @field_validator('credentials_path')
    @classmethod
    def validate_credentials_path(cls, v: str) -> str:
        """Warn if credentials file doesn't exist (but don't fail - might be mounted later)."""
        if not Path(v).exists():
            import warnings
            warnings.warn(
                f"Google credentials file not found at {v}. "
                "Make sure it exists before running the application."
            )
        return v


class AuthSettings(BaseSettings):
    """Authentication form rules and error-message mapping."""

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    min_password_length: int = Field(
        default=6,
        ge=1,
        description="Minimum password length for login and signup"
    )
    otp_length: int = Field(
        default=6,
        ge=4,
        le=10,
        description="Number of digits in a one-time passcode"
    )
    min_phone_digits: int = Field(
        default=10,
        ge=1,
        description="Minimum number of digits in a phone number"
    )
    max_phone_digits: int = Field(
        default=15,
        ge=1,
        le=20,
        description="Maximum number of digits in a phone number"
    )

    # Each backend maps provider errors either to a specific message
    # ("Incorrect password") or to one generic message.
    local_error_messages: ErrorMessageStyle = Field(
        default="specific",
        description="Error message style for the local auth backend"
    )
    sheets_error_messages: ErrorMessageStyle = Field(
        default="generic",
        description="Error message style for the Google Sheets auth backend"
    )

    def error_style_for(self, backend: str) -> ErrorMessageStyle:
        """Get the configured error message style for a backend."""
        return getattr(self, f"{backend}_error_messages", "generic")


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Logging
    debug_mode: bool = Field(
        default=False,
        description="Log at DEBUG regardless of log_level"
    )
    log_level: str = Field(
        default="INFO",
        description="Log level for the structured logger"
    )

    # Persistence
    storage_backend: Literal["local", "sheets"] = Field(
        default="local",
        description="Where expenses and users are persisted"
    )
    data_dir: str = Field(
        default="data",
        description="Directory for the local JSON backend"
    )

    # Display
    currency_symbol: str = Field(
        default="₹",
        description="Currency symbol used when formatting amounts"
    )
    new_highlight_ms: int = Field(
        default=1600,
        ge=0,
        description="How long a freshly created expense stays highlighted"
    )
    deletion_transition_ms: int = Field(
        default=380,
        ge=0,
        le=999,
        description="Length of the pending-deletion transition"
    )
    recent_limit: int = Field(
        default=5,
        ge=1,
        description="Number of recent transactions on the overview"
    )
    breakdown_limit: int = Field(
        default=6,
        ge=1,
        description="Number of categories listed under the donut chart"
    )

    # Donut chart geometry
    chart_size: float = Field(
        default=170.0,
        gt=0,
        description="Donut chart diameter"
    )
    chart_stroke_width: float = Field(
        default=22.0,
        gt=0,
        description="Donut ring thickness"
    )
    chart_min_arc: float = Field(
        default=2.0,
        ge=0,
        description="Arcs shorter than this are not drawn"
    )

    @property
    def data_path(self) -> Path:
        """Get the local data directory as a Path."""
        return Path(self.data_dir)

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug_mode else self.log_level

    @property
    def new_highlight_seconds(self) -> float:
        return self.new_highlight_ms / 1000

    @property
    def deletion_transition_seconds(self) -> float:
        return self.deletion_transition_ms / 1000


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Note: These are loaded lazily to allow partial configuration

    @property
    def google_sheets(self) -> GoogleSheetsSettings:
        return GoogleSheetsSettings()

    @property
    def auth(self) -> AuthSettings:
        return AuthSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        app = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)
        app = None

    try:
        _ = settings.auth
        results["auth"] = True
    except Exception as e:
        results["auth"] = False
        results["auth_error"] = str(e)

    # Google Sheets is only required by the remote-backed variant
    if app is not None and app.storage_backend == "local":
        results["google_sheets"] = True
    else:
        try:
            _ = settings.google_sheets
            results["google_sheets"] = True
        except Exception as e:
            results["google_sheets"] = False
            results["google_sheets_error"] = str(e)

    return results
