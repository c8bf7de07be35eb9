"""Configuration package."""

from expensify.config.settings import (
    AppSettings,
    AuthSettings,
    GoogleSheetsSettings,
    Settings,
    get_settings,
    validate_all_settings,
)
from expensify.config.messages import (
    AuthMessageCatalog,
    catalog_for_backend,
)

__all__ = [
    "AppSettings",
    "AuthMessageCatalog",
    "AuthSettings",
    "GoogleSheetsSettings",
    "Settings",
    "catalog_for_backend",
    "get_settings",
    "validate_all_settings",
]
