"""
Configuration module for the pharmacy API.
"""

from pharmacy_api.config.settings import (
    ProviderSettings,
    Settings,
    get_settings,
)

__all__ = [
    "ProviderSettings",
    "Settings",
    "get_settings",
]
