"""
Configuration package for the BucketList backend.
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    StorageSettings,
    GeosearchSettings,
    AuthSettings,
    EditSessionSettings,
    settings,
    get_settings,
    reload_settings,
)

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "StorageSettings",
    "GeosearchSettings",
    "AuthSettings",
    "EditSessionSettings",
    "settings",
    "get_settings",
    "reload_settings",
]
