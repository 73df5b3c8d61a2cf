"""
Configuration module with strongly typed settings.

Usage:
    from wagerbook.config import settings

    print(settings.history_path)
    print(settings.observability.log_level)
"""
from .settings import (
    Settings,
    StorageSettings,
    ObservabilitySettings,
)

# Singleton instance - validates on import
settings = Settings()

__all__ = [
    "settings",
    "Settings",
    "StorageSettings",
    "ObservabilitySettings",
]
