"""
Configuration module - Centralized settings management.

This module provides type-safe configuration management using Pydantic,
supporting environment variables, YAML files, and explicit overrides.

Usage:
    from web_autoclicker.config import get_settings, load_config
    
    # Get global settings (loaded once)
    settings = get_settings()
    
    # Or load fresh settings with overrides
    settings = load_config(replay={"speed": 2.0})

Environment Variables:
    WEB_AUTOCLICKER__REPLAY__SPEED=1.5
    WEB_AUTOCLICKER__RESOLVER__CACHE_SIZE=1000
    WEB_AUTOCLICKER__BROWSER__HEADLESS=false
"""

from web_autoclicker.config.settings import (
    PLAYBACK_SPEEDS,
    Settings,
    BrowserSettings,
    ResolverSettings,
    RecorderSettings,
    ReplaySettings,
    StorageSettings,
    LoggingSettings,
)
from web_autoclicker.config.loader import ConfigLoader, load_config

# Global settings singleton
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings instance (singleton).
    
    Settings are loaded once from environment variables and config files.
    Call reset_settings() to reload.
    
    Returns:
        Global Settings instance
    """
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def reset_settings() -> None:
    """Reset the global settings (forces reload on next get_settings())."""
    global _settings
    _settings = None


__all__ = [
    "PLAYBACK_SPEEDS",
    "Settings",
    "BrowserSettings",
    "ResolverSettings",
    "RecorderSettings",
    "ReplaySettings",
    "StorageSettings",
    "LoggingSettings",
    "ConfigLoader",
    "load_config",
    "get_settings",
    "reset_settings",
]
