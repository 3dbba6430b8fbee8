"""Configuration module - public API.

Centralized configuration management using Pydantic BaseSettings.

Exports:
    settings: Singleton Settings instance
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Localization engine settings class
"""

from lokal.configuration.i18n import PROVIDER_NAMES, I18nSettings
from lokal.configuration.settings import Settings, settings

__all__ = ["Settings", "I18nSettings", "PROVIDER_NAMES", "settings"]
