"""Configuration management."""

from .paths import AppPaths
from .settings import IndicatorSettings, ScrollSettings, Settings, SettingsManager

__all__ = ["AppPaths", "IndicatorSettings", "ScrollSettings", "Settings", "SettingsManager"]
