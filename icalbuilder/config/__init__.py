"""Configuration package."""

from .settings import IcalBuilderSettings, get_settings, reset_settings

__all__ = ["IcalBuilderSettings", "get_settings", "reset_settings"]
