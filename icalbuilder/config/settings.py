"""Settings management using Pydantic for type validation and configuration."""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import Field, PrivateAttr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_DOMAIN = "localhost"
DEFAULT_PROD_ID = "//icalbuilder//icalbuilder//EN"

_YAML_KEYS = ("domain", "prod_id", "timezone", "log_level", "log_file")


class IcalBuilderSettings(BaseSettings):
    """Library defaults with environment variable and YAML support.

    Priority: explicit keyword arguments > environment (``ICALBUILDER_*``)
    > YAML file > defaults.
    """

    _explicit_args: set = PrivateAttr(default_factory=set)

    # Calendar defaults
    domain: Optional[str] = Field(
        default=DEFAULT_DOMAIN, description="Domain appended to event UIDs"
    )
    prod_id: str = Field(
        default=DEFAULT_PROD_ID, description="Product identifier: //company//product//LANG"
    )
    timezone: Optional[str] = Field(
        default=None, description="Default calendar timezone (IANA name)"
    )

    # Logging
    log_level: str = Field(
        default="WARNING", description="Log level: DEBUG, VERBOSE, INFO, WARNING, ERROR"
    )
    log_file: Optional[str] = Field(default=None, description="Optional log file path")

    # Configuration file
    config_file: Optional[Path] = Field(
        default=None, description="YAML file overriding the defaults above"
    )

    model_config = SettingsConfigDict(
        env_prefix="ICALBUILDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._explicit_args = set(kwargs.keys())
        self._load_yaml_config()

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    def _find_config_file(self) -> Optional[Path]:
        """Find the YAML configuration file, if any."""
        candidates = []
        if self.config_file is not None:
            candidates.append(Path(self.config_file))
        candidates.append(Path.cwd() / "config" / "config.yaml")
        candidates.append(Path.home() / ".config" / "icalbuilder" / "config.yaml")

        for candidate in candidates:
            if candidate.is_file():
                return candidate
        return None

    def _load_yaml_config(self) -> None:
        """Load configuration from YAML file if it exists."""
        config_file = self._find_config_file()
        if not config_file:
            return

        try:
            with config_file.open(encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Could not load YAML config from %s: %s", config_file, e)
            return

        if not isinstance(config_data, dict):
            return

        section = config_data.get("icalbuilder", config_data)
        if not isinstance(section, dict):
            return

        for key in _YAML_KEYS:
            from_env = f"ICALBUILDER_{key.upper()}" in os.environ
            if key in section and key not in self._explicit_args and not from_env:
                value = section[key]
                if key == "log_level" and isinstance(value, str):
                    value = value.upper()
                setattr(self, key, value)

        logger.debug("Loaded settings from %s", config_file)


_settings_instance: Optional[IcalBuilderSettings] = None


def get_settings() -> IcalBuilderSettings:
    """Get the global settings instance, creating it lazily if needed."""
    if globals()["_settings_instance"] is None:
        globals()["_settings_instance"] = IcalBuilderSettings()
    return globals()["_settings_instance"]


def reset_settings() -> None:
    """Reset the global settings instance (primarily for testing)."""
    globals()["_settings_instance"] = None
