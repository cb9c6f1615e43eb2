"""Configuration management for stud."""

from stud.config.exceptions import ConfigurationError, InvalidConfigurationError
from stud.config.models import StudConfig

__all__ = [
    "ConfigurationError",
    "InvalidConfigurationError",
    "StudConfig",
]
