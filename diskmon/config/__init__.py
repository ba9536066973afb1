"""
Configuration loading and validation for diskmon.
"""

from diskmon.exceptions import ConfigError, ValidationError

from .configs import (
    DEFAULT_INTERVAL,
    ApplicationConfig,
    LoggerConfig,
    TargetConfig,
    load_app_config,
)
from .duration import parse_duration

__all__ = [
    "DEFAULT_INTERVAL",
    "ApplicationConfig",
    "ConfigError",
    "LoggerConfig",
    "TargetConfig",
    "ValidationError",
    "load_app_config",
    "parse_duration",
]
