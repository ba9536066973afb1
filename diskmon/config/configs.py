"""
Application configuration.

Built once at startup, either from the environment or from a YAML file, and
passed explicitly to whatever needs it.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from diskmon.checks import CheckMethod, parse_check_method
from diskmon.config.duration import parse_duration
from diskmon.exceptions import ConfigError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = "10s"

LOG_LEVELS = ["CRASH", "ERROR", "WARN", "INFO", "DEBUG", "TRACE"]


def try_get_env_var(var_name: str) -> str | None:
    """Return the value of var_name, or None if it is unset."""
    return os.environ.get(var_name)


@dataclass
class TargetConfig:
    """One mount point to watch."""

    mount_point: str = ""
    check_method: str = ""
    threshold: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TargetConfig":
        if not isinstance(data, dict):
            raise ConfigError(f"target must be a table, got {type(data).__name__}")
        result = cls()
        for key in ("mount_point", "check_method", "threshold"):
            value = data.get(key)
            if value is not None:
                setattr(result, key, str(value))
        return result

    def get_check_method(self) -> CheckMethod:
        return parse_check_method(self.check_method, self.threshold)

    def validate(self) -> None:
        try:
            self.get_check_method()
        except ConfigError as e:
            raise ValidationError(f"invalid target {self.mount_point!r}: {e}") from e


@dataclass
class LoggerConfig:
    """Logging and error notification settings."""

    chan_size: int | None = None
    is_async: bool = True
    level: str | None = None
    airbrake_host: str | None = None
    airbrake_project_id: str | None = None
    airbrake_project_key: str | None = None
    airbrake_environment: str | None = None

    @classmethod
    def from_env(cls) -> "LoggerConfig":
        return cls(
            airbrake_host=try_get_env_var("AIRBRAKE_HOST"),
            airbrake_project_id=try_get_env_var("AIRBRAKE_PROJECT_ID"),
            airbrake_project_key=try_get_env_var("AIRBRAKE_PROJECT_KEY"),
            airbrake_environment=try_get_env_var("AIRBRAKE_ENVIRONMENT"),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LoggerConfig":
        """Overlay a [logger] table on top of the environment defaults."""
        if not isinstance(data, dict):
            raise ConfigError(f"logger must be a table, got {type(data).__name__}")
        result = cls.from_env()
        chan_size = data.get("chan_size")
        if chan_size is not None:
            # bool is an int subclass, reject it explicitly
            if isinstance(chan_size, bool) or not isinstance(chan_size, int):
                raise ConfigError(f"illegal chan_size: {chan_size!r}")
            result.chan_size = chan_size
        is_async = data.get("is_async")
        if is_async is not None:
            if not isinstance(is_async, bool):
                raise ConfigError(f"illegal is_async: {is_async!r}")
            result.is_async = is_async
        for key in (
            "level",
            "airbrake_host",
            "airbrake_project_id",
            "airbrake_project_key",
            "airbrake_environment",
        ):
            if data.get(key) is not None:
                setattr(result, key, str(data[key]))
        return result

    @property
    def airbrake_enabled(self) -> bool:
        return bool(self.airbrake_host and self.airbrake_project_id and self.airbrake_project_key)

    def validate(self) -> None:
        if self.level is not None and self.level not in LOG_LEVELS:
            raise ValidationError(f"illegal logger level: {self.level}")
        if self.chan_size is not None and self.chan_size < 1:
            raise ValidationError(f"illegal logger chan_size: {self.chan_size}")


@dataclass
class ApplicationConfig:
    """Everything the monitor needs to start."""

    interval: str = DEFAULT_INTERVAL
    targets: list[TargetConfig] = field(default_factory=list)
    logger: LoggerConfig = field(default_factory=LoggerConfig)

    @classmethod
    def from_env(cls) -> "ApplicationConfig":
        return cls(interval=DEFAULT_INTERVAL, targets=[], logger=LoggerConfig.from_env())

    @classmethod
    def load_from_file(cls, path: str | os.PathLike) -> "ApplicationConfig":
        """
        Load configuration from a YAML file.

        Example:
            interval: 30s
            targets:
              - mount_point: /
                check_method: capacity_rate
                threshold: "0.9"
            logger:
              level: INFO

        Raises:
            ConfigError: If the file cannot be opened, read or parsed.
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"could not open config file of {str(path)!r}: {e}") from e
        except UnicodeDecodeError as e:
            raise ConfigError(f"could not read config file of {str(path)!r}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"could not parse config file of {str(path)!r}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"could not parse config file of {str(path)!r}: not a mapping")

        interval = data.get("interval")
        targets = data.get("targets") or []
        if not isinstance(targets, list):
            raise ConfigError(f"could not parse config file of {str(path)!r}: targets must be a list")

        logger_data = data.get("logger")
        return cls(
            interval=str(interval) if interval is not None else DEFAULT_INTERVAL,
            targets=[TargetConfig.from_dict(t) for t in targets],
            logger=(
                LoggerConfig.from_dict(logger_data)
                if logger_data is not None
                else LoggerConfig.from_env()
            ),
        )

    def add_target(self, target: TargetConfig) -> None:
        self.targets.append(target)

    def get_interval(self) -> float:
        """Return the poll interval in seconds."""
        return parse_duration(self.interval)

    def validate(self) -> None:
        """
        Check the whole configuration before anything starts.

        Raises:
            ValidationError: On the first invalid setting found.
        """
        try:
            self.get_interval()
        except ConfigError as e:
            raise ValidationError(str(e)) from e
        for target in self.targets:
            target.validate()
        self.logger.validate()


def load_app_config(path: str | os.PathLike | None = None) -> ApplicationConfig:
    """Load from path when given, otherwise build defaults from the environment."""
    if path is None:
        return ApplicationConfig.from_env()
    logger.debug("Loading config from %s", path)
    return ApplicationConfig.load_from_file(path)
