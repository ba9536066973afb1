__version__ = "0.1.0"

from .checks import CapacityRate, CheckMethod, Verdict, parse_check_method
from .config import ApplicationConfig, LoggerConfig, TargetConfig, load_app_config
from .disk import VolumeStats, probe
from .events import CheckEvent, EventKind, LoggingEventSink
from .exceptions import (
    CheckError,
    ConfigError,
    DiskmonError,
    ProbeError,
    StatsNotFoundError,
    ThresholdExceededError,
    ValidationError,
)
from .manager import CheckManager
from .scheduler import Scheduler, SchedulerState

__all__ = [
    "ApplicationConfig",
    "CapacityRate",
    "CheckError",
    "CheckEvent",
    "CheckManager",
    "CheckMethod",
    "ConfigError",
    "DiskmonError",
    "EventKind",
    "LoggerConfig",
    "LoggingEventSink",
    "ProbeError",
    "Scheduler",
    "SchedulerState",
    "StatsNotFoundError",
    "TargetConfig",
    "ThresholdExceededError",
    "ValidationError",
    "Verdict",
    "VolumeStats",
    "load_app_config",
    "parse_check_method",
    "probe",
]
