"""
Structured check events.

Checks and the scheduler never format output themselves; they hand a
CheckEvent to a sink. LoggingEventSink is the default and renders events
through the standard logging tree.
"""

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Protocol

from diskmon.exceptions import (
    CheckError,
    ProbeError,
    StatsNotFoundError,
    ThresholdExceededError,
)

logger = logging.getLogger("diskmon.events")


class EventKind(Enum):
    OK = "ok"
    THRESHOLD_EXCEEDED = "threshold_exceeded"
    STATS_NOT_FOUND = "stats_not_found"
    PROBE_ERROR = "probe_error"


@dataclass(frozen=True)
class CheckEvent:
    """Result of checking one target once."""

    kind: EventKind
    mount_point: str
    current: float | None = None
    threshold: float | None = None
    code: int | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.kind is EventKind.OK

    @property
    def is_alarm(self) -> bool:
        """True for the monitored condition itself, not a monitoring failure."""
        return self.kind is EventKind.THRESHOLD_EXCEEDED

    @classmethod
    def from_error(cls, err: CheckError) -> "CheckEvent":
        if isinstance(err, ThresholdExceededError):
            return cls(
                kind=EventKind.THRESHOLD_EXCEEDED,
                mount_point=err.mount_point,
                current=err.current,
                threshold=err.threshold,
                message=str(err),
            )
        if isinstance(err, StatsNotFoundError):
            return cls(kind=EventKind.STATS_NOT_FOUND, mount_point=err.mount_point, message=str(err))
        if isinstance(err, ProbeError):
            return cls(
                kind=EventKind.PROBE_ERROR,
                mount_point=err.mount_point,
                code=err.code,
                message=str(err),
            )
        raise TypeError(f"unsupported check error: {type(err).__name__}")

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind.value
        return data


class EventSink(Protocol):
    def emit(self, event: CheckEvent) -> None: ...


class LoggingEventSink:
    """Renders check events as log records."""

    def __init__(self, log: logging.Logger | None = None):
        self.logger = log or logger

    def emit(self, event: CheckEvent) -> None:
        extra = {"diskmon_event": event.to_dict()}
        if event.ok:
            self.logger.info(
                "the mount_point: %s capacity ok %s <= %s",
                event.mount_point,
                event.current,
                event.threshold,
                extra=extra,
            )
        else:
            self.logger.error("%s", event.message, extra=extra)
