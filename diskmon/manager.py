"""
Binds one mount point to one check method.
"""

from diskmon.checks import CheckMethod
from diskmon.config.configs import TargetConfig
from diskmon.disk.stats import probe
from diskmon.events import CheckEvent, EventKind, EventSink, LoggingEventSink
from diskmon.exceptions import StatsNotFoundError, ThresholdExceededError


class CheckManager:
    """Runs the configured check against a single mount point."""

    def __init__(
        self,
        mount_point: str,
        check_method: CheckMethod,
        sink: EventSink | None = None,
    ) -> None:
        self._mount_point = mount_point
        self._check_method = check_method
        self._sink = sink or LoggingEventSink()

    @classmethod
    def from_target(cls, target: TargetConfig, sink: EventSink | None = None) -> "CheckManager":
        """
        Build a manager from a configured target.

        Raises:
            ConfigError: If the target's check method or threshold is invalid.
        """
        return cls(target.mount_point, target.get_check_method(), sink=sink)

    @property
    def mount_point(self) -> str:
        return self._mount_point

    @property
    def check_method(self) -> CheckMethod:
        return self._check_method

    def check(self) -> CheckEvent:
        """
        Probe the mount point and evaluate it.

        Returns:
            The OK event, after emitting it to the sink

        Raises:
            StatsNotFoundError: If the mount point has no statistics
            ThresholdExceededError: If usage is above the threshold
            ProbeError: If statvfs failed unexpectedly
        """
        stats = probe(self._mount_point)
        if stats is None:
            raise StatsNotFoundError(self._mount_point)

        verdict = self._check_method.evaluate(stats)
        if verdict.violation:
            raise ThresholdExceededError(self._mount_point, verdict.current, verdict.threshold)

        event = CheckEvent(
            kind=EventKind.OK,
            mount_point=self._mount_point,
            current=verdict.current,
            threshold=verdict.threshold,
        )
        self._sink.emit(event)
        return event

    def __repr__(self) -> str:
        return f"CheckManager(mount_point={self._mount_point!r}, check_method={self._check_method!r})"
