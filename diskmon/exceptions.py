"""
Errors raised by diskmon.

ConfigError and its subclasses are fatal at startup. Every per-target failure
is a CheckError; the scheduler catches those at the sweep boundary, so none
of them ever stop the run loop.
"""


class DiskmonError(Exception):
    """Base exception for diskmon."""

    pass


class ConfigError(DiskmonError):
    """Raised for configuration that cannot be loaded or parsed."""

    pass


class ValidationError(ConfigError):
    """Raised when configuration validation fails."""

    pass


class CheckError(DiskmonError):
    """Raised when a single check of a mount point fails."""

    def __init__(self, mount_point: str, message: str):
        super().__init__(message)
        self.mount_point = mount_point


class ProbeError(CheckError):
    """Raised when statvfs fails with anything but the not-found code."""

    def __init__(self, mount_point: str, code: int):
        super().__init__(mount_point, f"statvfs({mount_point!r}) returned {code}")
        self.code = code


class StatsNotFoundError(CheckError):
    """Raised when the mount point has no filesystem statistics on this host."""

    def __init__(self, mount_point: str):
        super().__init__(mount_point, f"fs stats not found...mount_point: {mount_point}")


class ThresholdExceededError(CheckError):
    """Raised when the usage share of a mount point is over its threshold."""

    def __init__(self, mount_point: str, current: float, threshold: float):
        super().__init__(
            mount_point,
            f"the mount_point: {mount_point} capacity over its threshold "
            f"{current} > {threshold}",
        )
        self.current = current
        self.threshold = threshold
