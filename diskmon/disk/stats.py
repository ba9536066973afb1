"""
Volume statistics for a mount point.
Wraps statvfs and derives the usage ratios the checks work with.
"""

import errno
import logging
import os
from dataclasses import dataclass

from diskmon.exceptions import ProbeError

logger = logging.getLogger(__name__)

# statvfs errno meaning "no filesystem here", reported as missing stats
NOT_FOUND_CODE = errno.ENOENT


@dataclass(frozen=True)
class VolumeStats:
    """Snapshot of one filesystem, taken fresh on every probe."""

    bsize: int
    blocks: int
    bfree: int
    bavail: int
    files: int
    ffree: int
    favail: int

    @classmethod
    def from_statvfs(cls, result: os.statvfs_result) -> "VolumeStats":
        return cls(
            bsize=int(result.f_bsize),
            blocks=int(result.f_blocks),
            bfree=int(result.f_bfree),
            bavail=int(result.f_bavail),
            files=int(result.f_files),
            ffree=int(result.f_ffree),
            favail=int(result.f_favail),
        )

    @property
    def size(self) -> int:
        return self.bsize * self.blocks

    @property
    def available(self) -> int:
        return self.bsize * self.bavail

    @property
    def used(self) -> int:
        return self.size - self.available

    @property
    def used_share(self) -> float:
        size = self.size
        if size == 0:
            return 0.0
        return self.used / size

    @property
    def inodes_used(self) -> int:
        # favail > files is inconsistent data, clamp instead of going negative
        return max(self.files - self.favail, 0)

    @property
    def inodes_used_share(self) -> float:
        if self.files == 0:
            return 0.0
        return self.inodes_used / self.files


def probe(mount_point: str | os.PathLike) -> VolumeStats | None:
    """
    Read volume statistics for the filesystem containing mount_point.

    Args:
        mount_point: Any path on the filesystem to inspect.

    Returns:
        VolumeStats on success, None when the path has no filesystem
        statistics on this host.

    Raises:
        ProbeError: If statvfs fails for any other reason.
    """
    try:
        result = os.statvfs(mount_point)
    except OSError as e:
        if e.errno == NOT_FOUND_CODE:
            logger.debug("statvfs(%r): no such filesystem", mount_point)
            return None
        raise ProbeError(os.fspath(mount_point), e.errno) from e
    return VolumeStats.from_statvfs(result)
