"""
Mount table lookup used for reporting which device backs a target.
"""

import os
from typing import Any

import psutil


def find_partition(path: str | os.PathLike) -> Any:
    """
    Find the mounted partition containing path.

    The longest matching mount point wins, so /var/log resolves to a /var
    mount rather than to /. Returns None if nothing matches.
    """
    target = os.path.abspath(os.fspath(path))
    best = None
    for part in psutil.disk_partitions(all=True):
        mountpoint = part.mountpoint
        if mountpoint != os.sep and not (
            target == mountpoint or target.startswith(mountpoint.rstrip(os.sep) + os.sep)
        ):
            continue
        if best is None or len(mountpoint) > len(best.mountpoint):
            best = part
    return best
