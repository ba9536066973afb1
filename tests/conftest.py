"""Shared fixtures for the diskmon test suite.

`fake_statvfs` replaces os.statvfs with a table of canned results so tests
never depend on the filesystems of the machine running them.
"""

from __future__ import annotations

import errno
import os
from types import SimpleNamespace

import pytest

from diskmon.disk.stats import VolumeStats


def statvfs_result(
    bsize: int = 4096,
    blocks: int = 1000,
    bfree: int = 500,
    bavail: int = 500,
    files: int = 100,
    ffree: int = 50,
    favail: int = 50,
) -> SimpleNamespace:
    return SimpleNamespace(
        f_bsize=bsize,
        f_frsize=bsize,
        f_blocks=blocks,
        f_bfree=bfree,
        f_bavail=bavail,
        f_files=files,
        f_ffree=ffree,
        f_favail=favail,
        f_flag=0,
        f_namemax=255,
    )


def used_share_result(share: float, blocks: int = 10000) -> SimpleNamespace:
    """statvfs result whose used share is exactly `share` of `blocks`."""
    bavail = blocks - round(blocks * share)
    return statvfs_result(blocks=blocks, bfree=bavail, bavail=bavail)


@pytest.fixture
def make_stats():
    def _make(**kwargs) -> VolumeStats:
        defaults = dict(
            bsize=4096, blocks=1000, bfree=500, bavail=500, files=100, ffree=50, favail=50
        )
        defaults.update(kwargs)
        return VolumeStats(**defaults)

    return _make


@pytest.fixture
def fake_statvfs(monkeypatch):
    """
    Map paths to statvfs results.

    Values may be a result namespace or an int errno, which is raised as
    OSError. Unknown paths raise ENOENT. Every call is recorded in `calls`.
    """
    table: dict[str, object] = {}
    calls: list[str] = []

    def _statvfs(path):
        path = os.fspath(path)
        calls.append(path)
        value = table.get(path, errno.ENOENT)
        if isinstance(value, int):
            raise OSError(value, os.strerror(value), path)
        return value

    monkeypatch.setattr(os, "statvfs", _statvfs)
    return SimpleNamespace(table=table, calls=calls)


@pytest.fixture
def vfs():
    """Builders for canned statvfs results."""
    return SimpleNamespace(result=statvfs_result, used_share=used_share_result)
