"""
Tests for VolumeStats and the statvfs probe.
"""

import errno

import pytest

from diskmon.disk.stats import NOT_FOUND_CODE, VolumeStats, probe
from diskmon.exceptions import CheckError, ProbeError


class TestVolumeStatsDerived:
    """Derived values computed from the raw counts."""

    def test_sizes(self, make_stats):
        stats = make_stats(bsize=4096, blocks=1000, bavail=250)
        assert stats.size == 4096 * 1000
        assert stats.available == 4096 * 250
        assert stats.used == 4096 * 750

    def test_used_share(self, make_stats):
        stats = make_stats(blocks=1000, bavail=250)
        assert stats.used_share == pytest.approx(0.75)

    def test_used_share_zero_size(self, make_stats):
        assert make_stats(blocks=0, bfree=0, bavail=0).used_share == 0.0
        assert make_stats(bsize=0).used_share == 0.0

    def test_used_share_uses_bavail_not_bfree(self, make_stats):
        # reserved blocks count as used for unprivileged users
        stats = make_stats(blocks=1000, bfree=100, bavail=50)
        assert stats.used_share == pytest.approx(0.95)

    def test_inodes(self, make_stats):
        stats = make_stats(files=200, ffree=60, favail=50)
        assert stats.inodes_used == 150
        assert stats.inodes_used_share == pytest.approx(0.75)

    def test_inodes_used_share_zero_files(self, make_stats):
        # filesystems such as btrfs report no inode counts
        stats = make_stats(files=0, ffree=0, favail=0)
        assert stats.inodes_used == 0
        assert stats.inodes_used_share == 0.0

    def test_inodes_used_saturates_on_inconsistent_counts(self, make_stats):
        stats = make_stats(files=10, ffree=20, favail=20)
        assert stats.inodes_used == 0
        assert stats.inodes_used_share == 0.0

    def test_is_immutable(self, make_stats):
        stats = make_stats()
        with pytest.raises(AttributeError):
            stats.blocks = 1


class TestProbe:
    """Mapping of statvfs outcomes onto stats, None and ProbeError."""

    def test_success_copies_raw_values(self, fake_statvfs, vfs):
        fake_statvfs.table["/data"] = vfs.result(
            bsize=512, blocks=2000, bfree=700, bavail=600, files=300, ffree=120, favail=100
        )

        stats = probe("/data")

        assert stats == VolumeStats(
            bsize=512, blocks=2000, bfree=700, bavail=600, files=300, ffree=120, favail=100
        )
        assert fake_statvfs.calls == ["/data"]

    def test_not_found_returns_none(self, fake_statvfs):
        fake_statvfs.table["/missing"] = NOT_FOUND_CODE
        assert probe("/missing") is None

    @pytest.mark.parametrize("code", [errno.EACCES, errno.EIO, errno.ENOTDIR])
    def test_other_errors_raise_probe_error(self, fake_statvfs, code):
        fake_statvfs.table["/broken"] = code

        with pytest.raises(ProbeError) as exc_info:
            probe("/broken")

        assert exc_info.value.mount_point == "/broken"
        assert exc_info.value.code == code
        assert isinstance(exc_info.value, CheckError)

    def test_accepts_path_objects(self, fake_statvfs, vfs, tmp_path):
        fake_statvfs.table[str(tmp_path)] = vfs.result()
        assert probe(tmp_path) is not None

    def test_real_filesystem(self, tmp_path):
        stats = probe(tmp_path)
        assert stats is not None
        assert stats.size > 0
        assert 0.0 <= stats.used_share <= 1.0

    def test_real_missing_path(self, tmp_path):
        assert probe(tmp_path / "does-not-exist") is None
