import os
import stat
from typing import Dict, List, Optional, Tuple, Union

import pytest

from device_manager.backend.sysfs import Sysfs


def make_stat(mode: int) -> os.stat_result:
    return os.stat_result((mode, 0, 0, 1, 0, 0, 0, 0, 0, 0))


DIR_STAT = make_stat(stat.S_IFDIR | 0o755)
FILE_STAT = make_stat(stat.S_IFREG | 0o444)


class FakeSysfs(Sysfs):
    """Sysfs that records writes and serves canned stat results."""

    def __init__(self, root: str = "/sys"):
        super().__init__(root)
        self.writes: List[Tuple[str, bytes, int]] = []
        self.write_error: Optional[OSError] = None
        self.entries: Dict[str, Union[os.stat_result, OSError]] = {}
        self.stat_calls: List[str] = []

    def write_control_file(self, path, data, mode=0o644):
        self.writes.append((path, data, mode))
        if self.write_error is not None:
            raise self.write_error

    def stat(self, path):
        self.stat_calls.append(path)
        entry = self.entries.get(path)
        if entry is None:
            raise FileNotFoundError(2, "No such file or directory", path)
        if isinstance(entry, OSError):
            raise entry
        return entry


class FakeDiskFormat:
    """DiskFormatQuery returning a fixed type or raising."""

    def __init__(self, fstype: str = "ext4", error: Optional[Exception] = None):
        self.fstype = fstype
        self.error = error
        self.calls: List[str] = []

    def get_disk_format(self, device_path: str) -> str:
        self.calls.append(device_path)
        if self.error is not None:
            raise self.error
        return self.fstype


@pytest.fixture
def fake_sysfs():
    return FakeSysfs()


@pytest.fixture
def ext4_format():
    return FakeDiskFormat("ext4")


@pytest.fixture
def disk_format():
    """Factory for FakeDiskFormat: ``disk_format("xfs")`` or ``disk_format(error=...)``."""
    return FakeDiskFormat


@pytest.fixture
def dir_stat():
    return DIR_STAT


@pytest.fixture
def file_stat():
    return FILE_STAT
