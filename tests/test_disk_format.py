import subprocess
from types import SimpleNamespace
from unittest import mock

import pytest

from device_manager.backend import disk_format
from device_manager.backend.disk_format import (
    BlkidDiskFormat,
    DiskFormatQuery,
    PARTITIONED_FORMAT,
    parse_export,
)
from device_manager.backend.errors import DiskFormatError


def _completed(returncode=0, stdout="", stderr=""):
    return SimpleNamespace(returncode=returncode, stdout=stdout, stderr=stderr)


def test_blkid_reports_filesystem_type(monkeypatch):
    run_mock = mock.Mock(return_value=_completed(stdout="DEVNAME=/dev/sdb\nTYPE=ext4\n"))
    monkeypatch.setattr(disk_format.subprocess, "run", run_mock)

    assert BlkidDiskFormat().get_disk_format("/dev/sdb") == "ext4"

    cmd = run_mock.call_args[0][0]
    assert cmd == ["blkid", "-p", "-s", "TYPE", "-s", "PTTYPE", "-o", "export", "/dev/sdb"]


def test_blkid_no_signature_is_unformatted(monkeypatch):
    monkeypatch.setattr(disk_format.subprocess, "run", mock.Mock(return_value=_completed(returncode=2)))

    assert BlkidDiskFormat().get_disk_format("/dev/sdb") == ""


def test_blkid_partition_table_only(monkeypatch):
    monkeypatch.setattr(
        disk_format.subprocess, "run", mock.Mock(return_value=_completed(stdout="DEVNAME=/dev/sdb\nPTTYPE=gpt\n"))
    )

    assert BlkidDiskFormat().get_disk_format("/dev/sdb") == PARTITIONED_FORMAT


def test_blkid_failure_raises(monkeypatch):
    monkeypatch.setattr(
        disk_format.subprocess, "run", mock.Mock(return_value=_completed(returncode=4, stderr="bad things\n"))
    )

    with pytest.raises(DiskFormatError, match="exit 4"):
        BlkidDiskFormat().get_disk_format("/dev/sdb")


def test_blkid_missing_binary(monkeypatch):
    monkeypatch.setattr(disk_format.subprocess, "run", mock.Mock(side_effect=FileNotFoundError("blkid")))

    with pytest.raises(DiskFormatError, match="not found") as excinfo:
        BlkidDiskFormat().get_disk_format("/dev/sdb")

    assert isinstance(excinfo.value.cause, FileNotFoundError)


def test_blkid_timeout(monkeypatch):
    monkeypatch.setattr(
        disk_format.subprocess, "run", mock.Mock(side_effect=subprocess.TimeoutExpired(cmd="blkid", timeout=1))
    )

    with pytest.raises(DiskFormatError, match="timed out"):
        BlkidDiskFormat(timeout=1).get_disk_format("/dev/sdb")


def test_parse_export_ignores_junk():
    assert parse_export("TYPE=xfs\n\nnoise\nUUID=a=b\n") == {"TYPE": "xfs", "UUID": "a=b"}


def test_blkid_satisfies_protocol():
    assert isinstance(BlkidDiskFormat(), DiskFormatQuery)
