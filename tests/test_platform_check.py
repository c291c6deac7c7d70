import pytest

from device_manager.utils import platform_check
from device_manager.utils.platform_check import OSType


def test_get_os_type(monkeypatch):
    monkeypatch.setattr(platform_check.platform, "system", lambda: "Linux")
    assert platform_check.get_os_type() is OSType.LINUX

    monkeypatch.setattr(platform_check.platform, "system", lambda: "Darwin")
    assert platform_check.get_os_type() is OSType.UNKNOWN

    monkeypatch.setattr(platform_check.platform, "system", lambda: "Plan9")
    assert platform_check.get_os_type() is OSType.UNKNOWN


def test_is_admin_uses_euid(monkeypatch):
    monkeypatch.setattr(platform_check.os, "geteuid", lambda: 0, raising=False)
    assert platform_check.is_admin() is True

    monkeypatch.setattr(platform_check.os, "geteuid", lambda: 1000, raising=False)
    assert platform_check.is_admin() is False


def test_has_sysfs(tmp_path):
    assert platform_check.has_sysfs(str(tmp_path)) is False
    (tmp_path / "block").mkdir()
    assert platform_check.has_sysfs(str(tmp_path)) is True


def test_check_requirements_reports_missing(monkeypatch):
    monkeypatch.setattr(platform_check.shutil, "which", lambda name: None)

    assert platform_check.check_requirements() == (False, ["blkid"])


def test_get_platform(tmp_path):
    info = platform_check.get_platform(str(tmp_path))

    assert info.has_sysfs is False
    assert "Sysfs: False" in str(info)
