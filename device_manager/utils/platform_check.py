"""
Platform detection and system capability checking.

The sysfs control tree only exists on Linux, and writing to it
needs root. This module answers both questions for the CLI.
"""

import os
import platform
import shutil
from typing import List, Tuple
from dataclasses import dataclass
from enum import Enum


class OSType(Enum):
    """Operating system types."""
    LINUX = "linux"
    UNKNOWN = "unknown"


@dataclass
class PlatformInfo:
    """Platform information container."""
    os_type: OSType
    os_release: str
    is_admin: bool
    has_sysfs: bool
    python_version: str
    architecture: str

    def __str__(self) -> str:
        return (
            f"Platform: {self.os_type.value}\n"
            f"Kernel: {self.os_release}\n"
            f"Root: {self.is_admin}\n"
            f"Sysfs: {self.has_sysfs}\n"
            f"Python: {self.python_version}\n"
            f"Architecture: {self.architecture}"
        )


# Utilities used by the default disk format collaborator
REQUIRED_UTILITIES = ["blkid"]


def get_os_type() -> OSType:
    """Detect the operating system type."""
    system = platform.system().lower()

    if system == "linux":
        return OSType.LINUX
    return OSType.UNKNOWN


def is_admin() -> bool:
    """
    Check if the current process runs as root.

    Returns:
        True if the effective uid is 0, False otherwise
    """
    geteuid = getattr(os, "geteuid", None)
    if geteuid is None:
        return False
    return geteuid() == 0


def has_sysfs(sysfs_root: str = "/sys") -> bool:
    """Check whether a sysfs tree with a block directory is mounted."""
    return os.path.isdir(os.path.join(sysfs_root, "block"))


def check_utility(utility_name: str) -> bool:
    """
    Check if a command-line utility is available.

    Args:
        utility_name: Name of the utility to check

    Returns:
        True if utility is found, False otherwise
    """
    return shutil.which(utility_name) is not None


def check_requirements() -> Tuple[bool, List[str]]:
    """
    Check if all required utilities are available.

    Returns:
        Tuple of (all_present, missing_utilities)
    """
    missing = [utility for utility in REQUIRED_UTILITIES if not check_utility(utility)]
    return (len(missing) == 0, missing)


def get_platform(sysfs_root: str = "/sys") -> PlatformInfo:
    """
    Get platform information relevant to device control.

    Args:
        sysfs_root: Mount point of the sysfs tree

    Returns:
        PlatformInfo object with system details
    """
    return PlatformInfo(
        os_type=get_os_type(),
        os_release=platform.release(),
        is_admin=is_admin(),
        has_sysfs=has_sysfs(sysfs_root),
        python_version=platform.python_version(),
        architecture=platform.machine(),
    )

