"""
Filesystem type detection.

The controller only depends on the ``DiskFormatQuery`` protocol. Hosts
usually pass their own mount/format helper; ``BlkidDiskFormat`` is the
default used by the CLI and probes the device with ``blkid``.
"""

import subprocess
from typing import Dict, Protocol, runtime_checkable

from ..utils.logger import get_logger
from .errors import DiskFormatError

logger = get_logger(__name__)

# blkid exit status when no known signature was found on the device
BLKID_NOT_FOUND = 2

# Returned when a partition table but no filesystem was found, so callers
# never mistake a partitioned disk for an empty one
PARTITIONED_FORMAT = "unknown data, probably partitions"


@runtime_checkable
class DiskFormatQuery(Protocol):
    """Reports the on-disk filesystem type of a device."""

    def get_disk_format(self, device_path: str) -> str:
        """
        Return the filesystem type of ``device_path``.

        An empty string means the device carries no recognised format.

        Raises:
            Exception: If the format cannot be detected
        """
        ...


class BlkidDiskFormat:
    """``DiskFormatQuery`` backed by ``blkid -p``."""

    def __init__(self, blkid: str = "blkid", timeout: float = 30):
        self.blkid = blkid
        self.timeout = timeout

    def get_disk_format(self, device_path: str) -> str:
        """
        Probe a device for its filesystem type.

        Args:
            device_path: Block device to probe

        Returns:
            Filesystem type (e.g. ``ext4``), ``""`` if unformatted, or
            ``PARTITIONED_FORMAT`` if only a partition table was found

        Raises:
            DiskFormatError: If blkid is missing, times out or fails
        """
        cmd = [self.blkid, "-p", "-s", "TYPE", "-s", "PTTYPE", "-o", "export", device_path]
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except FileNotFoundError as e:
            raise DiskFormatError(f"{self.blkid} not found - please install util-linux", device_path, e) from e
        except subprocess.TimeoutExpired as e:
            raise DiskFormatError(f"{self.blkid} timed out probing {device_path}", device_path, e) from e

        if result.returncode == BLKID_NOT_FOUND:
            logger.debug(f"No filesystem signature on {device_path}")
            return ""

        if result.returncode != 0:
            error = (result.stderr or result.stdout).strip()
            raise DiskFormatError(
                f"{self.blkid} failed on {device_path} (exit {result.returncode}): {error}",
                device_path,
            )

        fields = parse_export(result.stdout)
        fstype = fields.get("TYPE", "")
        pttype = fields.get("PTTYPE", "")

        if fstype:
            return fstype
        if pttype:
            logger.debug(f"{device_path} has a {pttype} partition table")
            return PARTITIONED_FORMAT
        return ""


def parse_export(output: str) -> Dict[str, str]:
    """Parse ``blkid -o export`` output into a dict of KEY=value pairs."""
    fields = {}
    for line in output.splitlines():
        key, sep, value = line.strip().partition("=")
        if sep:
            fields[key] = value
    return fields
