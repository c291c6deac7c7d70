"""
Device path helpers.

Device and device-filesystem paths are opaque strings. The only thing
derived from them is the short name: the final path segment, which
keys into the sysfs block and filesystem trees.
"""

import re
from typing import Optional


class DevicePath:
    """Syntactic helpers for device path strings."""

    # Kernel block device names as they appear under /sys/block
    BLOCK_NAME_PATTERN = re.compile(r'^(sd[a-z]+|nvme\d+n\d+|hd[a-z]|vd[a-z]+|xvd[a-z]+|mmcblk\d+|dm-\d+|loop\d+)$')

    @staticmethod
    def short_name(path: str) -> str:
        """
        Return the final segment of a path.

        Trailing separators are ignored. An empty path gives ``"."`` and
        a path made only of separators gives ``"/"``.

        Args:
            path: Device or device-filesystem path

        Returns:
            Final path segment
        """
        if path == "":
            return "."
        stripped = path.rstrip("/")
        if stripped == "":
            return "/"
        return stripped.rsplit("/", 1)[-1]

    @staticmethod
    def looks_like_block_device(path: str) -> bool:
        """
        Check whether the short name looks like a whole block device.

        This is a hint for the CLI only; the controller accepts any string.

        Args:
            path: Device path

        Returns:
            True if the short name matches a known kernel naming scheme
        """
        return bool(DevicePath.BLOCK_NAME_PATTERN.match(DevicePath.short_name(path)))

    @staticmethod
    def parent_hint(path: str) -> Optional[str]:
        """
        Guess the whole-disk name for a partition path.

        ``/dev/sdb1`` gives ``sdb`` and ``/dev/nvme0n1p2`` gives
        ``nvme0n1``. Returns None when the name is not a partition.
        """
        name = DevicePath.short_name(path)
        match = re.match(r'^((?:nvme\d+n\d+|mmcblk\d+))p\d+$', name)
        if match:
            return match.group(1)
        match = re.match(r'^((?:sd|hd|vd|xvd)[a-z]+)\d+$', name)
        if match:
            return match.group(1)
        return None
