"""
Access to the kernel's sysfs tree.

The controller never touches the filesystem directly. It goes through a
``Sysfs`` instance, which knows where the block and filesystem trees live
and performs the two kinds of access the controller needs: a single write
to a control file and a metadata-only stat. Tests substitute a subclass or
point ``root`` at a temporary directory.
"""

import errno
import os
from typing import Union

from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_SYSFS_ROOT = "/sys"

# Permission bits used if the control file has to be created
CONTROL_FILE_MODE = 0o644


class Sysfs:
    """Path layout and I/O primitives for a sysfs tree."""

    def __init__(self, root: Union[str, "os.PathLike[str]"] = DEFAULT_SYSFS_ROOT):
        self.root = os.fspath(root).rstrip("/")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(root={self.root or '/'!r})"

    def device_state_path(self, device_name: str) -> str:
        """Return the state control file of a block device."""
        return f"{self.root}/block/{device_name}/device/state"

    def filesystem_entry_path(self, fstype: str, entry_name: str) -> str:
        """Return the per-filesystem metadata entry for a device."""
        return f"{self.root}/fs/{fstype}/{entry_name}"

    def write_control_file(self, path: str, data: bytes, mode: int = CONTROL_FILE_MODE) -> None:
        """
        Write ``data`` to a control file in one call.

        The file is opened write-only with truncation, and created with
        ``mode`` if it does not exist. Nothing is read back.

        Raises:
            OSError: On any failure to open or write the file, including
                a path the OS cannot represent (EINVAL)
        """
        logger.debug(f"Writing {data!r} to {path!r}")
        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
        except ValueError as e:
            raise OSError(errno.EINVAL, str(e), path) from e
        try:
            written = os.write(fd, data)
        finally:
            os.close(fd)
        if written != len(data):
            raise OSError(errno.EIO, f"short write ({written} of {len(data)} bytes)", path)

    def stat(self, path: str) -> os.stat_result:
        """
        Return metadata for ``path`` without opening it.

        Raises:
            OSError: FileNotFoundError if absent, other OSError otherwise
                (EINVAL for a path the OS cannot represent)
        """
        logger.debug(f"Inspecting {path!r}")
        try:
            return os.stat(path)
        except ValueError as e:
            raise OSError(errno.EINVAL, str(e), path) from e
