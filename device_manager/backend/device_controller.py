"""
Block device control through sysfs.

Two privileged operations used around volume teardown: taking a block
device offline, and checking whether the kernel still tracks the
filesystem on a device as live.
"""

import stat
from typing import Optional

from ..utils.logger import get_logger
from ..utils.validators import DevicePath
from .disk_format import DiskFormatQuery
from .errors import DeviceDisableError, DiskFormatError, FilesystemLookupError
from .sysfs import Sysfs

logger = get_logger(__name__)

OFFLINE_STATE = b"offline\n"


class DeviceController:
    """
    Disables block devices and checks filesystem usage via sysfs.

    Holds no state besides the sysfs handle, so one instance can be
    shared between threads.
    """

    def __init__(self, sysfs: Optional[Sysfs] = None):
        """
        Initialize device controller.

        Args:
            sysfs: Sysfs tree to operate on. Defaults to ``/sys``.
        """
        self.sysfs = sysfs if sysfs is not None else Sysfs()
        logger.debug(f"Initialized DeviceController on {self.sysfs!r}")

    def disable_device(self, device_path: str) -> None:
        """
        Ask the kernel to take a block device offline.

        Writes ``offline`` to ``<sysfs>/block/<name>/device/state``, where
        ``name`` is the last segment of ``device_path``. Returning means the
        write went through, not that the device changed state.

        This cannot be undone from user space. Bringing the device back
        needs its serial number, and that cannot be read from a disabled
        device. If a volume is disabled on unstage and then staged again
        without a full unpublish/publish cycle, staging will fail. Only
        call this when the caller keeps a durable record of disabled
        devices that survives its own restarts.

        Args:
            device_path: Path of the block device, e.g. ``/dev/sdb``

        Raises:
            DeviceDisableError: If the control file cannot be written
        """
        device_name = DevicePath.short_name(device_path)
        state_path = self.sysfs.device_state_path(device_name)

        try:
            self.sysfs.write_control_file(state_path, OFFLINE_STATE)
        except OSError as e:
            raise DeviceDisableError(device_path, state_path, e) from e

        logger.info(f"Disabled device {device_path} via {state_path}")

    def is_device_filesystem_in_use(
        self,
        mount_query: DiskFormatQuery,
        device_path: str,
        devfs_path: str
    ) -> bool:
        """
        Check whether the filesystem on a device is in use.

        The filesystem type is taken from ``mount_query``; the device counts
        as in use when ``<sysfs>/fs/<fstype>/<name>`` exists and is a
        directory, ``name`` being the last segment of ``devfs_path``.

        Args:
            mount_query: Reports the filesystem type of ``device_path``
            device_path: Path of the block device
            devfs_path: Path of the filesystem's device entry

        Returns:
            True if the sysfs entry is a directory, False if it is absent
            or not a directory

        Raises:
            DiskFormatError: If the filesystem type cannot be determined
            FilesystemLookupError: If the entry cannot be inspected for a
                reason other than being absent. Its ``in_use`` is False but
                the real state is unknown.
        """
        try:
            fstype = mount_query.get_disk_format(device_path)
        except Exception as e:
            raise DiskFormatError(
                f"failed to get disk format for {device_path} (aka {devfs_path}): {e}",
                device_path,
                e,
            ) from e

        devfs_name = DevicePath.short_name(devfs_path)
        lookup_path = self.sysfs.filesystem_entry_path(fstype, devfs_name)

        try:
            st = self.sysfs.stat(lookup_path)
        except FileNotFoundError:
            logger.debug(f"{lookup_path} does not exist, {device_path} is not in use")
            return False
        except OSError as e:
            raise FilesystemLookupError(device_path, lookup_path, e) from e

        in_use = stat.S_ISDIR(st.st_mode)
        logger.debug(f"{lookup_path} exists, {device_path} in use: {in_use}")
        return in_use
