"""Backend modules for device operations."""

from .device_controller import DeviceController
from .disk_format import DiskFormatQuery, BlkidDiskFormat
from .errors import DeviceError, DeviceDisableError, DiskFormatError, FilesystemLookupError
from .sysfs import Sysfs

__all__ = [
    "DeviceController",
    "DiskFormatQuery",
    "BlkidDiskFormat",
    "DeviceError",
    "DeviceDisableError",
    "DiskFormatError",
    "FilesystemLookupError",
    "Sysfs",
]
