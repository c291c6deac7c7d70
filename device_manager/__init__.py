"""
BlockGuard - block device control for storage node agents

Disables block devices and checks filesystem usage through the
kernel's sysfs tree on Linux.
"""

__version__ = "0.1.0"
__author__ = "BlockGuard Contributors"
__license__ = "MIT"

# Public API
from .backend import (
    DeviceController,
    DiskFormatQuery,
    BlkidDiskFormat,
    Sysfs,
    DeviceError,
    DeviceDisableError,
    DiskFormatError,
    FilesystemLookupError,
)
from .utils.validators import DevicePath

__all__ = [
    "__version__",
    "DeviceController",
    "DiskFormatQuery",
    "BlkidDiskFormat",
    "Sysfs",
    "DeviceError",
    "DeviceDisableError",
    "DiskFormatError",
    "FilesystemLookupError",
    "DevicePath",
]
