"""Exceptions raised by the device backend."""

from typing import Optional


class DeviceError(Exception):
    """Base class for device control failures."""

    def __init__(self, message: str, device_path: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.device_path = device_path
        self.cause = cause


class DeviceDisableError(DeviceError):
    """Writing the device state control file failed."""

    def __init__(self, device_path: str, state_path: str, cause: OSError):
        super().__init__(
            f"failed to disable device {device_path}: {cause}",
            device_path,
            cause,
        )
        self.state_path = state_path


class DiskFormatError(DeviceError):
    """The filesystem type of a device could not be determined."""


class FilesystemLookupError(DeviceError):
    """
    The sysfs filesystem entry could not be inspected.

    Raised for any stat failure other than the entry being absent.
    ``in_use`` holds the unverified default (False); callers must treat
    the in-use state as unknown when they catch this.
    """

    def __init__(self, device_path: str, lookup_path: str, cause: OSError):
        super().__init__(
            f"failed to inspect {lookup_path} for {device_path}: {cause}",
            device_path,
            cause,
        )
        self.lookup_path = lookup_path
        self.in_use = False
