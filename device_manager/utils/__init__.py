"""Utility modules for platform detection, logging, and path handling."""

from .platform_check import get_platform, is_admin, check_requirements, PlatformInfo, OSType
from .logger import setup_logger, get_logger, LogLevel
from .validators import DevicePath

__all__ = [
    "get_platform",
    "is_admin",
    "check_requirements",
    "PlatformInfo",
    "OSType",
    "setup_logger",
    "get_logger",
    "LogLevel",
    "DevicePath",
]
