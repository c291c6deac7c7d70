"""
BlockGuard CLI - command-line front-end for device control.

Exposes the device controller operations through a CLI powered
by Click, for node maintenance and debugging.
"""

import click
import functools
import json
import sys
from pathlib import Path
from typing import Optional

from .. import __version__
from ..utils.platform_check import is_admin, get_platform, check_requirements
from ..utils.logger import setup_logger, LogLevel
from ..utils.validators import DevicePath
from ..backend.device_controller import DeviceController
from ..backend.disk_format import BlkidDiskFormat
from ..backend.errors import DeviceError, FilesystemLookupError
from ..backend.sysfs import Sysfs, DEFAULT_SYSFS_ROOT

# Setup logger
logger = setup_logger(level=LogLevel.INFO)


def require_admin_decorator(f):
    """Decorator to require root privileges."""
    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        if not is_admin():
            click.secho("❌ This command requires root privileges", fg="red", bold=True)
            click.echo("Please run this command with sudo")
            sys.exit(1)
        return f(*args, **kwargs)
    return wrapper


@click.group()
@click.version_option(version=__version__, prog_name="BlockGuard")
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--debug', is_flag=True, help='Enable debug output')
@click.option(
    '--sysfs-root',
    envvar='BLOCKGUARD_SYSFS_ROOT',
    default=DEFAULT_SYSFS_ROOT,
    show_default=True,
    type=click.Path(file_okay=False),
    help='Mount point of the sysfs tree'
)
@click.option(
    '--log-file',
    type=click.Path(dir_okay=False, path_type=Path),
    help='Also write log records to this file'
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool, sysfs_root: str, log_file: Optional[Path]):
    """
    BlockGuard - block device control via sysfs

    \b
    Examples:
      blockguard device info /dev/sdb               # Show sysfs paths
      blockguard device in-use /dev/sdb /dev/sdb1   # Check filesystem usage
      blockguard device disable /dev/sdb            # Take device offline

    ⚠️  Disabling a device requires root and cannot be undone!
    """
    level = LogLevel.DEBUG if (debug or verbose) else LogLevel.INFO
    if level is LogLevel.DEBUG or log_file:
        setup_logger(level=level, log_file=log_file)

    ctx.ensure_object(dict)
    ctx.obj['sysfs'] = Sysfs(sysfs_root)


@cli.group()
def device():
    """Block device commands."""
    pass


# ============================================================================
# DEVICE COMMANDS
# ============================================================================

@device.command('info')
@click.argument('device_path')
@click.option('--fstype', default='<fstype>', help='Filesystem type used for the in-use path')
@click.pass_context
def device_info(ctx: click.Context, device_path: str, fstype: str):
    """Show the sysfs paths used for a device (no I/O)."""
    sysfs = ctx.obj['sysfs']
    name = DevicePath.short_name(device_path)

    click.secho(f"\n📀 {device_path}", fg="cyan", bold=True)
    click.echo(f"   Short name:   {name}")
    click.echo(f"   State file:   {sysfs.device_state_path(name)}")
    click.echo(f"   In-use entry: {sysfs.filesystem_entry_path(fstype, name)}")

    if not DevicePath.looks_like_block_device(device_path):
        parent = DevicePath.parent_hint(device_path)
        if parent:
            click.secho(f"   Note: looks like a partition of {parent}", fg="yellow")
        else:
            click.secho("   Note: not a recognised block device name", fg="yellow")
    click.echo()


@device.command('in-use')
@click.argument('device_path')
@click.argument('devfs_path')
@click.option('--json', 'output_json', is_flag=True, help='Output in JSON format')
@click.pass_context
def device_in_use(ctx: click.Context, device_path: str, devfs_path: str, output_json: bool):
    """
    Check whether the filesystem on a device is in use.

    DEVICE_PATH: Block device to probe for its filesystem type
    DEVFS_PATH: Device entry of the filesystem (e.g. a partition)
    """
    controller = DeviceController(ctx.obj['sysfs'])

    try:
        in_use = controller.is_device_filesystem_in_use(BlkidDiskFormat(), device_path, devfs_path)
    except FilesystemLookupError as e:
        logger.error(str(e))
        if output_json:
            click.echo(json.dumps({'device': device_path, 'devfs': devfs_path, 'in_use': None, 'error': str(e)}, indent=2))
        else:
            click.secho(f"❓ In-use state of {devfs_path} is unknown: {e}", fg="yellow", bold=True)
        sys.exit(1)
    except DeviceError as e:
        logger.error(str(e))
        if output_json:
            click.echo(json.dumps({'device': device_path, 'devfs': devfs_path, 'in_use': None, 'error': str(e)}, indent=2))
        else:
            click.secho(f"❌ Error: {e}", fg="red", bold=True)
        sys.exit(1)

    if output_json:
        click.echo(json.dumps({'device': device_path, 'devfs': devfs_path, 'in_use': in_use}, indent=2))
    elif in_use:
        click.secho(f"🔒 {devfs_path} is in use", fg="yellow", bold=True)
    else:
        click.secho(f"✅ {devfs_path} is not in use", fg="green", bold=True)


@device.command('disable')
@click.argument('device_path')
@click.confirmation_option(prompt='⚠️  The device will be unusable until re-enabled out of band. Continue?')
@require_admin_decorator
@click.pass_context
def device_disable(ctx: click.Context, device_path: str):
    """
    Take a block device offline.

    Re-enabling needs the device's serial number, which cannot be read
    once it is disabled. Record the serial before running this.
    """
    controller = DeviceController(ctx.obj['sysfs'])

    try:
        controller.disable_device(device_path)
    except DeviceError as e:
        logger.error(str(e))
        click.secho(f"❌ Error: {e}", fg="red", bold=True)
        sys.exit(1)

    click.secho(f"✅ Offline state written for {device_path}", fg="green", bold=True)


# ============================================================================
# SYSTEM COMMANDS
# ============================================================================

@cli.command('check')
@click.pass_context
def check(ctx: click.Context):
    """Show platform information and required utilities."""
    info = get_platform(ctx.obj['sysfs'].root or "/")
    click.echo(str(info))
    click.echo()

    all_present, missing = check_requirements()
    if all_present:
        click.secho("✅ All required utilities are available", fg="green")
    else:
        click.secho("⚠️  Missing required utilities:", fg="yellow")
        for util in missing:
            click.echo(f"  - {util}")


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
