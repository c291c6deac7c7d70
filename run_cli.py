#!/usr/bin/env python
"""
BlockGuard CLI Launcher

Run this file directly to start the BlockGuard CLI application.
Disabling devices requires root privileges.

Usage:
    python run_cli.py device info /dev/sdb
    python run_cli.py device in-use /dev/sdb /dev/sdb1
    python run_cli.py --help
"""

from device_manager.cli.main import main

if __name__ == "__main__":
    main()
