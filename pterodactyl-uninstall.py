#!/usr/bin/env python3
"""
Pterodactyl Uninstaller (v2.0)

Removes the Pterodactyl panel and/or wings daemon from this host.
Must be run as root.

Usage:
    sudo python3 pterodactyl-uninstall.py
    sudo python3 pterodactyl-uninstall.py --check-os --skip-database
"""

import sys
from pathlib import Path

# Add repository root to path so the package imports without installation
script_dir = str(Path(__file__).resolve().parent)
if script_dir not in sys.path:
    sys.path.insert(0, script_dir)

from ptero_uninstall.cli import run

if __name__ == "__main__":
    run()
