"""
Pterodactyl Uninstaller

An interactive tool that removes a Pterodactyl installation set up by the
pterodactyl-installer scripts:
- The panel (files, nginx site, services, cron entry, database)
- The wings daemon (configuration, binary, server data)

Only components found on disk are offered, and nothing is removed before
the final confirmation.
"""

import argparse
import logging
import sys
import traceback
from pathlib import Path
from typing import List, Optional

from . import __version__
from . import config
from . import host
from . import ui
from . import uninstaller
from .config import InstallLayout
from .database import DatabaseError

# Module logger
_logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pterodactyl-uninstall",
        description="Uninstall the Pterodactyl panel and/or wings",
    )
    parser.add_argument(
        "--check-os", action="store_true",
        help="Refuse to run on distributions the installer does not support",
    )
    parser.add_argument(
        "--skip-database", action="store_true",
        help="Keep the panel database and database user",
    )
    parser.add_argument(
        "--log-file", type=Path, default=ui.DEFAULT_LOG_PATH,
        help=f"Append a log of the session to this file (default: {ui.DEFAULT_LOG_PATH})",
    )
    parser.add_argument("--no-log", action="store_true", help="Do not write a log file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def print_banner(env: host.HostEnvironment) -> None:
    ui.print_header([
        "Pterodactyl uninstallation script",
        "",
        "This script is not associated with the official Pterodactyl Project.",
        "",
        f"Running {env.distribution_id} version {env.distribution_version}.",
    ])


def print_goodbye(results: uninstaller.TeardownResults) -> None:
    if results.errors:
        ui.print_warning("Some operations had errors:")
        for error in results.errors:
            ui.print_info(f"  {error}")

    ui.print_header([
        "Panel uninstallation completed",
        "Thank you for using this script.",
    ], width=62)


def main(
    argv: Optional[List[str]] = None,
    layout: InstallLayout = config.DEFAULT_LAYOUT,
    reader: Optional[ui.Reader] = None,
) -> int:
    """Main uninstaller entry point."""
    args = parse_args(argv)

    if not args.no_log:
        ui.init_logging(args.log_file)

    ok, errors = host.validate_preflight()
    if not ok:
        for error in errors:
            ui.print_error(error)
        return 1

    env = host.detect_host_environment()
    print_banner(env)

    if args.check_os:
        host.require_supported_os(env)

    selection = uninstaller.select_components(layout, reader=reader)
    if not selection.any():
        ui.print_error("Nothing to uninstall!")
        return 1

    uninstaller.display_summary(selection)

    if not ui.prompt_yes_no("Continue with uninstallation?", reader=reader):
        ui.print_error("Uninstallation aborted.")
        return 1

    results = uninstaller.perform_uninstall(
        env, selection, layout, reader=reader, skip_database=args.skip_database
    )
    print_goodbye(results)
    return 0


def run() -> None:
    """Console script wrapper translating failures into exit codes."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print()
        ui.print_warning("Uninstallation interrupted by user.")
        sys.exit(130)
    except DatabaseError as e:
        _logger.error(f"Database client failed: {e}")
        ui.print_error(f"Database client failed: {e}")
        sys.exit(1)
    except Exception as e:
        ui.print_error(f"Unexpected error: {e}")
        traceback.print_exc()
        sys.exit(1)
