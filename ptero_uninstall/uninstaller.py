"""
Component selection and teardown for the panel and wings.

Provides:
- Presence detection and the operator's removal choices
- Ordered, best-effort teardown of files, services and the cron entry
- Database teardown hand-off for the panel
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from . import config
from . import database
from . import ui
from . import utils
from .config import InstallLayout
from .host import HostEnvironment

# Module logger
_logger = logging.getLogger(__name__)

SERVICE_TIMEOUT = 60
CRON_TIMEOUT = 10


@dataclass(frozen=True)
class ComponentSelection:
    """Which components the operator chose to remove."""
    remove_panel: bool = False
    remove_wings: bool = False

    def any(self) -> bool:
        return self.remove_panel or self.remove_wings


@dataclass
class TeardownResults:
    """What the teardown actually did."""
    removed_paths: List[Path] = field(default_factory=list)
    disabled_services: List[str] = field(default_factory=list)
    cron_entries_removed: int = 0
    database_target: Optional[database.DatabaseTarget] = None
    errors: List[str] = field(default_factory=list)


def panel_installed(layout: InstallLayout = config.DEFAULT_LAYOUT) -> bool:
    return layout.panel_dir.is_dir()


def wings_installed(layout: InstallLayout = config.DEFAULT_LAYOUT) -> bool:
    return layout.wings_config_dir.is_dir()


def select_components(
    layout: InstallLayout = config.DEFAULT_LAYOUT,
    reader: Optional[ui.Reader] = None,
) -> ComponentSelection:
    """
    Ask about each installed component.

    Components missing from disk are never offered.
    """
    remove_panel = False
    remove_wings = False

    if panel_installed(layout):
        ui.print_info("Panel installation has been detected.")
        remove_panel = ui.prompt_yes_no("Do you want to remove panel?", reader=reader)

    if wings_installed(layout):
        ui.print_info("Wings installation has been detected.")
        ui.print_warning("This will remove all the servers!")
        remove_wings = ui.prompt_yes_no("Do you want to remove wings (daemon)?", reader=reader)

    return ComponentSelection(remove_panel=remove_panel, remove_wings=remove_wings)


def display_summary(selection: ComponentSelection) -> None:
    """Show the choices before the final confirmation."""
    ui.print_brake(30)
    ui.print_info(f"Uninstall panel? {str(selection.remove_panel).lower()}")
    ui.print_info(f"Uninstall wings? {str(selection.remove_wings).lower()}")
    ui.print_brake(30)


def _remove(path: Path, results: TeardownResults) -> None:
    try:
        if utils.remove_path(path):
            results.removed_paths.append(path)
            _logger.debug(f"Removed {path}")
    except OSError as e:
        results.errors.append(f"Could not remove {path}: {e}")


def _disable_service(name: str, results: TeardownResults) -> None:
    code, _, stderr = utils.run_command(
        ["systemctl", "disable", "--now", name], timeout=SERVICE_TIMEOUT
    )
    if code == 0:
        results.disabled_services.append(name)
    else:
        # Units missing on this host land here too
        _logger.warning(f"systemctl disable --now {name} failed: {stderr.strip()}")


def panel_file_paths(env: HostEnvironment, layout: InstallLayout) -> List[Path]:
    """Panel files, including the nginx site layout for this distribution."""
    paths = [layout.panel_dir, layout.composer_bin]
    if env.is_centos:
        paths.append(layout.nginx_conf_d)
    else:
        paths.extend([layout.nginx_site_enabled, layout.nginx_site_available])
    return paths


def remove_panel_files(env: HostEnvironment, layout: InstallLayout, results: TeardownResults) -> None:
    for path in panel_file_paths(env, layout):
        _remove(path, results)


def remove_services(env: HostEnvironment, layout: InstallLayout, results: TeardownResults) -> None:
    """Stop and disable the panel's services and drop their unit files."""
    _disable_service(config.DATABASE_SERVICE, results)
    _disable_service(config.QUEUE_SERVICE, results)
    _remove(layout.pteroq_unit, results)

    cache_service = config.CACHE_SERVICES.get(env.family)
    if cache_service:
        _disable_service(cache_service, results)
    else:
        _logger.debug(f"No cache service known for {env.distribution_id}")

    if env.is_centos:
        _disable_service(config.PHP_FPM_SERVICE, results)
        _remove(layout.php_fpm_pool, results)


def strip_cron_entry(crontab: str, entry: str = config.CRON_ENTRY) -> Tuple[str, int]:
    """
    Drop every line equal to the entry.

    Returns:
        Tuple of (new crontab text, number of lines removed)
    """
    kept = []
    removed = 0
    for line in crontab.splitlines():
        if line.strip() == entry:
            removed += 1
        else:
            kept.append(line)
    text = "\n".join(kept)
    if kept:
        text += "\n"
    return text, removed


def remove_cron(results: TeardownResults) -> None:
    """Remove the panel's scheduler line from root's crontab."""
    code, current, stderr = utils.run_command(["crontab", "-l"], timeout=CRON_TIMEOUT)
    if code != 0:
        # "no crontab for root"
        _logger.debug(f"crontab -l: {stderr.strip()}")
        return

    updated, removed = strip_cron_entry(current)
    if removed == 0:
        return

    code, _, stderr = utils.run_command(
        ["crontab", "-"], timeout=CRON_TIMEOUT, input_text=updated
    )
    if code == 0:
        results.cron_entries_removed = removed
    else:
        results.errors.append(f"Could not update crontab: {stderr.strip()}")


def remove_wings_files(layout: InstallLayout, results: TeardownResults) -> None:
    for path in layout.wings_paths():
        _remove(path, results)


def perform_uninstall(
    env: HostEnvironment,
    selection: ComponentSelection,
    layout: InstallLayout = config.DEFAULT_LAYOUT,
    reader: Optional[ui.Reader] = None,
    skip_database: bool = False,
) -> TeardownResults:
    """
    Run the teardown for every selected component.

    Panel: files, services, cron, then the database. Wings: its three paths.
    Raises database.DatabaseError if the database client fails.
    """
    results = TeardownResults()

    if selection.remove_panel:
        with ui.progress("Removing panel", total=3) as advance:
            remove_panel_files(env, layout, results)
            advance("Panel files removed")
            remove_services(env, layout, results)
            advance("Panel services disabled")
            remove_cron(results)
            advance("Panel cron entry removed")

        if skip_database:
            ui.print_info("Skipping database removal (--skip-database)")
        else:
            results.database_target = database.remove_database(reader=reader)

    if selection.remove_wings:
        with ui.progress("Removing wings", total=1) as advance:
            remove_wings_files(layout, results)
            advance("Wings files removed")

    return results
