"""
Host detection and preflight checks.

Identifies the Linux distribution, decides whether it is supported, and
verifies the process can run the uninstaller at all.
"""

import logging
import os
import platform
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from . import config
from . import ui
from . import utils

# Module logger
_logger = logging.getLogger(__name__)

UNKNOWN_VERSION = "?"

# Distribution -> supported major versions
SUPPORTED_RELEASES: Dict[str, Tuple[str, ...]] = {
    "ubuntu": ("18", "20"),
    "debian": ("9", "10"),
    "centos": ("7", "8"),
}

# Distribution -> family sharing paths and service names
DISTRIBUTION_FAMILIES = {
    "debian": "debian",
    "ubuntu": "debian",
    "centos": "rhel",
}


@dataclass(frozen=True)
class HostEnvironment:
    """Identified operating system."""
    distribution_id: str
    distribution_version: str
    major_version: str

    @property
    def family(self) -> str:
        """Distribution family: 'debian', 'rhel' or 'other'."""
        return DISTRIBUTION_FAMILIES.get(self.distribution_id, "other")

    @property
    def is_centos(self) -> bool:
        return self.distribution_id == "centos"


def parse_release_file(path: Path) -> Dict[str, str]:
    """
    Parse a shell-style KEY=value release descriptor.

    Handles quoted values as written in /etc/os-release and /etc/lsb-release.
    """
    values: Dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8", errors="replace").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, raw_value = line.partition("=")
        try:
            value = " ".join(shlex.split(raw_value))
        except ValueError:
            value = raw_value.strip().strip("\"'")
        values[key.strip()] = value
    return values


def _from_os_release(root: Path) -> Optional[Tuple[str, str]]:
    path = root / "etc" / "os-release"
    if not path.is_file():
        return None
    values = parse_release_file(path)
    return values.get("ID", ""), values.get("VERSION_ID", "")


def _from_lsb_release_command() -> Optional[Tuple[str, str]]:
    if not utils.command_exists("lsb_release"):
        return None
    code, distributor, _ = utils.run_command(["lsb_release", "-si"], timeout=10)
    if code != 0:
        return None
    _, release, _ = utils.run_command(["lsb_release", "-sr"], timeout=10)
    return distributor.strip(), release.strip()


def _from_lsb_release_file(root: Path) -> Optional[Tuple[str, str]]:
    path = root / "etc" / "lsb-release"
    if not path.is_file():
        return None
    values = parse_release_file(path)
    return values.get("DISTRIB_ID", ""), values.get("DISTRIB_RELEASE", "")


def _from_legacy_files(root: Path) -> Optional[Tuple[str, str]]:
    debian_version = root / "etc" / "debian_version"
    if debian_version.is_file():
        return "debian", debian_version.read_text(encoding="utf-8", errors="replace").strip()
    if (root / "etc" / "SuSe-release").is_file():
        return "SuSE", UNKNOWN_VERSION
    if (root / "etc" / "redhat-release").is_file():
        return "Red Hat/CentOS", UNKNOWN_VERSION
    return None


def _from_kernel() -> Tuple[str, str]:
    return platform.system() or "unknown", platform.release() or UNKNOWN_VERSION


def detect_host_environment(root: Path = Path("/")) -> HostEnvironment:
    """
    Identify the running distribution.

    Sources are tried in order: /etc/os-release, the lsb_release command,
    /etc/lsb-release, legacy release files, then the kernel name. A source
    that reports no distribution id falls through to the next one, so the
    result always carries a non-empty id and major version.
    """
    sources = [
        lambda: _from_os_release(root),
        _from_lsb_release_command,
        lambda: _from_lsb_release_file(root),
        lambda: _from_legacy_files(root),
    ]

    detected = None
    for source in sources:
        result = source()
        if result and result[0].strip():
            detected = result
            break
    if detected is None:
        detected = _from_kernel()

    distribution_id = detected[0].strip().lower()
    version = detected[1].strip() or UNKNOWN_VERSION
    major_version = version.split(".")[0] or UNKNOWN_VERSION

    env = HostEnvironment(
        distribution_id=distribution_id,
        distribution_version=version,
        major_version=major_version,
    )
    _logger.debug(f"Detected host: {env}")
    return env


def is_supported(distribution_id: str, major_version: str) -> bool:
    """Look up a distribution release in the compatibility table."""
    return major_version in SUPPORTED_RELEASES.get(distribution_id, ())


def require_supported_os(env: HostEnvironment) -> None:
    """Exit the program when the host is not a supported release."""
    if is_supported(env.distribution_id, env.major_version):
        ui.print_info(f"{env.distribution_id} {env.distribution_version} is supported.")
        return

    ui.print_info(f"{env.distribution_id} {env.distribution_version} is not supported")
    ui.print_error("Unsupported OS")
    raise SystemExit(1)


def validate_preflight() -> Tuple[bool, List[str]]:
    """
    Check privileges and required tools.

    Returns:
        Tuple of (ok, errors)
    """
    errors = []

    if os.geteuid() != 0:
        errors.append("This script must be executed with root privileges (sudo).")

    for tool in config.REQUIRED_TOOLS:
        if not utils.command_exists(tool):
            errors.append(
                f"{tool} is required in order for this script to work. "
                "Install using apt (Debian and derivatives) or yum/dnf (CentOS)."
            )

    return not errors, errors
