"""
Pterodactyl Uninstaller Library

Modular components for removing the Pterodactyl panel and wings.

Modules:
- cli: Command line entry point and workflow
- config: Installation layout and naming constants
- database: Panel database teardown through the mysql client
- host: Distribution detection, support table and preflight checks
- ui: Terminal UI utilities
- uninstaller: Component selection and ordered teardown
- utils: General utilities
"""

import importlib
from typing import Any

__version__ = "2.0.0"

# Submodules available for lazy loading
__all__ = [
    "cli",
    "config",
    "database",
    "host",
    "ui",
    "uninstaller",
    "utils",
    # Key classes and functions
    "HostEnvironment",
    "detect_host_environment",
    "is_supported",
    "ComponentSelection",
    "TeardownResults",
    "perform_uninstall",
    "DatabaseTarget",
    "DatabaseError",
    "InstallLayout",
]

# Cache for lazily loaded modules
_module_cache: dict = {}

# Mapping of exported names to their source modules
_EXPORTS = {
    # host exports
    "HostEnvironment": "host",
    "detect_host_environment": "host",
    "is_supported": "host",
    # uninstaller exports
    "ComponentSelection": "uninstaller",
    "TeardownResults": "uninstaller",
    "perform_uninstall": "uninstaller",
    # database exports
    "DatabaseTarget": "database",
    "DatabaseError": "database",
    # config exports
    "InstallLayout": "config",
}

# Submodule names
_SUBMODULES = {
    "cli",
    "config",
    "database",
    "host",
    "ui",
    "uninstaller",
    "utils",
}


def _load_module(name: str) -> Any:
    """Lazily load and cache a submodule."""
    if name not in _module_cache:
        _module_cache[name] = importlib.import_module(f".{name}", __name__)
    return _module_cache[name]


def __getattr__(name: str) -> Any:
    """
    Lazy loading for submodules and exported names.

    This avoids circular imports and reduces startup time by only
    loading modules when they are first accessed.
    """
    if name in _SUBMODULES:
        return _load_module(name)

    if name in _EXPORTS:
        module = _load_module(_EXPORTS[name])
        return getattr(module, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list:
    """Return list of available names for tab completion."""
    return list(__all__) + ["__version__"]
