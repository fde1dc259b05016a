"""
Pytest configuration and shared fixtures for the uninstaller tests.

Provides temporary installation layouts, scripted operator input and a
recording stand-in for utils.run_command.
"""

import logging
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, Union

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from ptero_uninstall import ui
from ptero_uninstall.config import InstallLayout
from ptero_uninstall.host import HostEnvironment


# =============================================================================
# Host Fixtures
# =============================================================================

@pytest.fixture
def ubuntu_env():
    """Ubuntu 20.04 - debian family."""
    return HostEnvironment(distribution_id="ubuntu", distribution_version="20.04", major_version="20")


@pytest.fixture
def centos_env():
    """CentOS 8 - rhel family, conf.d nginx layout."""
    return HostEnvironment(distribution_id="centos", distribution_version="8", major_version="8")


@pytest.fixture
def arch_env():
    """Distribution outside every known family."""
    return HostEnvironment(distribution_id="arch", distribution_version="?", major_version="?")


# =============================================================================
# File System Fixtures
# =============================================================================

@pytest.fixture
def layout(tmp_path):
    """Installation layout rebased under a temporary root."""
    return InstallLayout.under(tmp_path / "root")


def _touch(path: Path, content: str = "") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


@pytest.fixture
def installed_panel(layout):
    """Create the files a panel installation leaves behind."""
    (layout.panel_dir / "public").mkdir(parents=True)
    _touch(layout.panel_dir / "artisan", "<?php\n")
    _touch(layout.panel_dir / ".env", "APP_ENV=production\n")
    _touch(layout.composer_bin, "#!/usr/bin/env php\n")
    _touch(layout.nginx_site_available, "server {}\n")
    layout.nginx_site_enabled.parent.mkdir(parents=True, exist_ok=True)
    layout.nginx_site_enabled.symlink_to(layout.nginx_site_available)
    _touch(layout.nginx_conf_d, "server {}\n")
    _touch(layout.pteroq_unit, "[Unit]\nDescription=Pterodactyl Queue Worker\n")
    _touch(layout.php_fpm_pool, "[pterodactyl]\n")
    return layout


@pytest.fixture
def installed_wings(layout):
    """Create the files a wings installation leaves behind."""
    _touch(layout.wings_config_dir / "config.yml", "debug: false\n")
    _touch(layout.wings_bin, "\x7fELF")
    _touch(layout.wings_data_dir / "volumes" / "server-1" / "server.properties", "motd=hi\n")
    return layout


# =============================================================================
# Input Fixtures
# =============================================================================

class MockInputSequence:
    """Helper class to mock a sequence of user inputs."""

    def __init__(self, responses: List[str]):
        self.responses = iter(responses)
        self.prompts: List[str] = []

    def __call__(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        try:
            return next(self.responses)
        except StopIteration:
            raise AssertionError(f"Unexpected prompt: {prompt!r}")


@pytest.fixture
def input_sequence():
    """Factory fixture to create input sequences."""
    def _create_sequence(responses: List[str]) -> MockInputSequence:
        return MockInputSequence(responses)
    return _create_sequence


# =============================================================================
# Subprocess Fixtures
# =============================================================================

Result = Tuple[int, str, str]


class RecordingRunner:
    """
    Stand-in for utils.run_command.

    Records every command and answers from a prefix -> result table.
    Results may be callables taking (cmd, input_text).
    """

    def __init__(self, responses: Optional[Dict[str, Union[Result, Callable]]] = None):
        self.responses = responses or {}
        self.calls: List[Tuple[List[str], Optional[str]]] = []

    def __call__(self, cmd, capture=True, timeout=300, input_text=None, env=None):
        self.calls.append((list(cmd), input_text))
        joined = " ".join(cmd)
        for prefix, result in self.responses.items():
            if joined.startswith(prefix):
                return result(cmd, input_text) if callable(result) else result
        return 0, "", ""

    @property
    def commands(self) -> List[str]:
        return [" ".join(cmd) for cmd, _ in self.calls]


class FakeMySQL:
    """Answers mysql client invocations from in-memory schema and user lists."""

    def __init__(self, databases: List[str], users: List[str], fail_with: str = ""):
        self.databases = list(databases)
        self.users = list(users)
        self.fail_with = fail_with
        self.statements: List[str] = []

    def __call__(self, cmd, input_text=None) -> Result:
        sql = cmd[-1]
        self.statements.append(sql)
        if self.fail_with:
            return 1, "", self.fail_with
        if "information_schema.schemata" in sql:
            return 0, "".join(f"{name}\n" for name in self.databases), ""
        if "mysql.user" in sql:
            return 0, "".join(f"{name}\n" for name in self.users), ""
        return 0, "", ""

    @property
    def drops(self) -> List[str]:
        return [s for s in self.statements if s.startswith("DROP")]


@pytest.fixture
def recording_runner():
    """Factory for RecordingRunner with an optional response table."""
    def _create(responses=None) -> RecordingRunner:
        return RecordingRunner(responses)
    return _create


@pytest.fixture
def fake_mysql():
    """Factory for FakeMySQL."""
    def _create(databases=(), users=(), fail_with="") -> FakeMySQL:
        return FakeMySQL(list(databases), list(users), fail_with)
    return _create


# =============================================================================
# Cleanup Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def reset_module_state():
    """Reset any module-level state between tests."""
    ui._LOG_FILE_PATH = None
    package_logger = logging.getLogger("ptero_uninstall")
    handlers = list(package_logger.handlers)
    yield
    ui._LOG_FILE_PATH = None
    for handler in package_logger.handlers[:]:
        if handler not in handlers:
            package_logger.removeHandler(handler)
            handler.close()


@pytest.fixture
def capture_prints(capsys):
    """Capture and return printed output."""
    def _get_output():
        captured = capsys.readouterr()
        return captured.out
    return _get_output
