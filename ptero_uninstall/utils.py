"""
General utility functions.

Provides the subprocess runner and filesystem helpers used across modules.
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Tuple

# Module logger
_logger = logging.getLogger(__name__)


def run_command(
    cmd: List[str],
    capture: bool = True,
    timeout: int = 300,
    input_text: Optional[str] = None,
    env: Optional[Dict[str, str]] = None,
) -> Tuple[int, str, str]:
    """
    Run a command and return the result.

    Args:
        cmd: Command to run as a list of strings (e.g., ["systemctl", "stop", "pteroq"])
        capture: Whether to capture stdout/stderr (default: True)
        timeout: Maximum time to wait in seconds (default: 300)
        input_text: Text fed to the command's stdin (default: None)
        env: Environment for the command (default: inherit)

    Returns:
        Tuple of (returncode, stdout, stderr):
        - returncode: Process exit code (0 = success, -1 = error)
        - stdout: Standard output as string
        - stderr: Standard error as string

    Note:
        On timeout or command not found, returns (-1, "", error_message)
    """
    _logger.debug(f"Running: {' '.join(cmd)}")
    try:
        result = subprocess.run(
            cmd,
            capture_output=capture,
            text=True,
            timeout=timeout,
            input=input_text,
            env=env,
        )
        _logger.debug(f"Exit code {result.returncode}: {cmd[0]}")
        return result.returncode, result.stdout or "", result.stderr or ""
    except subprocess.TimeoutExpired:
        return -1, "", "Command timed out"
    except FileNotFoundError:
        return -1, "", f"Command not found: {cmd[0]}"
    except Exception as e:
        return -1, "", str(e)


def command_exists(name: str) -> bool:
    """Check whether an executable is available on PATH."""
    return shutil.which(name) is not None


def remove_path(path: Path) -> bool:
    """
    Delete a file, symlink or directory tree if it exists.

    Absence is not an error. Other OS errors propagate to the caller.

    Returns:
        True if something was removed, False if the path was already absent
    """
    if path.is_symlink() or path.is_file():
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        return True

    if path.is_dir():
        try:
            shutil.rmtree(path)
        except FileNotFoundError:
            return False
        return True

    return False
