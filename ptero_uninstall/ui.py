"""
UI utilities for terminal output and user interaction.

Provides colored terminal output, separator lines, interactive prompts and a
progress display for the non-interactive teardown steps.
"""

import getpass
import logging
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterator, List, Optional

from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn


# ANSI color codes for terminal output
class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[0;31m"
    GREEN = "\033[0;32m"
    YELLOW = "\033[1;33m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"


DEFAULT_LOG_PATH = Path("/var/log/pterodactyl-uninstaller.log")

# Reads one line of operator input given a prompt
Reader = Callable[[str], str]

_LOG_FILE_PATH: Optional[Path] = None


def init_logging(log_path: Optional[Path] = None) -> Optional[Path]:
    """
    Initialize file logging.

    Every UI line is appended to the log file, and the package logger is
    routed into the same file for command diagnostics.

    Returns:
        The active log path, or None if the file could not be opened
    """
    global _LOG_FILE_PATH

    if log_path is None:
        log_path = DEFAULT_LOG_PATH

    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        # Touch file to validate permissions early
        with open(log_path, "a", encoding="utf-8") as f:
            f.write(f"\n--- pterodactyl-uninstall started {datetime.now().isoformat(timespec='seconds')} ---\n")
        _LOG_FILE_PATH = log_path
    except OSError:
        # Logging must never break interactive UX
        _LOG_FILE_PATH = None
        return None

    package_logger = logging.getLogger("ptero_uninstall")
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)
    return log_path


def _log_line(level: str, text: str) -> None:
    """Best-effort append to log file."""
    if _LOG_FILE_PATH is None:
        return
    try:
        ts = datetime.now().isoformat(timespec="seconds")
        with open(_LOG_FILE_PATH, "a", encoding="utf-8") as f:
            f.write(f"{ts} [{level}] {text}\n")
    except OSError:
        # Never crash on logging failures
        return


def colorize(text: str, color: str) -> str:
    """Apply color to text."""
    return f"{color}{text}{Colors.RESET}"


def print_brake(length: int) -> None:
    """Print a separator line of '#' characters."""
    print("#" * length)


def print_header(lines: List[str], width: int = 70) -> None:
    """Print a block of lines framed by separators."""
    _log_line("HEADER", " | ".join(line for line in lines if line))
    print_brake(width)
    for line in lines:
        print(f"* {line}" if line else "*")
    print_brake(width)


def print_info(text: str) -> None:
    """Print info message."""
    _log_line("INFO", text)
    print(f"* {text}")


def print_success(text: str) -> None:
    """Print success message."""
    _log_line("SUCCESS", text)
    print(colorize(f"* {text}", Colors.GREEN))


def print_warning(text: str) -> None:
    """Print warning message."""
    _log_line("WARN", text)
    print()
    print(f"* {colorize('WARNING', Colors.YELLOW)}: {text}")
    print()


def print_error(text: str) -> None:
    """Print error message."""
    _log_line("ERROR", text)
    print()
    print(f"* {colorize('ERROR', Colors.RED)}: {text}")
    print()


def print_list(items: List[str]) -> None:
    """Print one item per line."""
    for item in items:
        print(f"  {item}")


def _read(prompt: str, reader: Optional[Reader]) -> str:
    if reader is None:
        reader = input
    return reader(prompt)


def prompt_yes_no(question: str, default: bool = False, reader: Optional[Reader] = None) -> bool:
    """
    Prompt user for yes/no answer.

    Empty input returns the default. 'y' and 'yes' (any case) are affirmative;
    anything else counts as no.
    """
    suffix = "(Y/n)" if default else "(y/N)"
    response = _read(f"* {question} {suffix}: ", reader).strip().lower()
    _log_line("PROMPT", f"{question} -> {response or '<empty>'}")
    if not response:
        return default
    return response in ("y", "yes")


def prompt_text(question: str, reader: Optional[Reader] = None) -> str:
    """Prompt user for a line of text."""
    response = _read(f"* {question}: ", reader).strip()
    _log_line("PROMPT", f"{question} -> {response or '<empty>'}")
    return response


def prompt_password(question: str) -> str:
    """Prompt user for a secret without echoing it."""
    _log_line("PROMPT", question)
    return getpass.getpass(f"* {question}: ")


@contextmanager
def progress(description: str, total: int) -> Iterator[Callable[[str], None]]:
    """
    Show a transient progress bar.

    Yields a callable that advances the bar by one step and updates its
    description.
    """
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
        TimeElapsedColumn(),
        transient=True,
    ) as bar:
        task = bar.add_task(description, total=total)

        def advance(text: str) -> None:
            _log_line("STEP", text)
            bar.update(task, advance=1, description=text)

        yield advance
