"""Shared CLI utilities — Rich console, error handling, run logging."""

from __future__ import annotations

import functools
import logging
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn

console = Console()

# Set by the --verbose flag on the top-level CLI group.
verbose: bool = False

LOGGER_NAME = "dyeprofile"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def configure_logging(identifier: str, log_dir: Path, level: int = logging.INFO) -> Path:
    """Send package log records to the console and a run-scoped log file.

    The file is ``<log_dir>/<identifier>_log_<YYYYmmdd_HHMMSS>.txt``,
    opened in append mode. Handlers from a previous call are replaced.

    Args:
        identifier: Dataset tag, embedded in the log filename.
        log_dir: Folder for log files, created if missing.
        level: Minimum level for both destinations.

    Returns:
        Path of the log file.
    """
    from dyeprofile.io._sanitize import sanitize_name

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_path = log_dir / f"{sanitize_name(identifier)}_log_{stamp}.txt"

    shutdown_logging()
    pkg_logger = logging.getLogger(LOGGER_NAME)
    pkg_logger.setLevel(level)

    console_handler = RichHandler(console=console, show_path=False, markup=False)
    console_handler.setLevel(level)
    pkg_logger.addHandler(console_handler)

    file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    pkg_logger.addHandler(file_handler)

    return log_path


def shutdown_logging() -> None:
    """Detach and close the handlers installed by configure_logging."""
    pkg_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()


def error_handler(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator wrapping CLI commands with standard error handling.

    Catches DyeProfileError (exit 1) and unexpected exceptions (exit 2).
    With --verbose, unexpected errors include the full traceback.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        from dyeprofile.core.exceptions import DyeProfileError

        try:
            return func(*args, **kwargs)
        except SystemExit:
            raise
        except DyeProfileError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise SystemExit(1)
        except Exception as e:
            if verbose:
                console.print(f"[red]Internal error:[/red] {e}")
                console.print(traceback.format_exc())
            else:
                console.print(
                    f"[red]Internal error:[/red] {type(e).__name__}: {e}\n"
                    "[dim]Use --verbose for the full traceback.[/dim]"
                )
            raise SystemExit(2)

    return wrapper


def make_progress() -> Progress:
    """Create a Rich progress bar for CLI operations."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    )
