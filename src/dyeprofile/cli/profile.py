"""dyeprofile profile — turn replicate dye-gradient images into CSV profiles."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from dyeprofile.cli.utils import (
    configure_logging,
    console,
    error_handler,
    make_progress,
    shutdown_logging,
)

if TYPE_CHECKING:
    from dyeprofile.core.models import ProfileConfig
    from dyeprofile.measure.batch import BatchResult

logger = logging.getLogger(__name__)


@click.command()
@click.argument("input_dir", required=False, type=click.Path(file_okay=False))
@click.argument("output_dir", required=False, type=click.Path(file_okay=False))
@click.option(
    "--config", "config_path", default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="YAML config file. Command-line options override its values.",
)
@click.option("-i", "--identifier", default=None, help="Dataset identifier, e.g. W or SF.")
@click.option(
    "-u", "--upper", type=float, default=None,
    help="Distance at the left edge of every image.",
)
@click.option(
    "-l", "--lower", type=float, default=None,
    help="Distance at the right edge of every image.",
)
@click.option(
    "-c", "--channel", default=None,
    type=click.Choice(["R", "G", "B"], case_sensitive=False),
    help="Colour channel to profile.",
)
@click.option(
    "-b", "--blur-radius", type=click.IntRange(min=0), default=None,
    help="Gaussian blur radius in pixels (0 disables blur).",
)
@click.option(
    "--log-dir", type=click.Path(file_okay=False), default=None,
    help="Folder for the run log (default: logs).",
)
@error_handler
def profile(
    input_dir: str | None,
    output_dir: str | None,
    config_path: str | None,
    identifier: str | None,
    upper: float | None,
    lower: float | None,
    channel: str | None,
    blur_radius: int | None,
    log_dir: str | None,
) -> None:
    """Profile dye-gradient images into one CSV per RPM."""
    config = build_config(
        config_path,
        identifier=identifier,
        distance_upper=upper,
        distance_lower=lower,
        channel=channel,
        blur_radius=blur_radius,
        input_dir=input_dir,
        output_dir=output_dir,
        log_dir=log_dir,
    )
    run_profile(config)


def build_config(config_path: str | None, **overrides: Any) -> ProfileConfig:
    """Merge a YAML config file with command-line overrides and validate.

    Raises:
        ConfigError: If required values are missing or invalid.
    """
    from dyeprofile.io.serialization import config_from_mapping, load_config_mapping

    data: dict[str, Any] = load_config_mapping(Path(config_path)) if config_path else {}
    data.update({k: v for k, v in overrides.items() if v is not None})
    return config_from_mapping(data)


def run_profile(config: ProfileConfig) -> BatchResult:
    """Core profiling logic shared by the CLI command and the interactive prompts."""
    from dyeprofile.measure.batch import ProfileEngine

    if not config.input_dir.is_dir():
        console.print(f"[red]Error:[/red] Input folder does not exist: {config.input_dir}")
        raise SystemExit(1)

    log_path = configure_logging(config.identifier, config.log_dir)
    try:
        console.print(f"[dim]Logging to {log_path}[/dim]")
        _log_settings(config)
        engine = ProfileEngine()
        with make_progress() as progress:
            task = progress.add_task("Profiling...", total=None)

            def on_progress(current: int, total: int, label: str) -> None:
                progress.update(task, total=total, completed=current,
                                description=f"Profiled {label}")

            result = engine.run(config, progress_callback=on_progress)
    finally:
        shutdown_logging()

    _show_result(result)
    return result


def _log_settings(config: ProfileConfig) -> None:
    """Record the run settings at the top of the run log."""
    logger.info("Identifier: %s", config.identifier)
    logger.info("Distance Upperbound: %s", config.distance_upper)
    logger.info("Distance Lowerbound: %s", config.distance_lower)
    logger.info("Channel: %s", config.channel.letter)
    logger.info("Gaussian blur radius: %d", config.blur_radius)
    logger.info("Input folder: %s", config.input_dir)
    logger.info("Output folder: %s", config.output_dir)


def _show_result(result: BatchResult) -> None:
    console.print("\n[green]Profiling complete![/green]")
    console.print(f"  RPMs found: {len(result.codes_found)}")
    console.print(f"  CSV files written: {len(result.csv_paths)}")
    console.print(f"  Aligned images written: {result.aligned_images_written}")
    if result.codes_skipped:
        skipped = ", ".join(str(c) for c in result.codes_skipped)
        console.print(f"  [yellow]Skipped RPMs: {skipped}[/yellow]")
    for path in result.csv_paths:
        console.print(f"  [dim]{path}[/dim]")
