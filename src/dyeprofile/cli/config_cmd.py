"""dyeprofile init-config — write a reusable YAML run configuration."""

from __future__ import annotations

from pathlib import Path

import click

from dyeprofile.cli.utils import console, error_handler


@click.command("init-config")
@click.argument("path", type=click.Path(dir_okay=False))
@click.option("-i", "--identifier", required=True, help="Dataset identifier, e.g. W or SF.")
@click.option("-u", "--upper", type=float, required=True, help="Distance at the left edge.")
@click.option("-l", "--lower", type=float, required=True, help="Distance at the right edge.")
@click.option(
    "-c", "--channel", default="R", show_default=True,
    type=click.Choice(["R", "G", "B"], case_sensitive=False),
    help="Colour channel to profile.",
)
@click.option(
    "-b", "--blur-radius", type=click.IntRange(min=0), default=10, show_default=True,
    help="Gaussian blur radius in pixels (0 disables blur).",
)
@click.option("--input-dir", required=True, type=click.Path(file_okay=False), help="Image folder.")
@click.option("--output-dir", required=True, type=click.Path(file_okay=False), help="Output folder.")
@click.option("--log-dir", default="logs", show_default=True, type=click.Path(file_okay=False))
@click.option("--overwrite", is_flag=True, help="Overwrite the config file if it exists.")
@error_handler
def init_config(
    path: str,
    identifier: str,
    upper: float,
    lower: float,
    channel: str,
    blur_radius: int,
    input_dir: str,
    output_dir: str,
    log_dir: str,
    overwrite: bool,
) -> None:
    """Write a YAML config file for the profile command."""
    from dyeprofile.core.models import ProfileConfig
    from dyeprofile.io.serialization import config_to_yaml

    out_path = Path(path).expanduser()
    if out_path.exists() and not overwrite:
        console.print(
            f"[red]Error:[/red] Config file already exists: {out_path}\n"
            "Use --overwrite to replace it."
        )
        raise SystemExit(1)

    config = ProfileConfig(
        identifier=identifier,
        input_dir=Path(input_dir),
        output_dir=Path(output_dir),
        distance_upper=upper,
        distance_lower=lower,
        channel=channel,
        blur_radius=blur_radius,
        log_dir=Path(log_dir),
    )
    config_to_yaml(config, out_path)
    console.print(f"[green]Wrote config to {out_path}[/green]")
