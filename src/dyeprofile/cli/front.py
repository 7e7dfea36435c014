"""dyeprofile front — solvent-front distances from profile CSVs."""

from __future__ import annotations

import math
from pathlib import Path

import click
from rich.table import Table

from dyeprofile.cli.utils import console, error_handler


@click.command()
@click.argument("folder", type=click.Path(exists=True, file_okay=False))
@click.option("--max-rpm", type=int, default=None, help="Leave out RPMs above this value.")
@click.option(
    "--window", type=float, default=10.0, show_default=True,
    help="Width of the reference region at the largest distances.",
)
@click.option(
    "--tolerance", type=float, default=0.05, show_default=True,
    help="Allowed excess over the reference level.",
)
@click.option("-o", "--output", type=click.Path(dir_okay=False), default=None,
              help="Also write the summary to this CSV file.")
@error_handler
def front(
    folder: str,
    max_rpm: int | None,
    window: float,
    tolerance: float,
    output: str | None,
) -> None:
    """Detect the solvent front in every profile CSV of FOLDER."""
    from dyeprofile.measure.front import analyze_fronts, summaries_to_frame

    analysis = analyze_fronts(Path(folder), max_code=max_rpm, window=window, tolerance=tolerance)
    for warning in analysis.warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning}")

    if not analysis.summaries:
        console.print(f"[yellow]No profile CSVs found in {folder}[/yellow]")
        return

    table = Table(title="Solvent Front Distances")
    table.add_column("RPM", justify="right")
    for col in ("R1", "R2", "R3", "Mean", "Std"):
        table.add_column(col, justify="right")
    for s in analysis.summaries:
        table.add_row(str(s.code), *(_fmt(v) for v in (*s.fronts, s.mean)), _fmt(s.std, 4))
    console.print(table)

    if output:
        out_path = Path(output).expanduser()
        summaries_to_frame(analysis.summaries).to_csv(out_path, index=False)
        console.print(f"[green]Exported {len(analysis.summaries)} rows to {out_path}[/green]")


def _fmt(value: float, digits: int = 2) -> str:
    return "-" if math.isnan(value) else f"{value:.{digits}f}"
