"""Interactive prompt sequence collecting a profiling configuration."""

from __future__ import annotations

from pathlib import Path

from rich.prompt import FloatPrompt, IntPrompt, Prompt

from dyeprofile.cli.utils import console, error_handler
from dyeprofile.core.models import Channel, ProfileConfig

DEFAULT_BLUR_RADIUS = 10


def _ask_text(question: str) -> str:
    """Ask until a non-blank answer is given."""
    while True:
        answer = Prompt.ask(question, console=console).strip()
        if answer:
            return answer
        console.print("[red]Error:[/red] A value is required.")


def prompt_config(log_dir: Path = Path("logs")) -> ProfileConfig:
    """Ask for every run setting, re-prompting on invalid answers.

    Raises:
        EOFError: If input ends before all answers are given.
    """
    identifier = _ask_text("Enter the identifier for the dataset (e.g., W, SF, etc.)")

    upper = FloatPrompt.ask(
        "Please specify Distance Upperbound (Distance at left side of all images)",
        console=console,
    )
    while True:
        lower = FloatPrompt.ask(
            "Please specify Distance Lowerbound (Distance at right side of all images)",
            console=console,
        )
        if lower < upper:
            break
        console.print(f"[red]Error:[/red] Lower bound must be less than upper bound ({upper}).")

    while True:
        answer = Prompt.ask("Specify channel to analyze (R/G/B)", console=console).strip().upper()
        if answer in ("R", "G", "B"):
            channel = Channel(answer)
            break
        console.print("[red]Error:[/red] Please enter R, G, or B.")

    while True:
        blur_radius = IntPrompt.ask(
            "Please specify the Gaussian blur radius (0 for no blur)",
            default=DEFAULT_BLUR_RADIUS,
            console=console,
        )
        if blur_radius >= 0:
            break
        console.print("[red]Error:[/red] Please enter a non-negative number.")

    input_dir = _ask_text("Enter the path to the input folder")
    output_dir = _ask_text("Enter the path to the output folder")

    return ProfileConfig(
        identifier=identifier,
        input_dir=Path(input_dir).expanduser(),
        output_dir=Path(output_dir).expanduser(),
        distance_upper=upper,
        distance_lower=lower,
        channel=channel,
        blur_radius=blur_radius,
        log_dir=log_dir,
    )


@error_handler
def run_interactive() -> None:
    """Collect a configuration at the console, then run the profiler."""
    from dyeprofile.cli.profile import run_profile

    console.print("\n[bold]DyeProfile[/bold] — Dye Gradient to CSV\n")
    try:
        config = prompt_config()
    except (EOFError, KeyboardInterrupt):
        console.print("\n[dim]Cancelled.[/dim]")
        return
    run_profile(config)
