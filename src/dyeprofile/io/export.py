"""CSV export of channel profiles."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from dyeprofile.core.models import Channel

if TYPE_CHECKING:
    from dyeprofile.measure.profiler import ChannelProfile


def column_names(channel: Channel) -> list[str]:
    """Table header fields for a profile of ``channel``."""
    label = channel.label
    return [
        "Distance (cm)",
        f"{label} R1",
        f"{label} R2",
        f"{label} R3",
        f"Average {label}",
    ]


def csv_header(channel: Channel) -> str:
    """Header line, e.g. ``Distance (cm),Redness R1,...,Average Redness``."""
    return ",".join(column_names(channel))


def profile_csv_name(identifier: str, code: int, channel: Channel) -> str:
    """Output filename, e.g. ``W_100_Rness.csv``."""
    return f"{identifier}_{code}_{channel.letter}ness.csv"


def write_profile_csv(profile: ChannelProfile, path: Path) -> None:
    """Write a profile as comma-separated text, one row per pixel column.

    Rows follow column order, so distance decreases down the file.

    Raises:
        OSError: If the file cannot be opened for writing.
    """
    with open(path, "w", newline="", encoding="utf-8") as f:
        profile.to_frame().to_csv(f, index=False, lineterminator="\n")
