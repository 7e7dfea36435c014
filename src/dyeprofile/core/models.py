"""Data models for the DyeProfile core module."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from dyeprofile.core.exceptions import ConfigError

REPLICATES_PER_GROUP = 3


class Channel(Enum):
    """Colour channel selected for profiling."""

    RED = "R"
    GREEN = "G"
    BLUE = "B"

    @property
    def index(self) -> int:
        """Position of the channel along the last axis of an RGB array."""
        return _CHANNEL_INDEX[self]

    @property
    def letter(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        """Column label, e.g. ``Redness``."""
        return f"{self.name.title()}ness"

    @classmethod
    def parse(cls, value: str | Channel) -> Channel:
        """Resolve a channel from a letter or name, case-insensitively.

        Raises:
            ConfigError: If the value names no channel.
        """
        if isinstance(value, Channel):
            return value
        text = str(value).strip().upper()
        for channel in cls:
            if text in (channel.value, channel.name):
                return channel
        raise ConfigError(f"Invalid channel {value!r}. Must be one of R, G, B")


_CHANNEL_INDEX = {Channel.RED: 0, Channel.GREEN: 1, Channel.BLUE: 2}


@dataclass(frozen=True)
class DistanceMapping:
    """Linear map from pixel column index to physical distance.

    Column 0 sits at ``upper``; the last column approaches ``lower``.
    ``upper > lower`` is a precondition.
    """

    upper: float
    lower: float

    def pixel_width(self, columns: int) -> float:
        return (self.upper - self.lower) / columns

    def distance(self, x: int, columns: int) -> float:
        return self.upper - x * self.pixel_width(columns)


@dataclass(frozen=True)
class ConditionGroup:
    """One condition code and the filenames of its replicates."""

    code: int
    filenames: tuple[str, ...]

    @property
    def is_complete(self) -> bool:
        return len(self.filenames) == REPLICATES_PER_GROUP


@dataclass(frozen=True)
class ProfileConfig:
    """Immutable settings for one profiling run."""

    identifier: str
    input_dir: Path
    output_dir: Path
    distance_upper: float
    distance_lower: float
    channel: Channel = Channel.RED
    blur_radius: int = 0
    log_dir: Path = Path("logs")

    def __post_init__(self) -> None:
        """Coerce field types and validate values at construction time."""
        object.__setattr__(self, "input_dir", Path(self.input_dir))
        object.__setattr__(self, "output_dir", Path(self.output_dir))
        object.__setattr__(self, "log_dir", Path(self.log_dir))
        object.__setattr__(self, "channel", Channel.parse(self.channel))

        if not self.identifier or not self.identifier.strip():
            raise ConfigError("Identifier must not be empty")
        try:
            upper = float(self.distance_upper)
            lower = float(self.distance_lower)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Distance bounds must be numbers: {e}") from e
        if not (math.isfinite(upper) and math.isfinite(lower)):
            raise ConfigError("Distance bounds must be finite")
        if lower >= upper:
            raise ConfigError(
                f"Lower bound must be less than upper bound ({upper})"
            )
        object.__setattr__(self, "distance_upper", upper)
        object.__setattr__(self, "distance_lower", lower)

        if isinstance(self.blur_radius, bool) or not isinstance(self.blur_radius, int):
            raise ConfigError(f"Blur radius must be an integer, got {self.blur_radius!r}")
        if self.blur_radius < 0:
            raise ConfigError("Blur radius must be non-negative")

    @property
    def mapping(self) -> DistanceMapping:
        return DistanceMapping(self.distance_upper, self.distance_lower)
