"""Solvent-front detection over emitted channel profiles."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
import pandas as pd

from dyeprofile.core.models import REPLICATES_PER_GROUP

logger = logging.getLogger(__name__)

# Half-width multiplier of a 95% confidence band on a mean of 3 replicates.
_CI_Z = 1.96

_CODE_RE = re.compile(r"(?<=_)\d+(?=_)")

SUMMARY_COLUMNS = [
    "RPM",
    "Front R1",
    "Front R2",
    "Front R3",
    "Mean",
    "Std",
    "CI Lower",
    "CI Upper",
]


@dataclass(frozen=True)
class FrontSummary:
    """Solvent-front distances for one condition code.

    Attributes:
        code: Condition code (RPM).
        fronts: Front distance of each replicate (NaN if not found).
        mean: Mean front distance.
        std: Sample standard deviation across replicates.
        source: CSV file the profile came from.
    """

    code: int
    fronts: tuple[float, ...]
    mean: float
    std: float
    source: Path | None = None

    @property
    def ci_lower(self) -> float:
        return self.mean - _CI_Z * self.std / math.sqrt(len(self.fronts))

    @property
    def ci_upper(self) -> float:
        return self.mean + _CI_Z * self.std / math.sqrt(len(self.fronts))


@dataclass(frozen=True)
class FrontAnalysis:
    """All summaries found in a folder, sorted by code."""

    summaries: list[FrontSummary]
    warnings: list[str] = field(default_factory=list)


def condition_code_from_name(name: str) -> int | None:
    """First ``_<digits>_`` group of a filename, e.g. 100 for ``W_100_Rness.csv``."""
    m = _CODE_RE.search(name)
    return int(m.group()) if m else None


def detect_front(
    distance: np.ndarray,
    intensity: np.ndarray,
    window: float = 10.0,
    tolerance: float = 0.05,
) -> float:
    """Locate the solvent front along one replicate profile.

    The reference level is the mean intensity over the ``window`` of
    largest distances. Scanning from the last row towards the first, the
    front is the distance of the first row whose intensity does not
    exceed reference + tolerance.

    Args:
        distance: Distance of each profile row.
        intensity: Channel-ness value of each row.
        window: Width of the reference region, in distance units.
        tolerance: Allowed excess over the reference level.

    Returns:
        Front distance, or NaN if no row qualifies.
    """
    distance = np.asarray(distance, dtype=np.float64)
    intensity = np.asarray(intensity, dtype=np.float64)
    if distance.size == 0:
        return math.nan

    in_window = distance >= distance.max() - window
    reference = float(intensity[in_window].mean())

    hits = np.nonzero(intensity <= reference + tolerance)[0]
    if hits.size == 0:
        return math.nan
    return float(distance[hits[-1]])


def read_profile_csv(path: Path) -> pd.DataFrame:
    """Read a profile CSV written by the profiler.

    Raises:
        ValueError: If the table has fewer than distance + 3 replicate columns.
    """
    frame = pd.read_csv(path)
    if frame.shape[1] < 1 + REPLICATES_PER_GROUP:
        raise ValueError(
            f"{Path(path).name}: expected at least {1 + REPLICATES_PER_GROUP} "
            f"columns, got {frame.shape[1]}"
        )
    return frame


def summarize_profile(
    frame: pd.DataFrame,
    code: int,
    window: float = 10.0,
    tolerance: float = 0.05,
    source: Path | None = None,
) -> FrontSummary:
    """Detect the front of each replicate column of a profile table."""
    distance = frame.iloc[:, 0].to_numpy()
    fronts = tuple(
        detect_front(distance, frame.iloc[:, rep].to_numpy(), window, tolerance)
        for rep in range(1, REPLICATES_PER_GROUP + 1)
    )
    values = np.array(fronts)
    return FrontSummary(
        code=code,
        fronts=fronts,
        mean=float(values.mean()),
        std=float(values.std(ddof=1)),
        source=source,
    )


def analyze_fronts(
    folder: Path,
    max_code: int | None = None,
    window: float = 10.0,
    tolerance: float = 0.05,
) -> FrontAnalysis:
    """Summarize the solvent front of every profile CSV in a folder.

    Args:
        folder: Folder of profile CSVs.
        max_code: If given, codes above it are left out.
        window: Reference window width, in distance units.
        tolerance: Allowed excess over the reference level.

    Returns:
        FrontAnalysis with summaries sorted by code.

    Raises:
        FileNotFoundError: If folder does not exist.
    """
    folder = Path(folder)
    if not folder.is_dir():
        raise FileNotFoundError(f"Profile folder does not exist: {folder}")

    summaries: list[FrontSummary] = []
    warnings: list[str] = []
    for path in sorted(folder.glob("*.csv")):
        code = condition_code_from_name(path.name)
        if code is None:
            msg = f"{path.name}: no condition code in filename, skipping"
            logger.warning(msg)
            warnings.append(msg)
            continue
        if max_code is not None and code > max_code:
            continue
        try:
            frame = read_profile_csv(path)
        except (ValueError, OSError, pd.errors.ParserError) as exc:
            msg = f"{path.name}: could not read profile: {exc}"
            logger.warning(msg)
            warnings.append(msg)
            continue
        summaries.append(summarize_profile(frame, code, window, tolerance, source=path))

    summaries.sort(key=lambda s: s.code)
    return FrontAnalysis(summaries=summaries, warnings=warnings)


def summaries_to_frame(summaries: list[FrontSummary]) -> pd.DataFrame:
    """Tabular form of front summaries, one row per code."""
    rows = [
        [s.code, *s.fronts, s.mean, s.std, s.ci_lower, s.ci_upper]
        for s in summaries
    ]
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
