"""FileScanner — folder listing and condition-code grouping of replicate files."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from dyeprofile.core.exceptions import ReplicateCountError
from dyeprofile.core.models import REPLICATES_PER_GROUP, ConditionGroup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanResult:
    """What the scanner found in an input folder."""

    source_path: Path
    identifier: str
    filenames: list[str]
    codes: list[int]
    groups: dict[int, ConditionGroup]
    warnings: list[str] = field(default_factory=list)


def code_pattern(identifier: str) -> re.Pattern[str]:
    """Strict filename pattern ``<identifier>_<code>_R<n>``."""
    return re.compile(re.escape(identifier) + r"_(\d+)_R\d+")


def replicate_prefix(identifier: str, code: int) -> str:
    """Substring shared by every replicate file of a condition code."""
    return f"{identifier}_{code}_R"


def list_filenames(folder: Path) -> list[str]:
    """Return the names of regular files directly inside ``folder``, sorted.

    Raises:
        FileNotFoundError: If the folder does not exist.
        ValueError: If the path is not a directory.
    """
    folder = Path(folder)
    if not folder.exists():
        raise FileNotFoundError(f"Input folder does not exist: {folder}")
    if not folder.is_dir():
        raise ValueError(f"Input path is not a directory: {folder}")
    return sorted(child.name for child in folder.iterdir() if child.is_file())


def extract_condition_codes(filenames: list[str], identifier: str) -> list[int]:
    """Collect the distinct condition codes named by the strict pattern.

    Filenames that do not match are ignored.

    Returns:
        Sorted unique condition codes.
    """
    pattern = code_pattern(identifier)
    codes: set[int] = set()
    for name in filenames:
        m = pattern.search(name)
        if m:
            codes.add(int(m.group(1)))
    return sorted(codes)


def matching_filenames(filenames: list[str], identifier: str, code: int) -> list[str]:
    """Filenames containing the replicate prefix for ``code``."""
    prefix = replicate_prefix(identifier, code)
    return [name for name in filenames if prefix in name]


def count_replicates(filenames: list[str], identifier: str, code: int) -> int:
    """Count files for ``code`` by substring match (looser than extraction)."""
    return len(matching_filenames(filenames, identifier, code))


def validate_replicates(
    filenames: list[str],
    codes: list[int],
    identifier: str,
    expected: int = REPLICATES_PER_GROUP,
) -> None:
    """Check every code has exactly ``expected`` replicate files.

    Raises:
        ReplicateCountError: For the first code whose count differs.
    """
    for code in codes:
        count = count_replicates(filenames, identifier, code)
        if count != expected:
            raise ReplicateCountError(code, count, expected)


class FileScanner:
    """Groups a folder's filenames into validated condition groups.

    Args:
        log: Logger for scan warnings. Defaults to this module's logger.
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def scan(
        self,
        path: Path,
        identifier: str,
        filenames: list[str] | None = None,
    ) -> ScanResult:
        """Scan a folder (or explicit filename list) for replicate groups.

        Args:
            path: Input folder (used as source_path in result).
            identifier: Dataset tag selecting which files belong to the run.
            filenames: Optional explicit filename list. When provided,
                the folder is not listed.

        Returns:
            ScanResult with sorted codes and one group per code.

        Raises:
            FileNotFoundError: If path does not exist (when filenames is None).
            ValueError: If path is not a directory (when filenames is None).
            ReplicateCountError: If any code lacks exactly 3 replicate files.
        """
        path = Path(path)
        names = sorted(filenames) if filenames is not None else list_filenames(path)

        codes = extract_condition_codes(names, identifier)
        validate_replicates(names, codes, identifier)

        pattern = code_pattern(identifier)
        groups: dict[int, ConditionGroup] = {}
        warnings: list[str] = []
        for code in codes:
            members = matching_filenames(names, identifier, code)
            for name in members:
                m = pattern.search(name)
                if m is None or int(m.group(1)) != code:
                    msg = (
                        f"{name} is counted as a replicate of RPM {code} "
                        "but does not match <identifier>_<code>_R<n>"
                    )
                    self._log.warning(msg)
                    warnings.append(msg)
            groups[code] = ConditionGroup(code=code, filenames=tuple(members))

        if not codes:
            warnings.append(f"No files matching {identifier}_<code>_R<n> in: {path}")

        return ScanResult(
            source_path=path,
            identifier=identifier,
            filenames=names,
            codes=codes,
            groups=groups,
            warnings=warnings,
        )
