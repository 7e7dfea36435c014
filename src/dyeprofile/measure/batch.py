"""ProfileEngine — run every condition group of a dataset through the profiler."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import numpy as np

from dyeprofile.core.exceptions import OutputDirectoryError, ReplicateCountError
from dyeprofile.core.models import REPLICATES_PER_GROUP, ProfileConfig
from dyeprofile.io.export import profile_csv_name, write_profile_csv
from dyeprofile.io.images import (
    ALIGNED_DIRNAME,
    aligned_image_name,
    load_group,
    write_aligned_image,
)
from dyeprofile.io.scanner import FileScanner, ScanResult
from dyeprofile.io.transforms import align_images
from dyeprofile.measure.profiler import ChannelProfiler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchResult:
    """Result of a profiling run.

    Attributes:
        codes_found: Condition codes discovered in the input folder.
        codes_processed: Codes whose CSV was written.
        codes_skipped: Codes skipped after a load or write failure.
        csv_paths: CSV files written, in code order.
        aligned_images_written: Number of aligned TIFFs written.
        elapsed_seconds: Wall-clock time in seconds.
        warnings: List of warning messages.
    """

    codes_found: list[int]
    codes_processed: list[int]
    codes_skipped: list[int]
    csv_paths: list[Path]
    aligned_images_written: int
    elapsed_seconds: float
    warnings: list[str] = field(default_factory=list)


class ProfileEngine:
    """Executes a ProfileConfig: scan, then load, align, profile, export per group.

    Groups are processed one at a time; a group's images are released
    before the next group is loaded.

    Args:
        log: Logger that receives progress and error messages. Defaults
            to this module's logger.
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def run(
        self,
        config: ProfileConfig,
        progress_callback: Callable[[int, int, str], None] | None = None,
    ) -> BatchResult:
        """Profile every condition group found under config.input_dir.

        Args:
            config: Validated run configuration.
            progress_callback: Optional callback(current, total, label).

        Returns:
            BatchResult with written paths, skipped codes and warnings.

        Raises:
            FileNotFoundError: If the input folder does not exist.
            ReplicateCountError: If any code lacks exactly 3 replicate files.
            OutputDirectoryError: If the output folder cannot be created.
        """
        start = time.monotonic()

        try:
            scan_result = FileScanner(log=self._log).scan(config.input_dir, config.identifier)
        except ReplicateCountError as e:
            self._log.error("Error: %s", e)
            raise
        warnings = list(scan_result.warnings)
        self._log.info(
            "Found %d condition code(s) for %s: %s",
            len(scan_result.codes), config.identifier, scan_result.codes,
        )

        try:
            config.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputDirectoryError(str(config.output_dir), str(e)) from e

        profiler = ChannelProfiler(config.mapping, config.channel)
        processed: list[int] = []
        skipped: list[int] = []
        csv_paths: list[Path] = []
        aligned_written = 0
        total = len(scan_result.codes)

        for i, code in enumerate(scan_result.codes):
            csv_path, written = self._process_group(
                config, scan_result, code, profiler, warnings,
            )
            aligned_written += written
            if csv_path is None:
                skipped.append(code)
            else:
                processed.append(code)
                csv_paths.append(csv_path)

            if progress_callback:
                progress_callback(i + 1, total, f"RPM {code}")

        elapsed = time.monotonic() - start

        return BatchResult(
            codes_found=list(scan_result.codes),
            codes_processed=processed,
            codes_skipped=skipped,
            csv_paths=csv_paths,
            aligned_images_written=aligned_written,
            elapsed_seconds=round(elapsed, 3),
            warnings=warnings,
        )

    def _process_group(
        self,
        config: ProfileConfig,
        scan_result: ScanResult,
        code: int,
        profiler: ChannelProfiler,
        warnings: list[str],
    ) -> tuple[Path | None, int]:
        """Run one condition group. Returns (csv path or None, aligned images written)."""
        self._log.info("Processing RPM: %d", code)

        names, images = load_group(
            config.input_dir,
            scan_result.groups[code].filenames,
            blur_radius=config.blur_radius,
            log=self._log,
        )
        if len(images) != REPLICATES_PER_GROUP:
            msg = (
                f"Unexpected number of images for RPM {code}. "
                f"Expected {REPLICATES_PER_GROUP}, but found {len(images)}."
            )
            self._log.error("Error: %s", msg)
            warnings.append(msg)
            return None, 0

        aligned = align_images(images)
        del images
        height, width = aligned[0].shape[:2]
        for idx, name in enumerate(names, start=1):
            self._log.info("Aligned image %d (%s) dimensions: %dx%d", idx, name, height, width)

        written = self._write_aligned(config, code, aligned, warnings)

        profile = profiler.profile(aligned)
        csv_path = config.output_dir / profile_csv_name(config.identifier, code, config.channel)
        try:
            write_profile_csv(profile, csv_path)
        except OSError as e:
            msg = f"Could not create CSV file {csv_path}: {e}"
            self._log.error("Error: %s", msg)
            warnings.append(msg)
            return None, written

        self._log.info(
            "Processed RPM %d and saved %s data to: %s",
            code, config.channel.label, csv_path,
        )
        return csv_path, written

    def _write_aligned(
        self,
        config: ProfileConfig,
        code: int,
        aligned: list[np.ndarray],
        warnings: list[str],
    ) -> int:
        """Save aligned replicates under <output>/aligned_images; failures are logged."""
        aligned_dir = config.output_dir / ALIGNED_DIRNAME
        try:
            aligned_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self._log.warning("Could not create %s: %s", aligned_dir, e)

        written = 0
        for idx, image in enumerate(aligned, start=1):
            height, width = image.shape[:2]
            path = aligned_dir / aligned_image_name(config.identifier, code, idx, width, height)
            self._log.debug(
                "Aligned image %d: dtype=%s, min/max=%s/%s",
                idx, image.dtype, image.min(), image.max(),
            )
            try:
                write_aligned_image(path, image)
            except Exception as exc:
                if isinstance(exc, (MemoryError, KeyboardInterrupt, SystemExit)):
                    raise
                msg = f"Failed to save image {path}: {exc}"
                self._log.error(msg)
                warnings.append(msg)
                continue
            self._log.info("Saved aligned image to: %s", path)
            written += 1
        return written
