"""Tests for dyeprofile.measure.front."""

from __future__ import annotations

import math
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from dyeprofile.measure.front import (
    SUMMARY_COLUMNS,
    FrontSummary,
    analyze_fronts,
    condition_code_from_name,
    detect_front,
    summaries_to_frame,
)


def _step_profile(step_at: float) -> tuple[np.ndarray, np.ndarray]:
    """Distance 30 -> 0; dye (0.6) below step_at, background (0.3) above."""
    distance = 30.0 - np.arange(60) * 0.5
    intensity = np.where(distance < step_at, 0.6, 0.3)
    return distance, intensity


def _write_profile(folder: Path, name: str, steps: tuple[float, float, float]) -> None:
    distance, _ = _step_profile(steps[0])
    data = {"Distance (cm)": distance}
    reps = []
    for i, step in enumerate(steps, start=1):
        _, intensity = _step_profile(step)
        data[f"Redness R{i}"] = intensity
        reps.append(intensity)
    data["Average Redness"] = np.mean(reps, axis=0)
    pd.DataFrame(data).to_csv(folder / name, index=False)


class TestConditionCode:
    def test_extracts_code(self):
        assert condition_code_from_name("W_100_Rness.csv") == 100

    def test_none_without_code(self):
        assert condition_code_from_name("summary.csv") is None


class TestDetectFront:
    def test_finds_step(self):
        distance, intensity = _step_profile(12.0)
        assert detect_front(distance, intensity) == 12.0

    def test_tolerance_controls_threshold(self):
        distance, intensity = _step_profile(12.0)
        assert detect_front(distance, intensity, tolerance=0.5) == distance[-1]

    def test_not_found_is_nan(self):
        distance = np.array([3.0, 2.0, 1.0])
        intensity = np.array([0.0, 1.0, 1.0])
        assert math.isnan(detect_front(distance, intensity, window=0.5, tolerance=-0.1))

    def test_empty_is_nan(self):
        assert math.isnan(detect_front(np.array([]), np.array([])))


class TestFrontSummary:
    def test_confidence_band(self):
        s = FrontSummary(code=1, fronts=(1.0, 2.0, 3.0), mean=2.0, std=1.0)
        half = 1.96 / math.sqrt(3)
        assert s.ci_lower == pytest.approx(2.0 - half)
        assert s.ci_upper == pytest.approx(2.0 + half)


class TestAnalyzeFronts:
    def test_summaries_sorted_by_code(self, tmp_path):
        _write_profile(tmp_path, "W_200_Rness.csv", (10.0, 10.0, 10.0))
        _write_profile(tmp_path, "W_100_Rness.csv", (12.0, 13.0, 14.0))

        analysis = analyze_fronts(tmp_path)
        assert [s.code for s in analysis.summaries] == [100, 200]

        first = analysis.summaries[0]
        assert first.fronts == (12.0, 13.0, 14.0)
        assert first.mean == pytest.approx(13.0)
        assert first.std == pytest.approx(1.0)
        assert first.source == tmp_path / "W_100_Rness.csv"

    def test_max_code_filters(self, tmp_path):
        _write_profile(tmp_path, "W_100_Rness.csv", (12.0, 12.0, 12.0))
        _write_profile(tmp_path, "W_300_Rness.csv", (12.0, 12.0, 12.0))
        analysis = analyze_fronts(tmp_path, max_code=200)
        assert [s.code for s in analysis.summaries] == [100]

    def test_unnamed_and_malformed_files_warn(self, tmp_path):
        _write_profile(tmp_path, "summary.csv", (12.0, 12.0, 12.0))
        (tmp_path / "W_5_Rness.csv").write_text("a,b\n1,2\n")

        analysis = analyze_fronts(tmp_path)
        assert analysis.summaries == []
        assert len(analysis.warnings) == 2

    def test_missing_folder_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            analyze_fronts(tmp_path / "nope")


class TestSummariesToFrame:
    def test_columns(self):
        s = FrontSummary(code=100, fronts=(1.0, 2.0, 3.0), mean=2.0, std=1.0)
        frame = summaries_to_frame([s])
        assert list(frame.columns) == SUMMARY_COLUMNS
        assert frame.iloc[0]["RPM"] == 100
