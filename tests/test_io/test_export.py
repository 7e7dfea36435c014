"""Tests for dyeprofile.io.export."""

import csv

import numpy as np
import pytest

from dyeprofile.core.models import Channel, DistanceMapping
from dyeprofile.io.export import csv_header, profile_csv_name, write_profile_csv
from dyeprofile.measure.profiler import ChannelProfiler


class TestNaming:
    @pytest.mark.parametrize("channel,expected", [
        (Channel.RED, "Distance (cm),Redness R1,Redness R2,Redness R3,Average Redness"),
        (Channel.GREEN, "Distance (cm),Greenness R1,Greenness R2,Greenness R3,Average Greenness"),
        (Channel.BLUE, "Distance (cm),Blueness R1,Blueness R2,Blueness R3,Average Blueness"),
    ])
    def test_header(self, channel, expected):
        assert csv_header(channel) == expected

    def test_csv_name_uses_channel_letter(self):
        assert profile_csv_name("W", 100, Channel.GREEN) == "W_100_Gness.csv"


class TestWriteProfileCsv:
    @pytest.fixture
    def profile(self):
        images = [np.full((2, 4, 3), (2.0, 1.0, 1.0), dtype=np.float32) for _ in range(3)]
        return ChannelProfiler(DistanceMapping(8.0, 0.0), Channel.RED).profile(images)

    def test_header_and_rows(self, profile, tmp_path):
        p = tmp_path / "out.csv"
        write_profile_csv(profile, p)

        lines = p.read_text().splitlines()
        assert lines[0] == csv_header(Channel.RED)
        assert len(lines) == 5

    def test_values_in_decreasing_distance(self, profile, tmp_path):
        p = tmp_path / "out.csv"
        write_profile_csv(profile, p)

        with open(p, newline="") as f:
            rows = list(csv.reader(f))[1:]
        distances = [float(r[0]) for r in rows]
        assert distances == [8.0, 6.0, 4.0, 2.0]
        for r in rows:
            assert [float(v) for v in r[1:]] == pytest.approx([0.5, 0.5, 0.5, 0.5])

    def test_unwritable_path_raises(self, profile, tmp_path):
        with pytest.raises(OSError):
            write_profile_csv(profile, tmp_path / "missing" / "out.csv")
