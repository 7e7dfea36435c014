"""Tests for the dyeprofile profile command."""

from __future__ import annotations

import csv
from pathlib import Path

import pytest
from click.testing import CliRunner

from dyeprofile.cli.main import cli
from dyeprofile.core.exceptions import ConfigError
from dyeprofile.cli.profile import build_config


def _args(input_dir: Path, out: Path, logs: Path, *extra: str) -> list[str]:
    return [
        "profile", str(input_dir), str(out),
        "-i", "W", "-u", "10", "-l", "0", "-c", "r", "-b", "0",
        "--log-dir", str(logs), *extra,
    ]


class TestProfileCommand:
    def test_writes_csv_per_code(self, runner: CliRunner, two_code_dataset: Path, tmp_path: Path):
        out = tmp_path / "out"
        result = runner.invoke(cli, _args(two_code_dataset, out, tmp_path / "logs"))
        assert result.exit_code == 0, result.output
        assert "Profiling complete" in result.output
        assert sorted(p.name for p in out.glob("*.csv")) == ["W_100_Rness.csv", "W_200_Rness.csv"]

        with open(out / "W_100_Rness.csv", newline="") as f:
            rows = list(csv.reader(f))
        assert [float(r[0]) for r in rows[1:]] == [10.0, 5.0]

    def test_writes_run_log(self, runner: CliRunner, two_code_dataset: Path, tmp_path: Path):
        logs = tmp_path / "logs"
        result = runner.invoke(cli, _args(two_code_dataset, tmp_path / "out", logs))
        assert result.exit_code == 0, result.output

        log_files = list(logs.glob("W_log_*.txt"))
        assert len(log_files) == 1
        text = log_files[0].read_text()
        assert "Processing RPM: 100" in text
        assert "Processed RPM 200" in text

    def test_incomplete_group_exits_nonzero(
        self, runner: CliRunner, write_dataset, make_rgb, tmp_path: Path,
    ):
        d = write_dataset({
            "W_100_R1.tif": make_rgb(2, 2, (1, 1, 1)),
            "W_100_R2.tif": make_rgb(2, 2, (1, 1, 1)),
        })
        out = tmp_path / "out"
        result = runner.invoke(cli, _args(d, out, tmp_path / "logs"))
        assert result.exit_code == 1
        assert "RPM 100" in result.output
        assert not out.exists()

    def test_missing_input_folder(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(
            cli, _args(tmp_path / "nope", tmp_path / "out", tmp_path / "logs"),
        )
        assert result.exit_code == 1
        assert "does not exist" in result.output

    def test_invalid_bounds_rejected(self, runner: CliRunner, two_code_dataset: Path, tmp_path: Path):
        args = _args(two_code_dataset, tmp_path / "out", tmp_path / "logs")
        args[args.index("-l") + 1] = "20"
        result = runner.invoke(cli, args)
        assert result.exit_code == 1
        assert "Lower bound" in result.output

    def test_negative_blur_rejected_by_click(self, runner: CliRunner, two_code_dataset: Path, tmp_path: Path):
        args = _args(two_code_dataset, tmp_path / "out", tmp_path / "logs")
        args[args.index("-b") + 1] = "-3"
        result = runner.invoke(cli, args)
        assert result.exit_code == 2

    def test_config_file_with_overrides(
        self, runner: CliRunner, two_code_dataset: Path, tmp_path: Path,
    ):
        cfg = tmp_path / "run.yaml"
        cfg.write_text(
            "identifier: W\n"
            "distance_upper: 10\n"
            "distance_lower: 0\n"
            "channel: R\n"
            f"input_dir: {two_code_dataset}\n"
            f"output_dir: {tmp_path / 'from_file'}\n"
            f"log_dir: {tmp_path / 'logs'}\n"
        )
        out = tmp_path / "override"
        result = runner.invoke(cli, ["profile", "--config", str(cfg), "-c", "B", str(two_code_dataset), str(out)])
        assert result.exit_code == 0, result.output
        assert (out / "W_100_Bness.csv").exists()
        assert not (tmp_path / "from_file").exists()

    def test_help(self, runner: CliRunner):
        result = runner.invoke(cli, ["profile", "--help"])
        assert result.exit_code == 0
        assert "Profile dye-gradient images" in result.output


class TestBuildConfig:
    def test_missing_values_raise(self):
        with pytest.raises(ConfigError, match="missing required key"):
            build_config(None, identifier="W", distance_upper=None)

    def test_none_overrides_ignored(self, tmp_path):
        config = build_config(
            None, identifier="W", distance_upper=5.0, distance_lower=1.0,
            input_dir=str(tmp_path), output_dir=str(tmp_path), channel=None,
        )
        assert config.channel.letter == "R"
