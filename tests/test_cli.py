"""
Test suite for reporting and the command line entry point.
"""
import json

import pytest

from sgd_logreg import cli
from sgd_logreg.entities import SweepPoint
from sgd_logreg.reporting import build_report, format_table, write_report


@pytest.fixture
def points():
    return {
        0.1: SweepPoint(0.1, 0.9, 0.85, 2, [0.9, 0.9], [0.8, 0.9]),
        1.0: SweepPoint(1.0, 0.75, 0.5, 2, [0.7, 0.8], [0.5, 0.5]),
    }


class TestReporting:
    """Test rendering of sweep tables."""

    def test_format_table(self, points):
        """Test one row per grid value with the mean accuracies."""
        table = format_table(points, "alpha")
        lines = table.splitlines()
        assert "alpha" in lines[0]
        assert len(lines) == 4
        assert "0.9000" in lines[2] and "0.8500" in lines[2]

    def test_write_report(self, tmp_path, points):
        """Test that the report nests pair and sweep names."""
        path = write_report(tmp_path / "out" / "report.json", {"0v1": {"learning_rate": points}}, {"seed": 1})
        payload = json.loads(path.read_text(encoding="utf-8"))

        assert payload["config"] == {"seed": 1}
        rows = payload["pairs"]["0v1"]["learning_rate"]
        assert [row["value"] for row in rows] == [0.1, 1.0]
        assert rows[0]["test_accuracies"] == [0.8, 0.9]

    def test_sample_size_rows_carry_subset_size(self, points):
        """Test that the training subset size is reported when known."""
        points[0.1].n_train_samples = 12
        report = build_report({"3v5": {"sample_size": points}})
        rows = report["pairs"]["3v5"]["sample_size"]
        assert rows[0]["n_train_samples"] == 12
        assert "n_train_samples" not in rows[1]


class TestCommandLine:
    """Test the end-to-end command line run."""

    def test_main_writes_report(self, tmp_path, digit_tables, capsys):
        """Test a full run over both default class pairs."""
        train_path, test_path = digit_tables
        report = tmp_path / "report.json"
        exit_code = cli.main([
            str(train_path),
            str(test_path),
            "--alphas", "0.05,0.5",
            "--fractions", "0.5,1.0",
            "--repetitions", "1",
            "--seed", "3",
            "--report", str(report),
        ])

        assert exit_code == 0
        payload = json.loads(report.read_text(encoding="utf-8"))
        assert set(payload["pairs"]) == {"0v1", "3v5"}
        assert len(payload["pairs"]["0v1"]["learning_rate"]) == 2
        assert len(payload["pairs"]["3v5"]["sample_size"]) == 2
        assert payload["config"]["seed"] == 3
        assert "accuracy by learning rate" in capsys.readouterr().out

    def test_config_file_and_flags(self, tmp_path):
        """Test that command line flags override the JSON configuration."""
        config_path = tmp_path / "experiment.json"
        config_path.write_text(
            json.dumps({"training": {"alpha": 0.2}, "sweep": {"repetitions": 4}, "seed": 8}),
            encoding="utf-8",
        )
        args = cli.build_parser().parse_args(
            ["train.csv", "test.csv", "--config", str(config_path), "--repetitions", "2", "--seed", "1"]
        )
        config = cli.resolve_config(args)

        assert config.training.alpha == 0.2
        assert config.sweep.repetitions == 2
        assert config.seed == 1

    def test_missing_table_fails(self, tmp_path):
        """Test that a missing input table exits with a failure code."""
        exit_code = cli.main([str(tmp_path / "nope.csv"), str(tmp_path / "nope.csv")])
        assert exit_code == 1
