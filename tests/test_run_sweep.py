"""Tests for the voxel-sweep CLI (voxel_episodes.run_sweep)."""

from __future__ import annotations

import csv
import io
import json
import logging
from pathlib import Path

import pytest

import voxel_episodes.run_sweep as run_sweep_module
from voxel_episodes.experiments.sweep import SweepOutcome
from voxel_episodes.logging_config import LOGGER_NAMESPACE, setup_logging
from voxel_episodes.run_sweep import _parse_params, _parse_shapes, main


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger(LOGGER_NAMESPACE)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def _read_csv(path: Path) -> list[dict[str, str]]:
    with path.open(newline="") as handle:
        return list(csv.DictReader(handle))


class TestParsing:
    def test_parse_shapes(self) -> None:
        assert [s.label for s in _parse_shapes("3x2, 4x1")] == ["3x2", "4x1"]

    def test_parse_shapes_rejects_empty(self) -> None:
        with pytest.raises(ValueError):
            _parse_shapes(" , ")

    def test_parse_params_keeps_order(self) -> None:
        params = _parse_params(["voxel.spring_f=8,4", "settings.step_interval=0.01"])
        assert list(params) == ["voxel.spring_f", "settings.step_interval"]
        assert params["voxel.spring_f"] == ("8", "4")

    def test_parse_params_rejects_missing_equals(self) -> None:
        with pytest.raises(ValueError, match="key=value"):
            _parse_params(["voxel.spring_f"])


class TestMain:
    def test_cantilever_sweep_to_csv(self, tmp_path: Path) -> None:
        out = tmp_path / "rows.csv"
        evolution = tmp_path / "evolution.csv"
        main(
            [
                "--task",
                "cantilever",
                "--shapes",
                "2x2",
                "--param",
                "voxel.spring_f=8,10",
                "--set",
                "task.final_t=0.1",
                "--workers",
                "1",
                "--out",
                str(out),
                "--time-evolution-out",
                str(evolution),
            ]
        )
        rows = _read_csv(out)
        assert len(rows) == 2
        assert list(rows[0])[:4] == ["repetition", "shape", "n_voxels", "voxel.spring_f"]
        assert [float(r["voxel.spring_f"]) for r in rows] == [8.0, 10.0]
        steps = sum(int(r["steps"]) for r in rows)
        assert len(_read_csv(evolution)) == steps

    def test_writes_to_stdout_by_default(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(
            [
                "--task",
                "locomotion",
                "--shapes",
                "1x1",
                "--param",
                "settings.step_interval=0.02",
                "--set",
                "task.final_t=0.1",
                "--repetitions",
                "2",
            ]
        )
        captured = capsys.readouterr()
        rows = list(csv.DictReader(io.StringIO(captured.out)))
        assert len(rows) == 2
        assert {r["repetition"] for r in rows} == {"0", "1"}
        assert "Started" in captured.err

    def test_config_file_with_cli_override(self, tmp_path: Path) -> None:
        out = tmp_path / "rows.parquet"
        config_path = tmp_path / "sweep.json"
        config_path.write_text(
            json.dumps(
                {
                    "task": "cantilever",
                    "shapes": "3x3",
                    "params": {"voxel.spring_f": [8.0]},
                    "options": {"task.final_t": 0.05},
                    "repetitions": 1,
                    "out": str(tmp_path / "ignored.csv"),
                    "log_level": "WARNING",
                }
            )
        )
        main(["--config", str(config_path), "--shapes", "2x1", "--out", str(out)])
        import pyarrow.parquet as pq

        table = pq.read_table(out)
        assert table.column("shape").to_pylist() == ["2x1"]
        assert not (tmp_path / "ignored.csv").exists()

    def test_missing_config_file(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(["--config", str(tmp_path / "missing.json")])
        assert excinfo.value.code == 2

    def test_bad_shape_is_usage_error(self) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(["--shapes", "three", "--param", "voxel.spring_f=8"])
        assert excinfo.value.code == 2

    def test_executor_choice_reaches_sweep(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        seen: list[str] = []

        def fake_sweep(config):
            seen.append(config.executor)
            rows: list[dict[str, object]] = [{"repetition": 0}]
            return SweepOutcome(rows=rows, time_evolution={}, n_submitted=1, n_failed=0)

        monkeypatch.setattr(run_sweep_module, "run_sweep", fake_sweep)
        main(["--shapes", "1x1", "--executor", "process", "--out", str(tmp_path / "o.csv")])
        assert seen == ["process"]

    def test_unknown_executor_is_usage_error(self) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(["--executor", "cluster"])
        assert excinfo.value.code == 2

    def test_empty_result_exits_with_status_one(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setattr(
            run_sweep_module,
            "run_sweep",
            lambda config: SweepOutcome(rows=[], time_evolution={}, n_submitted=2, n_failed=2),
        )
        with pytest.raises(SystemExit) as excinfo:
            main(["--shapes", "1x1", "--out", str(tmp_path / "o.csv")])
        assert excinfo.value.code == 1

    def test_bad_option_is_logged_and_skipped(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        out = tmp_path / "rows.csv"
        with caplog.at_level(logging.WARNING):
            main(
                [
                    "--task",
                    "cantilever",
                    "--shapes",
                    "1x1",
                    "--param",
                    "voxel.spring_f=8",
                    "--set",
                    "task.final_t=0.05",
                    "--set",
                    "voxel.wobble=3",
                    "--out",
                    str(out),
                ]
            )
        assert len(_read_csv(out)) == 1
        assert "voxel.wobble" in caplog.text


class TestSetupLogging:
    def test_file_handler(self, tmp_path: Path) -> None:
        log_file = tmp_path / "sweep.log"
        logger = setup_logging(logging.INFO, log_file)
        logging.getLogger("voxel_episodes.experiments.sweep").info("hello sweep")
        for handler in logger.handlers:
            handler.flush()
        assert "voxel_episodes.experiments.sweep - INFO - hello sweep" in log_file.read_text()

    def test_repeated_setup_does_not_duplicate_handlers(self) -> None:
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1
