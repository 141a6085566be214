"""Tests for voxel_episodes.experiments.sweep."""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field

import pytest

from voxel_episodes.config.types import (
    CantileverConfig,
    LocomotionConfig,
    SpringScaffolding,
    TrialConfig,
)
from voxel_episodes.experiments.sweep import (
    Shape,
    SweepConfig,
    Trial,
    enumerate_trials,
    numeric_fields,
    run_sweep,
    static_value,
)
from voxel_episodes.io.tables import write_rows


@dataclass(frozen=True)
class _FakeResult:
    steps: int
    real_time: float
    ok: bool = True
    label: str = "x"
    time_evolution: dict[str, tuple[float, ...]] = field(default_factory=dict)


def _fake_runner(trial: Trial) -> _FakeResult:
    return _FakeResult(steps=trial.shape.n_voxels, real_time=trial.config.voxel.spring_f)


def _sweep(**overrides: object) -> SweepConfig:
    values: dict[str, object] = {
        "shapes": (Shape(2, 1), Shape(3, 2)),
        "params": {
            "voxel.spring_f": (8.0, 4.0, 10.0),
            "settings.step_interval": (0.01, 0.02),
        },
        "repetitions": 3,
        "max_workers": 2,
    }
    values.update(overrides)
    return SweepConfig(**values)  # type: ignore[arg-type]


class TestShape:
    def test_parse(self) -> None:
        assert Shape.parse(" 15x3 ") == Shape(15, 3)
        assert Shape(15, 3).label == "15x3"

    @pytest.mark.parametrize("raw", ["15", "ax3", "0x3", "1x2x3"])
    def test_parse_rejects(self, raw: str) -> None:
        with pytest.raises(ValueError):
            Shape.parse(raw)


class TestSweepConfig:
    def test_rejects_empty_shapes(self) -> None:
        with pytest.raises(ValueError, match="shapes"):
            _sweep(shapes=())

    def test_rejects_empty_param_values(self) -> None:
        with pytest.raises(ValueError, match="at least one value"):
            _sweep(params={"voxel.spring_f": ()})

    def test_rejects_unknown_executor(self) -> None:
        with pytest.raises(ValueError, match="executor"):
            _sweep(executor="cluster")

    def test_rejects_zero_repetitions(self) -> None:
        with pytest.raises(ValueError, match="repetitions"):
            _sweep(repetitions=0)


class TestEnumerateTrials:
    def test_count_is_shapes_values_repetitions(self) -> None:
        assert len(enumerate_trials(_sweep())) == 2 * 5 * 3

    def test_static_key_order(self) -> None:
        trial = enumerate_trials(_sweep())[0]
        assert list(trial.static_keys) == [
            "repetition",
            "shape",
            "n_voxels",
            "voxel.spring_f",
            "settings.step_interval",
        ]

    def test_baseline_then_override(self) -> None:
        trials = enumerate_trials(_sweep(repetitions=1))
        swept_step = [t for t in trials if t.static_keys["settings.step_interval"] == 0.02]
        assert len(swept_step) == 2
        for trial in swept_step:
            assert trial.config.voxel.spring_f == 8.0
            assert trial.config.settings.step_interval == 0.02
            assert trial.static_keys["voxel.spring_f"] == 8.0

    def test_order_is_shape_param_value_repetition(self) -> None:
        trials = enumerate_trials(_sweep(repetitions=2))
        first = [
            (t.static_keys["shape"], t.static_keys["voxel.spring_f"], t.static_keys["repetition"])
            for t in trials[:4]
        ]
        assert first == [("2x1", 8.0, 0), ("2x1", 8.0, 1), ("2x1", 4.0, 0), ("2x1", 4.0, 1)]
        assert [t.index for t in trials] == list(range(len(trials)))

    def test_string_values_are_coerced(self) -> None:
        trials = enumerate_trials(_sweep(params={"voxel.spring_f": ("8", "12.5")}, repetitions=1))
        assert [t.static_keys["voxel.spring_f"] for t in trials[:2]] == [8.0, 12.5]

    def test_scaffolding_values_are_named(self) -> None:
        value = frozenset({SpringScaffolding.SIDE_EXTERNAL, SpringScaffolding.CENTRAL_CROSS})
        trials = enumerate_trials(
            _sweep(params={"voxel.spring_scaffoldings": (value,)}, repetitions=1)
        )
        assert trials[0].static_keys["voxel.spring_scaffoldings"] == "CENTRAL_CROSS+SIDE_EXTERNAL"
        assert trials[0].config.voxel.spring_scaffoldings == value

    def test_binding_errors_are_logged_and_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="voxel_episodes"):
            trials = enumerate_trials(
                _sweep(params={"voxel.no_such_field": (1, 2)}, repetitions=1)
            )
        assert len(trials) == 4
        assert trials[1].static_keys["voxel.no_such_field"] == 2
        assert trials[1].config == TrialConfig()
        assert "voxel.no_such_field" in caplog.text

    def test_malformed_key_is_kept_raw(self) -> None:
        trials = enumerate_trials(_sweep(params={"spring_f": (9.0,)}, repetitions=1))
        assert len(trials) == 2
        assert trials[0].static_keys["spring_f"] == 9.0
        assert trials[0].config == TrialConfig()


class TestRunSweep:
    def test_rows_merge_static_keys_and_numeric_fields(self) -> None:
        outcome = run_sweep(_sweep(), runner=_fake_runner)
        assert outcome.n_submitted == 30
        assert outcome.n_failed == 0
        assert len(outcome.rows) == 30
        row = outcome.rows[0]
        assert list(row)[-2:] == ["steps", "real_time"]
        assert "ok" not in row and "label" not in row
        assert row["shape"] == "2x1" and row["steps"] == 2

    def test_rows_keep_submission_order(self) -> None:
        outcome = run_sweep(_sweep(), runner=_fake_runner)
        expected = [t.static_keys for t in enumerate_trials(_sweep())]
        assert [{k: r[k] for k in expected[0]} for r in outcome.rows] == expected

    def test_failed_trial_is_logged_without_row(self, caplog: pytest.LogCaptureFixture) -> None:
        def runner(trial: Trial) -> _FakeResult:
            if trial.static_keys["shape"] == "3x2":
                raise RuntimeError("solver exploded")
            return _fake_runner(trial)

        with caplog.at_level(logging.INFO, logger="voxel_episodes"):
            outcome = run_sweep(_sweep(), runner=runner)
        assert outcome.n_failed == 15
        assert len(outcome.rows) == 15
        assert "Trial failed" in caplog.text
        assert "'shape': '3x2'" in caplog.text
        assert caplog.text.count("Started") == 30
        assert caplog.text.count("Ended") == 15

    def test_time_evolution_is_folded(self) -> None:
        def runner(trial: Trial) -> _FakeResult:
            series = {"st": (0.1, 0.2), "rt": (0.01, 0.02), "y": (0.0, -0.5)}
            return _FakeResult(steps=2, real_time=0.02, time_evolution=series)

        config = _sweep(
            shapes=(Shape(2, 1),),
            params={"voxel.spring_f": (8.0, 4.0)},
            repetitions=1,
            collect_time_evolution=True,
        )
        outcome = run_sweep(config, runner=runner)
        assert list(outcome.time_evolution)[:3] == ["st", "rt", "y"]
        assert outcome.time_evolution["y"] == [0.0, -0.5, 0.0, -0.5]
        assert outcome.time_evolution["voxel.spring_f"] == [8.0, 8.0, 4.0, 4.0]

    def test_unbound_mixed_values_still_write(self) -> None:
        config = _sweep(shapes=(Shape(1, 1),), params={"voxel.nope": (1, "a")}, repetitions=1)
        outcome = run_sweep(config, runner=_fake_runner)
        assert [r["voxel.nope"] for r in outcome.rows] == [1, "a"]
        buffer = io.StringIO()
        write_rows(outcome.rows, buffer)
        records = list(csv.DictReader(io.StringIO(buffer.getvalue())))
        assert [r["voxel.nope"] for r in records] == ["1", "a"]

    def test_time_evolution_skipped_unless_requested(self) -> None:
        outcome = run_sweep(_sweep(repetitions=1), runner=_fake_runner)
        assert outcome.time_evolution == {}

    def test_end_to_end_cantilever(self) -> None:
        config = SweepConfig(
            shapes=(Shape(2, 2),),
            params={"voxel.spring_f": (8.0, 10.0)},
            repetitions=1,
            base=TrialConfig(task=CantileverConfig(final_t=0.1)),
            max_workers=2,
            collect_time_evolution=True,
        )
        outcome = run_sweep(config)
        assert outcome.n_failed == 0
        assert len(outcome.rows) == 2
        assert "damping_steps" in outcome.rows[0]
        assert "time_evolution" not in outcome.rows[0]
        assert len(outcome.time_evolution["st"]) == sum(r["steps"] for r in outcome.rows)

    def test_end_to_end_locomotion(self) -> None:
        config = SweepConfig(
            shapes=(Shape(2, 1), Shape(1, 1)),
            params={"settings.step_interval": (0.01, 0.02)},
            repetitions=2,
            base=TrialConfig(task=LocomotionConfig(final_t=0.2)),
        )
        outcome = run_sweep(config)
        assert outcome.n_submitted == 8
        assert len(outcome.rows) == 8
        assert {r["n_voxels"] for r in outcome.rows} == {1, 2}


class TestHelpers:
    def test_static_value(self) -> None:
        assert static_value(SpringScaffolding.SIDE_CROSS) == "SIDE_CROSS"
        assert static_value(1.5) == 1.5
        assert static_value(frozenset(SpringScaffolding)) == (
            "CENTRAL_CROSS+SIDE_CROSS+SIDE_EXTERNAL+SIDE_INTERNAL"
        )

    def test_numeric_fields_drop_bools_and_collections(self) -> None:
        result = _FakeResult(steps=3, real_time=0.5, time_evolution={"y": (1.0,)})
        assert numeric_fields(result) == {"steps": 3, "real_time": 0.5}


class TestProcessPool:
    def test_process_pool_matches_thread_pool(self) -> None:
        def config(executor: str) -> SweepConfig:
            return SweepConfig(
                shapes=(Shape(2, 2),),
                params={"voxel.spring_f": (8.0, 10.0)},
                base=TrialConfig(task=CantileverConfig(final_t=0.1, force_duration=0.0)),
                max_workers=2,
                executor=executor,
            )

        threaded = run_sweep(config("thread"))
        forked = run_sweep(config("process"))
        assert forked.n_failed == 0
        assert [r["voxel.spring_f"] for r in forked.rows] == [8.0, 10.0]
        assert [r["steps"] for r in forked.rows] == [r["steps"] for r in threaded.rows]
        for row in forked.rows:
            assert row["y_displacement"] == pytest.approx(0.0, abs=1e-6)
