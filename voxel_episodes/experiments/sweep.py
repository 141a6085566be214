"""Concurrent parameter sweeps over robot shapes and configuration options.

Every (shape, (param, value), repetition) combination becomes one trial.
All swept parameters first take their baseline (first) value, then the
trial's own parameter is overridden. Trials run on a thread pool, or a
process pool when ``executor="process"``; rows and time-evolution blocks
are folded on the calling thread once every future has completed.
"""

from __future__ import annotations

import dataclasses
import logging
import os
from collections.abc import Callable, Mapping
from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from voxel_episodes.config.binding import ConfigBindingError, bind_option, split_key
from voxel_episodes.config.types import TrialConfig
from voxel_episodes.experiments.tasks import run_trial
from voxel_episodes.io.schemas import STATIC_KEY_COLUMNS, TIME_EVOLUTION_KEYS

logger = logging.getLogger(__name__)

EXECUTOR_KINDS: tuple[str, ...] = ("thread", "process")


@dataclass(frozen=True)
class Shape:
    """Rectangular robot footprint in voxels."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError("shape dimensions must be >= 1")

    @property
    def label(self) -> str:
        return f"{self.width}x{self.height}"

    @property
    def n_voxels(self) -> int:
        return self.width * self.height

    @classmethod
    def parse(cls, raw: str) -> Shape:
        """Parse ``WxH``."""
        tokens = raw.strip().lower().split("x")
        if len(tokens) != 2:
            raise ValueError(f"shape must use WxH format, got {raw!r}")
        try:
            return cls(int(tokens[0]), int(tokens[1]))
        except ValueError as exc:
            raise ValueError(f"shape must use integer WxH values, got {raw!r}") from exc


@dataclass(frozen=True)
class SweepConfig:
    shapes: tuple[Shape, ...]
    params: Mapping[str, tuple[Any, ...]]
    repetitions: int = 1
    base: TrialConfig = field(default_factory=TrialConfig)
    max_workers: int | None = None
    collect_time_evolution: bool = False
    executor: str = "thread"
    """``thread`` or ``process``; processes need a picklable runner."""

    def __post_init__(self) -> None:
        if not self.shapes:
            raise ValueError("shapes must not be empty")
        if self.repetitions < 1:
            raise ValueError("repetitions must be >= 1")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        if self.executor not in EXECUTOR_KINDS:
            raise ValueError(f"executor must be one of {', '.join(EXECUTOR_KINDS)}")
        for key, values in self.params.items():
            if not values:
                raise ValueError(f"param {key!r} must have at least one value")


@dataclass(frozen=True)
class Trial:
    index: int
    shape: Shape
    config: TrialConfig
    static_keys: dict[str, object]


@dataclass
class SweepOutcome:
    """Folded outputs of a sweep."""

    rows: list[dict[str, object]]
    time_evolution: dict[str, list[object]]
    n_submitted: int
    n_failed: int


def static_value(value: object) -> object:
    """Render a parameter value for a table cell."""
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, (set, frozenset)):
        return "+".join(sorted(static_value(v) for v in value))
    if isinstance(value, (list, tuple)):
        return "+".join(str(static_value(v)) for v in value)
    return value


def _try_bind(config: TrialConfig, key: str, value: object) -> TrialConfig:
    try:
        return bind_option(config, key, value)
    except ConfigBindingError as exc:
        logger.warning("Cannot set %s to %r: %s", key, value, exc)
        return config


def _bound_value(config: TrialConfig, key: str, raw: object) -> object:
    try:
        section, name = split_key(key)
        return getattr(getattr(config, section), name)
    except (ConfigBindingError, AttributeError):
        return raw


def enumerate_trials(config: SweepConfig) -> list[Trial]:
    """Expand *config* into trials, in shape, param, value, repetition order."""
    baseline = config.base
    for key, values in config.params.items():
        baseline = _try_bind(baseline, key, values[0])
    baseline_keys = {
        key: static_value(_bound_value(baseline, key, values[0]))
        for key, values in config.params.items()
    }

    trials: list[Trial] = []
    for shape in config.shapes:
        for key, values in config.params.items():
            for value in values:
                trial_config = _try_bind(baseline, key, value)
                swept = static_value(_bound_value(trial_config, key, value))
                for repetition in range(config.repetitions):
                    static_keys: dict[str, object] = dict(
                        zip(STATIC_KEY_COLUMNS, (repetition, shape.label, shape.n_voxels))
                    )
                    static_keys.update(baseline_keys)
                    static_keys[key] = swept
                    trials.append(Trial(len(trials), shape, trial_config, static_keys))
    return trials


def numeric_fields(result: object) -> dict[str, object]:
    """Numeric, non-bool dataclass fields of *result*, in declaration order."""
    values: dict[str, object] = {}
    for f in dataclasses.fields(result):
        value = getattr(result, f.name)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            values[f.name] = value
    return values


def _time_evolution_block(trial: Trial, result: object) -> dict[str, list[object]] | None:
    series = getattr(result, "time_evolution", None)
    if not series:
        return None
    length = max(len(values) for values in series.values())
    block: dict[str, list[object]] = {key: list(series.get(key, ())) for key in TIME_EVOLUTION_KEYS}
    for key, value in trial.static_keys.items():
        block[key] = [value] * length
    return block


def _run_logged(runner: Callable[[Trial], object], trial: Trial) -> object:
    logger.info("Started\t%s", trial.static_keys)
    result = runner(trial)
    logger.info("Ended\t%s", trial.static_keys)
    return result


def run_sweep(config: SweepConfig, runner: Callable[[Trial], object] = run_trial) -> SweepOutcome:
    """Run every trial of *config* and fold the results.

    *runner* maps a trial to a result dataclass and defaults to
    :func:`voxel_episodes.experiments.tasks.run_trial`. A failing trial is
    logged with its static keys and contributes no row.
    """
    trials = enumerate_trials(config)
    workers = config.max_workers or os.cpu_count() or 1
    logger.info(
        "Submitting %d trials to %d %s workers", len(trials), workers, config.executor
    )
    pool: type[Executor] = (
        ProcessPoolExecutor if config.executor == "process" else ThreadPoolExecutor
    )

    with pool(max_workers=workers) as executor:
        futures: list[tuple[Trial, Future[object]]] = [
            (trial, executor.submit(_run_logged, runner, trial)) for trial in trials
        ]
        completed: list[tuple[Trial, object]] = []
        n_failed = 0
        for trial, future in futures:
            try:
                completed.append((trial, future.result()))
            except Exception:
                n_failed += 1
                logger.error("Trial failed\t%s", trial.static_keys, exc_info=True)

    rows: list[dict[str, object]] = []
    time_evolution: dict[str, list[object]] = {}
    for trial, result in completed:
        rows.append({**trial.static_keys, **numeric_fields(result)})
        if config.collect_time_evolution:
            block = _time_evolution_block(trial, result)
            if block is None:
                continue
            for key, values in block.items():
                time_evolution.setdefault(key, []).extend(values)

    logger.info("Sweep finished: %d rows, %d failed", len(rows), n_failed)
    return SweepOutcome(
        rows=rows,
        time_evolution=time_evolution,
        n_submitted=len(trials),
        n_failed=n_failed,
    )
