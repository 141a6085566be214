"""CLI entrypoint for soft-robot parameter sweeps.

Values resolve as CLI > JSON config file > built-in defaults. Without any
``--param`` (or ``params`` in the config file) the preset sweep of the chosen
task is run. The result table goes to ``--out`` or, by default, stdout.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from voxel_episodes.config.binding import ConfigBindingError, bind_option
from voxel_episodes.config.types import Settings, TrialConfig, VoxelMaterial
from voxel_episodes.experiments.presets import (
    TASK_NAMES,
    default_task,
    preset_params,
    preset_repetitions,
    preset_shapes,
)
from voxel_episodes.experiments.sweep import EXECUTOR_KINDS, Shape, SweepConfig, run_sweep
from voxel_episodes.io.tables import EmptyResultError, write_columns, write_rows
from voxel_episodes.logging_config import setup_logging

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# CLI parsing helpers
# ---------------------------------------------------------------------------


def _parse_shapes(raw: str) -> tuple[Shape, ...]:
    """Parse comma-delimited shapes formatted as ``WxH``."""
    parts = [part.strip() for part in raw.split(",") if part.strip()]
    if not parts:
        raise ValueError("shapes must not be empty")
    return tuple(Shape.parse(part) for part in parts)


def _parse_assignment(raw: str, label: str) -> tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep or not key.strip():
        raise ValueError(f"{label} must use key=value format, got {raw!r}")
    return key.strip(), value.strip()


def _parse_params(raw_params: list[str]) -> dict[str, tuple[object, ...]]:
    """Parse repeated ``key=v1,v2,...`` options, keeping first-seen key order."""
    params: dict[str, tuple[object, ...]] = {}
    for raw in raw_params:
        key, values_raw = _parse_assignment(raw, "--param")
        values = tuple(v.strip() for v in values_raw.split(",") if v.strip())
        if not values:
            raise ValueError(f"--param {key} must list at least one value")
        params[key] = values
    return params


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _build_base(task_name: str, options: dict[str, object]) -> TrialConfig:
    config = TrialConfig(settings=Settings(), voxel=VoxelMaterial(), task=default_task(task_name))
    for key, value in options.items():
        try:
            config = bind_option(config, key, value)
        except ConfigBindingError as exc:
            logger.warning("Ignoring option %s=%r: %s", key, value, exc)
    return config


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Run soft-robot episode sweeps")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--task", type=str, choices=list(TASK_NAMES), default=None)
    parser.add_argument("--shapes", type=str, default=None, help="Comma-delimited WxH list")
    parser.add_argument(
        "--param",
        action="append",
        default=None,
        metavar="KEY=V1,V2,...",
        help="Swept option, e.g. settings.step_interval=0.01,0.02 (repeatable)",
    )
    parser.add_argument(
        "--set",
        action="append",
        default=None,
        metavar="KEY=VALUE",
        help="Fixed option applied to every trial before sweeping (repeatable)",
    )
    parser.add_argument("--repetitions", type=int, default=None)
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument(
        "--executor",
        type=str,
        choices=list(EXECUTOR_KINDS),
        default=None,
        help="Worker pool kind (default: thread)",
    )
    parser.add_argument("--out", type=Path, default=None, help="CSV or .parquet path")
    parser.add_argument("--time-evolution-out", type=Path, default=None)
    parser.add_argument("--log-level", type=str, default=None)
    parser.add_argument("--log-file", type=Path, default=None)
    return parser


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for sweep execution."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")

    log_level = str(_get_val(args.log_level, "log_level", file_cfg, "INFO")).upper()
    log_file = _get_val(args.log_file, "log_file", file_cfg, None)
    setup_logging(log_level, log_file)

    task_name = str(_get_val(args.task, "task", file_cfg, "locomotion"))
    if task_name not in TASK_NAMES:
        parser.error(f"task must be one of {', '.join(TASK_NAMES)}")

    options: dict[str, object] = dict(file_cfg.get("options", {}))
    try:
        for raw in args.set or []:
            key, value = _parse_assignment(raw, "--set")
            options[key] = value
        if args.param:
            params = _parse_params(args.param)
        elif file_cfg.get("params"):
            params = {key: tuple(values) for key, values in dict(file_cfg["params"]).items()}
        else:
            params = preset_params(task_name)
        shapes_raw = _get_val(args.shapes, "shapes", file_cfg, None)
        shapes = _parse_shapes(str(shapes_raw)) if shapes_raw else preset_shapes(task_name)
        repetitions = int(
            _get_val(args.repetitions, "repetitions", file_cfg, preset_repetitions(task_name))
        )
        workers_raw = _get_val(args.workers, "workers", file_cfg, None)
        sweep_config = SweepConfig(
            shapes=shapes,
            params=params,
            repetitions=repetitions,
            base=_build_base(task_name, options),
            max_workers=None if workers_raw is None else int(workers_raw),
            executor=str(_get_val(args.executor, "executor", file_cfg, "thread")),
            collect_time_evolution=args.time_evolution_out is not None
            or file_cfg.get("time_evolution_out") is not None,
        )
    except ValueError as exc:
        parser.error(str(exc))

    outcome = run_sweep(sweep_config)
    logger.info(
        "%s sweep: %d submitted, %d rows, %d failed",
        task_name,
        outcome.n_submitted,
        len(outcome.rows),
        outcome.n_failed,
    )

    out = _get_val(args.out, "out", file_cfg, None)
    try:
        write_rows(outcome.rows, sys.stdout if out is None else Path(str(out)))
    except EmptyResultError as exc:
        logger.error("Cannot write results: %s", exc)
        sys.exit(1)

    time_evolution_out = _get_val(args.time_evolution_out, "time_evolution_out", file_cfg, None)
    if time_evolution_out is not None:
        if outcome.time_evolution:
            write_columns(outcome.time_evolution, Path(str(time_evolution_out)))
        else:
            logger.warning("No time evolution collected; %s not written", time_evolution_out)


if __name__ == "__main__":
    main()
