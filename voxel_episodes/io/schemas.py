"""Column contracts for sweep tables and cantilever time-evolution tables.

Sweep rows are heterogeneous (their columns depend on the swept parameters
and the result type), so only their leading static columns are fixed here.
Time-evolution tables carry the per-step series first, followed by the
static keys of the trial each step belongs to.
"""

from __future__ import annotations

TIME_EVOLUTION_KEYS: tuple[str, ...] = ("st", "rt", "y")
"""Per-step cantilever series: simulated time, wall time, displacement."""

STATIC_KEY_COLUMNS: tuple[str, ...] = ("repetition", "shape", "n_voxels")
"""Leading columns of every sweep row, before the swept parameter keys."""
