"""Settling detection on a displacement series."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np


def damping_index(values: Sequence[float], epsilon: float) -> int:
    """Return the first index of the settled tail of *values*.

    The tail is the longest suffix in which every consecutive pair differs by
    at most *epsilon*. A series that never moves by more than *epsilon*
    (including series shorter than 2) settles at index 0.
    """
    if epsilon < 0.0:
        raise ValueError("epsilon must be >= 0")
    series = np.asarray(values, dtype=np.float64)
    if series.size < 2:
        return 0
    moving = np.flatnonzero(np.abs(np.diff(series)) > epsilon)
    if moving.size == 0:
        return 0
    return int(moving[-1]) + 1
