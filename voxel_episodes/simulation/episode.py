"""Common base of stepped soft-robot episodes."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Generic, TypeVar

from voxel_episodes.config.types import Settings
from voxel_episodes.domain.objects import WorldObject
from voxel_episodes.domain.robot import RobotDescription
from voxel_episodes.domain.snapshot import Snapshot, SnapshotSink

logger = logging.getLogger(__name__)

R = TypeVar("R")


class Episode(ABC, Generic[R]):
    """One trial: builds a private world from a description and steps it to a result."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    @abstractmethod
    def apply(self, description: RobotDescription, sink: SnapshotSink | None = None) -> R:
        """Run the episode and return its result."""

    def _steps_elapsed(self, steps: int) -> float:
        return steps * self.settings.step_interval

    @staticmethod
    def _notify(sink: SnapshotSink | None, t: float, objects: Sequence[WorldObject]) -> None:
        """Deliver a snapshot; sink failures are logged and do not stop the loop."""
        if sink is None:
            return
        snapshot = Snapshot(t=t, objects=tuple(obj.immutable() for obj in objects))
        try:
            sink(snapshot)
        except Exception:
            logger.exception("snapshot sink failed at t=%.6f", t)
