"""Fixed-size 2-D grid container used for robot topology and controllers.

Cells may hold ``None`` to mark an empty slot; iteration always visits every
cell in row-major order (``y`` outer, ``x`` inner) and leaves filtering to the
consumer, so that indices stay meaningful.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class GridEntry(Generic[T]):
    """One cell of a grid: its coordinates and value."""

    x: int
    y: int
    value: T


class Grid(Generic[T]):
    """Dense ``width`` x ``height`` mapping from ``(x, y)`` to a value."""

    def __init__(self, width: int, height: int, cells: list[T]) -> None:
        if width < 1 or height < 1:
            raise ValueError("grid dimensions must be >= 1")
        if len(cells) != width * height:
            raise ValueError("cells must contain exactly width * height values")
        self._width = width
        self._height = height
        self._cells = list(cells)

    @classmethod
    def create(cls, width: int, height: int, fill: T | None = None) -> Grid[T | None]:
        """Build a grid with every cell set to *fill*."""
        return cls(width, height, [fill] * (width * height))

    @classmethod
    def from_function(cls, width: int, height: int, factory: Callable[[int, int], T]) -> Grid[T]:
        """Build a grid whose cell ``(x, y)`` holds ``factory(x, y)``."""
        return cls(width, height, [factory(x, y) for y in range(height) for x in range(width)])

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"({x}, {y}) is outside a {self._width}x{self._height} grid")
        return y * self._width + x

    def get(self, x: int, y: int) -> T:
        return self._cells[self._index(x, y)]

    def set(self, x: int, y: int, value: T) -> None:
        self._cells[self._index(x, y)] = value

    def __iter__(self) -> Iterator[GridEntry[T]]:
        for y in range(self._height):
            for x in range(self._width):
                yield GridEntry(x, y, self._cells[y * self._width + x])

    def values(self) -> list[T]:
        """Return all cell values in row-major order, ``None`` slots included."""
        return list(self._cells)

    def count(self, predicate: Callable[[T], bool]) -> int:
        """Count cells whose value satisfies *predicate*."""
        return sum(1 for value in self._cells if predicate(value))

    def map(self, fn: Callable[[GridEntry[T]], U]) -> Grid[U]:
        """Return a same-sized grid with ``fn(entry)`` in every cell."""
        return Grid(self._width, self._height, [fn(entry) for entry in self])

    def __len__(self) -> int:
        return len(self._cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self._width, self._height, self._cells) == (
            other._width,
            other._height,
            other._cells,
        )

    def __repr__(self) -> str:
        return f"Grid({self._width}x{self._height})"
