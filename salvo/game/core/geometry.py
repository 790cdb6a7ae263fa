"""Grid geometry shared by the board model and the targeting engine."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate, also used as a 2D offset vector."""

    x: int
    y: int

    def __add__(self, other: Coord) -> Coord:
        return Coord(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Coord) -> Coord:
        return Coord(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Coord:
        return Coord(-self.x, -self.y)

    def scaled(self, factor: int) -> Coord:
        return Coord(self.x * factor, self.y * factor)


@dataclass(frozen=True, slots=True)
class GridBounds:
    """Board dimensions; `x` spans the width and `y` the height."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {self.width}x{self.height}.")

    @property
    def area(self) -> int:
        return self.width * self.height

    def contains(self, cell: Coord) -> bool:
        """Return whether the cell lies on the board."""
        return 0 <= cell.x < self.width and 0 <= cell.y < self.height

    def cells(self) -> Iterator[Coord]:
        """Yield every cell, x-major."""
        for x in range(self.width):
            for y in range(self.height):
                yield Coord(x, y)


# Offset order drives tie-breaks when picking follow-up shots.
ORTHOGONAL: tuple[Coord, ...] = (Coord(0, 1), Coord(1, 0), Coord(0, -1), Coord(-1, 0))
DIAGONAL: tuple[Coord, ...] = (Coord(1, 1), Coord(1, -1), Coord(-1, -1), Coord(-1, 1))
FULL_NEIGHBORHOOD: tuple[Coord, ...] = tuple(dict.fromkeys(ORTHOGONAL + DIAGONAL))

HORIZONTAL_AXIS = Coord(1, 0)
VERTICAL_AXIS = Coord(0, 1)
AXES: tuple[Coord, ...] = (HORIZONTAL_AXIS, VERTICAL_AXIS)


def offset(cell: Coord, vector: Coord) -> Coord:
    return cell + vector


def neighbors_of(cell: Coord, bounds: GridBounds, offsets: Iterable[Coord]) -> Iterator[Coord]:
    """Yield in-bounds `cell + offset` for each offset, preserving offset order."""
    for vector in offsets:
        neighbor = offset(cell, vector)
        if bounds.contains(neighbor):
            yield neighbor


def walk(
    start: Coord,
    direction: Coord,
    bounds: GridBounds,
    included: Callable[[Coord], bool],
) -> Coord:
    """Step from `start` while cells are included and on the board.

    Returns the first cell that fails either check, which may be off the board.
    """
    cell = start
    while bounds.contains(cell) and included(cell):
        cell = cell + direction
    return cell


def run_length(
    cell: Coord,
    axis: Coord,
    bounds: GridBounds,
    included: Callable[[Coord], bool],
) -> int:
    """Length of the contiguous included run through `cell` along `axis`."""
    forward = walk(cell, axis, bounds, included)
    backward = walk(cell, -axis, bounds, included)
    span = max(abs(forward.x - backward.x), abs(forward.y - backward.y))
    return max(span - 1, 0)


def longest_run(cell: Coord, bounds: GridBounds, included: Callable[[Coord], bool]) -> int:
    """Longest included run through `cell` along either the row or the column."""
    return max(run_length(cell, axis, bounds, included) for axis in AXES)
