"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, StrEnum

from salvo.game.core.geometry import HORIZONTAL_AXIS, VERTICAL_AXIS, Coord

DEFAULT_FLEET_LENGTHS: tuple[int, ...] = (4, 3, 3, 2, 2, 2, 1, 1, 1, 1)


class CellState(IntEnum):
    """State of a single board cell. Stored as int8 codes in the board grid."""

    EMPTY = 0
    OCCUPIED = 1
    HIT = 2
    MISSED = 3


class Orientation(StrEnum):
    """Ship orientation."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"

    @property
    def direction(self) -> Coord:
        if self is Orientation.HORIZONTAL:
            return HORIZONTAL_AXIS
        return VERTICAL_AXIS


class ShotOutcome(StrEnum):
    """Result of a single shot, spelled as on the wire."""

    MISS = "Miss"
    WOUND = "Wound"
    KILL = "Kill"


@dataclass(slots=True, eq=False)
class Ship:
    """A straight run of cells; shrinks its alive set as it takes hits."""

    anchor: Coord
    length: int
    orientation: Orientation
    alive_cells: set[Coord] = field(init=False)

    def __post_init__(self) -> None:
        if self.length < 1:
            raise ValueError(f"Ship length must be at least 1, got {self.length}.")
        self.alive_cells = set(self.occupied_cells())

    def occupied_cells(self) -> list[Coord]:
        """Compute the cells covered by the ship, anchor first."""
        step = self.orientation.direction
        return [self.anchor + step.scaled(i) for i in range(self.length)]

    @property
    def is_alive(self) -> bool:
        return bool(self.alive_cells)
