"""Authoritative board state: ship placement and shot resolution."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np

from salvo.game.core.geometry import FULL_NEIGHBORHOOD, Coord, GridBounds, neighbors_of
from salvo.game.core.models import CellState, Ship, ShotOutcome


@dataclass(slots=True)
class Board:
    """Numpy-backed board indexed as `[x, y]`.

    `ship_ids` holds, per cell, the 1-based index of the owning ship in `ships`,
    or 0 when no ship covers the cell.
    """

    bounds: GridBounds
    cells: np.ndarray = field(init=False)
    ship_ids: np.ndarray = field(init=False)
    ships: list[Ship] = field(default_factory=list)

    def __post_init__(self) -> None:
        shape = (self.bounds.width, self.bounds.height)
        self.cells = np.full(shape, CellState.EMPTY, dtype=np.int8)
        self.ship_ids = np.zeros(shape, dtype=np.int16)

    def __getitem__(self, cell: Coord) -> CellState:
        if not self.in_bounds(cell):
            raise IndexError(f"Cell ({cell.x}, {cell.y}) is off the board.")
        return CellState(int(self.cells[cell.x, cell.y]))

    def in_bounds(self, cell: Coord) -> bool:
        return self.bounds.contains(cell)

    def ship_at(self, cell: Coord) -> Ship | None:
        """Return the ship covering the cell, if any."""
        if not self.in_bounds(cell):
            return None
        ship_id = int(self.ship_ids[cell.x, cell.y])
        if ship_id == 0:
            return None
        return self.ships[ship_id - 1]

    def full_neighbors(self, cell: Coord) -> Iterator[Coord]:
        """Yield the in-bounds 8-neighborhood of the cell."""
        return neighbors_of(cell, self.bounds, FULL_NEIGHBORHOOD)

    def can_place_ship(self, ship: Ship) -> bool:
        """Return whether the ship fits and touches no placed ship, even diagonally."""
        for cell in ship.occupied_cells():
            if not self.in_bounds(cell):
                return False
            if self.ship_ids[cell.x, cell.y] != 0:
                return False
            for neighbor in self.full_neighbors(cell):
                if self.ship_ids[neighbor.x, neighbor.y] != 0:
                    return False
        return True

    def place_ship(self, ship: Ship) -> bool:
        """Place a ship; leaves the board untouched and returns False if rejected."""
        if not self.can_place_ship(ship):
            return False
        self.ships.append(ship)
        ship_id = len(self.ships)
        for cell in ship.occupied_cells():
            self.cells[cell.x, cell.y] = CellState.OCCUPIED
            self.ship_ids[cell.x, cell.y] = ship_id
        return True

    def shoot(self, target: Coord) -> ShotOutcome:
        """Resolve a shot.

        Off-board targets and cells that were already resolved report a miss
        without changing anything.
        """
        if not self.in_bounds(target):
            return ShotOutcome.MISS

        state = self[target]
        if state is CellState.OCCUPIED:
            ship = self.ships[int(self.ship_ids[target.x, target.y]) - 1]
            ship.alive_cells.discard(target)
            self.cells[target.x, target.y] = CellState.HIT
            return ShotOutcome.WOUND if ship.is_alive else ShotOutcome.KILL

        if state is CellState.EMPTY:
            self.cells[target.x, target.y] = CellState.MISSED
        return ShotOutcome.MISS

    def has_alive_ships(self) -> bool:
        """Return whether any ship still has an unhit cell."""
        return any(ship.is_alive for ship in self.ships)
