"""Fleet setup on top of the board model."""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence

from salvo.game.core.board import Board
from salvo.game.core.geometry import GridBounds
from salvo.game.core.models import Orientation, Ship


def build_board(bounds: GridBounds, ships: Iterable[Ship]) -> Board:
    """Create a board from explicit ship placements."""
    board = Board(bounds)
    for ship in ships:
        if not board.place_ship(ship):
            raise ValueError(
                f"Invalid placement for ship of length {ship.length} at "
                f"({ship.anchor.x}, {ship.anchor.y}) {ship.orientation.value}."
            )
    return board


def random_board(
    rng: random.Random,
    bounds: GridBounds,
    fleet_lengths: Sequence[int],
    attempts: int = 400,
) -> Board:
    """Generate a board holding the whole fleet with non-touching ships."""
    for _ in range(attempts):
        board = _try_place_fleet(rng, bounds, fleet_lengths)
        if board is not None:
            return board
    raise RuntimeError(
        f"Failed to place fleet {sorted(fleet_lengths, reverse=True)} "
        f"on a {bounds.width}x{bounds.height} board."
    )


def _try_place_fleet(
    rng: random.Random, bounds: GridBounds, fleet_lengths: Sequence[int]
) -> Board | None:
    board = Board(bounds)
    for length in sorted(fleet_lengths, reverse=True):
        candidates = _candidate_ships(board, length)
        if not candidates:
            return None
        board.place_ship(rng.choice(candidates))
    return board


def _candidate_ships(board: Board, length: int) -> list[Ship]:
    candidates: list[Ship] = []
    orientations = (Orientation.HORIZONTAL,) if length == 1 else tuple(Orientation)
    for orientation in orientations:
        for anchor in board.bounds.cells():
            ship = Ship(anchor=anchor, length=length, orientation=orientation)
            if board.can_place_ship(ship):
                candidates.append(ship)
    return candidates
