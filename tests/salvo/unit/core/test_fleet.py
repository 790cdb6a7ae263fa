import random
from collections import Counter

import pytest

from salvo.game.core.fleet import build_board, random_board
from salvo.game.core.geometry import Coord, GridBounds
from salvo.game.core.models import DEFAULT_FLEET_LENGTHS, Orientation, Ship


def test_build_board_places_all_ships() -> None:
    board = build_board(
        GridBounds(10, 10),
        [
            Ship(Coord(0, 0), 4, Orientation.HORIZONTAL),
            Ship(Coord(0, 2), 3, Orientation.VERTICAL),
        ],
    )
    assert len(board.ships) == 2


def test_build_board_raises_on_touching_ships() -> None:
    with pytest.raises(ValueError, match="length 2"):
        build_board(
            GridBounds(10, 10),
            [
                Ship(Coord(0, 0), 4, Orientation.HORIZONTAL),
                Ship(Coord(4, 1), 2, Orientation.VERTICAL),
            ],
        )


def test_random_board_places_default_fleet_without_contact(seeded_rng: random.Random) -> None:
    board = random_board(seeded_rng, GridBounds(10, 10), DEFAULT_FLEET_LENGTHS)
    assert Counter(ship.length for ship in board.ships) == Counter(DEFAULT_FLEET_LENGTHS)
    for i, first in enumerate(board.ships):
        for second in board.ships[i + 1 :]:
            for a in first.occupied_cells():
                for b in second.occupied_cells():
                    assert max(abs(a.x - b.x), abs(a.y - b.y)) >= 2


def test_random_board_is_reproducible_for_a_seed() -> None:
    first = random_board(random.Random(7), GridBounds(10, 10), DEFAULT_FLEET_LENGTHS)
    second = random_board(random.Random(7), GridBounds(10, 10), DEFAULT_FLEET_LENGTHS)
    assert [ship.occupied_cells() for ship in first.ships] == [
        ship.occupied_cells() for ship in second.ships
    ]


def test_random_board_raises_when_fleet_cannot_fit(seeded_rng: random.Random) -> None:
    with pytest.raises(RuntimeError):
        random_board(seeded_rng, GridBounds(2, 2), [2, 2], attempts=3)
