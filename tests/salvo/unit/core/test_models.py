import pytest

from salvo.game.core.geometry import Coord
from salvo.game.core.models import Orientation, Ship, ShotOutcome


def test_ship_occupied_cells_horizontal_and_vertical() -> None:
    horizontal = Ship(Coord(1, 2), 3, Orientation.HORIZONTAL)
    vertical = Ship(Coord(1, 2), 3, Orientation.VERTICAL)
    assert horizontal.occupied_cells() == [Coord(1, 2), Coord(2, 2), Coord(3, 2)]
    assert vertical.occupied_cells() == [Coord(1, 2), Coord(1, 3), Coord(1, 4)]


def test_ship_alive_cells_start_as_occupied_cells() -> None:
    ship = Ship(Coord(0, 0), 2, Orientation.VERTICAL)
    assert ship.alive_cells == {Coord(0, 0), Coord(0, 1)}
    assert ship.is_alive
    ship.alive_cells.clear()
    assert not ship.is_alive


def test_ship_rejects_non_positive_length() -> None:
    with pytest.raises(ValueError):
        Ship(Coord(0, 0), 0, Orientation.HORIZONTAL)


def test_shot_outcome_values_match_wire_tokens() -> None:
    assert [outcome.value for outcome in ShotOutcome] == ["Miss", "Wound", "Kill"]
