from __future__ import annotations

import logging
import random
from collections.abc import Iterator, MutableSequence

import pytest

from salvo.game.core.board import Board
from salvo.game.core.geometry import Coord, GridBounds
from salvo.game.core.models import Orientation, Ship
from salvo.game.infra.logging import shutdown_logging


class ScriptedRandom(random.Random):
    """Shuffle that puts the given cells at the end so they are popped first, in order."""

    def __init__(self, *leading: Coord) -> None:
        super().__init__(0)
        self._leading = list(leading)

    def shuffle(self, x: MutableSequence[Coord]) -> None:
        leading = [cell for cell in self._leading if cell in x]
        rest = [cell for cell in x if cell not in leading]
        x[:] = rest + list(reversed(leading))


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def scripted_rng() -> type[ScriptedRandom]:
    return ScriptedRandom


@pytest.fixture
def ten_by_ten() -> GridBounds:
    return GridBounds(10, 10)


@pytest.fixture
def destroyer_board() -> Board:
    board = Board(GridBounds(3, 3))
    assert board.place_ship(Ship(Coord(0, 1), 2, Orientation.HORIZONTAL))
    return board


@pytest.fixture
def restore_root_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    shutdown_logging()
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
