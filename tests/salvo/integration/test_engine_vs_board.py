import random

import pytest

from salvo.game.ai.targeting import TargetingEngine
from salvo.game.app.protocol import ProtocolSession
from salvo.game.core.board import Board
from salvo.game.core.fleet import random_board
from salvo.game.core.geometry import DIAGONAL, Coord, GridBounds, longest_run, neighbors_of
from salvo.game.core.models import DEFAULT_FLEET_LENGTHS, ShotOutcome


def _play(engine: TargetingEngine, board: Board, fleet: tuple[int, ...]) -> int:
    bounds = board.bounds
    engine.reset(bounds, fleet)
    fired: set[Coord] = set()
    forbidden: set[Coord] = set()
    excluded = engine.excluded

    while True:
        smallest = engine.remaining_lengths[0] if engine.remaining_lengths else None
        searching = not engine.hotspots
        target = engine.next_target()
        assert target not in fired
        assert target not in forbidden
        if searching and smallest is not None:
            assert longest_run(target, bounds, lambda cell: cell not in engine.excluded) >= smallest
        fired.add(target)
        assert len(fired) <= bounds.area

        outcome = board.shoot(target)
        if outcome is ShotOutcome.WOUND:
            forbidden.update(neighbors_of(target, bounds, DIAGONAL))
        engine.record_outcome(outcome)
        assert excluded <= engine.excluded
        excluded = engine.excluded

        if not board.has_alive_ships():
            assert engine.remaining_lengths == ()
            return len(fired)


@pytest.mark.parametrize("seed", range(12))
def test_engine_sinks_random_fleet_without_wasted_shots(seed: int) -> None:
    bounds = GridBounds(10, 10)
    board = random_board(random.Random(seed), bounds, DEFAULT_FLEET_LENGTHS)
    shots = _play(TargetingEngine(random.Random(seed + 1000)), board, DEFAULT_FLEET_LENGTHS)
    assert shots <= bounds.area


def test_engine_sinks_fleet_on_narrow_board() -> None:
    bounds = GridBounds(12, 3)
    fleet = (3, 2, 1)
    board = random_board(random.Random(3), bounds, fleet)
    assert _play(TargetingEngine(random.Random(4)), board, fleet) <= bounds.area


def test_protocol_session_plays_full_match() -> None:
    board = random_board(random.Random(21), GridBounds(10, 10), DEFAULT_FLEET_LENGTHS)
    session = ProtocolSession(TargetingEngine(random.Random(22)), strict_coordinates=True)
    fleet = " ".join(str(length) for length in DEFAULT_FLEET_LENGTHS)

    response = session.handle(f"Init 10 10 {fleet}")
    kills = 0
    for _ in range(100):
        x, y = (int(token) for token in response.split())
        outcome = board.shoot(Coord(x, y))
        kills += outcome is ShotOutcome.KILL
        if not board.has_alive_ships():
            break
        response = session.handle(f"{outcome.value} {x} {y}")
    assert not board.has_alive_ships()
    assert kills == len(DEFAULT_FLEET_LENGTHS)
