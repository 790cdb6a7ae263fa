"""Line protocol spoken with the match driver.

Input lines are either ``Init <width> <height> <len_1> ... <len_n>`` or an
outcome ``Miss|Wound|Kill <x> <y>`` for the previously emitted target. Every
input line is answered with one ``<x> <y>`` line naming the next target.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TextIO, TypeAlias

from salvo.game.ai.strategy import TargetingStrategy
from salvo.game.core.geometry import Coord, GridBounds
from salvo.game.core.models import ShotOutcome

logger = logging.getLogger(__name__)

INIT_TOKEN = "Init"


class ProtocolError(ValueError):
    """Raised for input lines the protocol does not define."""


@dataclass(frozen=True, slots=True)
class InitCommand:
    bounds: GridBounds
    fleet_lengths: tuple[int, ...]


@dataclass(frozen=True, slots=True)
class OutcomeCommand:
    outcome: ShotOutcome
    reported: Coord


Command: TypeAlias = InitCommand | OutcomeCommand


def parse_command(line: str) -> Command:
    """Parse one protocol line."""
    tokens = line.split()
    if not tokens:
        raise ProtocolError("Empty protocol line.")

    keyword, args = tokens[0], tokens[1:]
    numbers = _parse_ints(line, args)

    if keyword == INIT_TOKEN:
        if len(numbers) < 3:
            raise ProtocolError(f"Init needs a board size and at least one ship: {line!r}.")
        width, height, *lengths = numbers
        if any(length < 1 for length in lengths):
            raise ProtocolError(f"Ship lengths must be positive: {line!r}.")
        try:
            bounds = GridBounds(width, height)
        except ValueError as exc:
            raise ProtocolError(str(exc)) from exc
        return InitCommand(bounds=bounds, fleet_lengths=tuple(lengths))

    try:
        outcome = ShotOutcome(keyword)
    except ValueError as exc:
        raise ProtocolError(f"Unknown command {keyword!r}.") from exc
    if len(numbers) != 2:
        raise ProtocolError(f"{keyword} expects exactly two coordinates: {line!r}.")
    return OutcomeCommand(outcome=outcome, reported=Coord(numbers[0], numbers[1]))


def format_target(cell: Coord) -> str:
    return f"{cell.x} {cell.y}"


def _parse_ints(line: str, args: list[str]) -> list[int]:
    try:
        return [int(arg) for arg in args]
    except ValueError as exc:
        raise ProtocolError(f"Non-integer argument in {line!r}.") from exc


class ProtocolSession:
    """Feeds parsed commands to a targeting strategy and formats its answers."""

    def __init__(self, strategy: TargetingStrategy, *, strict_coordinates: bool = False) -> None:
        self._strategy = strategy
        self._strict_coordinates = strict_coordinates
        self._turn = 0

    def handle(self, line: str) -> str:
        """Apply one input line and return the response line."""
        command = parse_command(line)
        if isinstance(command, InitCommand):
            self._strategy.reset(command.bounds, command.fleet_lengths)
            self._turn = 0
            logger.info(
                "match_started width=%d height=%d fleet=%s",
                command.bounds.width,
                command.bounds.height,
                list(command.fleet_lengths),
            )
        else:
            self._check_reported(command)
            self._strategy.record_outcome(command.outcome)

        target = self._strategy.next_target()
        self._turn += 1
        logger.debug("target turn=%d x=%d y=%d", self._turn, target.x, target.y)
        return format_target(target)

    def _check_reported(self, command: OutcomeCommand) -> None:
        aim = self._strategy.last_aim
        if aim is None or command.reported == aim:
            return
        message = (
            f"{command.outcome.value} reported at ({command.reported.x}, {command.reported.y}) "
            f"but last target was ({aim.x}, {aim.y})."
        )
        if self._strict_coordinates:
            raise ProtocolError(message)
        logger.warning("reported_coordinate_mismatch %s", message)


def serve(lines: Iterable[str], session: ProtocolSession) -> Iterator[str]:
    """Yield one response per input line."""
    for line in lines:
        yield session.handle(line)


def run(stdin: TextIO, stdout: TextIO, session: ProtocolSession) -> int:
    """Answer stdin line by line until it closes; returns the number of responses."""
    responses = 0
    for response in serve(stdin, session):
        stdout.write(response + "\n")
        stdout.flush()
        responses += 1
    return responses
