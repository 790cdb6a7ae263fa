"""Exclusion-based hunt/close targeting engine."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from enum import StrEnum

from salvo.game.ai.strategy import TargetingStrategy
from salvo.game.core.geometry import (
    DIAGONAL,
    FULL_NEIGHBORHOOD,
    ORTHOGONAL,
    Coord,
    GridBounds,
    longest_run,
    neighbors_of,
    walk,
)
from salvo.game.core.models import ShotOutcome

logger = logging.getLogger(__name__)


class TargetingContractError(RuntimeError):
    """Raised when the engine is driven outside its call contract."""


class TargetingMode(StrEnum):
    """Whether the engine is exploring or finishing off a wounded ship."""

    SEARCHING = "SEARCHING"
    CLOSING = "CLOSING"


class TargetingEngine(TargetingStrategy):
    """Targets one ship at a time using only deduced exclusions.

    Cells are excluded once fired upon or once geometry rules them out: the
    diagonals of a wound, the whole neighborhood of a kill, and the cells just
    past both ends of a sunk ship. Wounded cells are kept on a stack of
    hotspots whose orthogonal neighbors are probed before falling back to a
    shuffled search order. The fallback skips cells through which the smallest
    remaining ship could no longer fit.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._bounds: GridBounds | None = None
        self._excluded: set[Coord] = set()
        self._wounded: set[Coord] = set()
        self._hotspots: list[Coord] = []
        self._remaining: list[int] = []
        self._search_order: list[Coord] = []
        self._search_top = 0
        self._last_aim: Coord | None = None

    @property
    def bounds(self) -> GridBounds | None:
        return self._bounds

    @property
    def excluded(self) -> frozenset[Coord]:
        return frozenset(self._excluded)

    @property
    def wounded(self) -> frozenset[Coord]:
        return frozenset(self._wounded)

    @property
    def hotspots(self) -> tuple[Coord, ...]:
        """Pending hotspots, bottom of the stack first."""
        return tuple(self._hotspots)

    @property
    def remaining_lengths(self) -> tuple[int, ...]:
        return tuple(self._remaining)

    @property
    def search_remaining(self) -> int:
        return self._search_top

    @property
    def last_aim(self) -> Coord | None:
        return self._last_aim

    @property
    def mode(self) -> TargetingMode:
        return TargetingMode.CLOSING if self._hotspots else TargetingMode.SEARCHING

    def reset(self, bounds: GridBounds, fleet_lengths: Sequence[int]) -> None:
        if not fleet_lengths:
            raise ValueError("Fleet must contain at least one ship.")
        if any(length < 1 for length in fleet_lengths):
            raise ValueError(f"Ship lengths must be positive, got {list(fleet_lengths)}.")

        self._bounds = bounds
        self._excluded.clear()
        self._wounded.clear()
        self._hotspots.clear()
        self._remaining = sorted(fleet_lengths)
        self._search_order = list(bounds.cells())
        self._rng.shuffle(self._search_order)
        self._search_top = len(self._search_order)
        self._last_aim = None

    def record_outcome(self, outcome: ShotOutcome) -> None:
        bounds = self._require_bounds()
        aim = self._last_aim
        if aim is None:
            raise TargetingContractError("Outcome reported before any target was emitted.")

        if outcome is ShotOutcome.MISS:
            self._excluded.add(aim)
        elif outcome is ShotOutcome.WOUND:
            # Ships never touch diagonally, so no wound diagonal can hold a segment.
            self._excluded.update(neighbors_of(aim, bounds, DIAGONAL))
            self._excluded.add(aim)
            self._wounded.add(aim)
            self._hotspots.append(aim)
        else:
            self._excluded.update(neighbors_of(aim, bounds, FULL_NEIGHBORHOOD))
            self._excluded.add(aim)
            self._wounded.add(aim)
            self._seal_ends(aim, bounds)
            self._retire_sunk_ship(aim, bounds)

    def next_target(self) -> Coord:
        bounds = self._require_bounds()

        while self._hotspots:
            hotspot = self._hotspots[-1]
            for candidate in neighbors_of(hotspot, bounds, ORTHOGONAL):
                if candidate not in self._excluded:
                    return self._aim_at(candidate)
            logger.debug("hotspot_exhausted x=%d y=%d", hotspot.x, hotspot.y)
            self._hotspots.pop()

        if not self._remaining:
            raise TargetingContractError(
                "Every ship is already sunk; the driver must start a new match before asking for targets."
            )
        smallest = self._remaining[0]

        while self._search_top > 0:
            self._search_top -= 1
            cell = self._search_order[self._search_top]
            if cell in self._excluded:
                continue
            if longest_run(cell, bounds, self._is_open) >= smallest:
                return self._aim_at(cell)
        raise TargetingContractError("Search order exhausted while ships remain afloat.")

    def _seal_ends(self, aim: Coord, bounds: GridBounds) -> None:
        for neighbor in neighbors_of(aim, bounds, ORTHOGONAL):
            if neighbor not in self._wounded:
                continue
            beyond = walk(neighbor, neighbor - aim, bounds, self._wounded.__contains__)
            if bounds.contains(beyond):
                self._excluded.add(beyond)

    def _retire_sunk_ship(self, aim: Coord, bounds: GridBounds) -> None:
        length = longest_run(aim, bounds, self._wounded.__contains__)
        if length not in self._remaining:
            logger.warning(
                "sunk_length_not_in_fleet length=%d remaining=%s", length, self._remaining
            )
            return
        self._remaining.remove(length)
        logger.debug("ship_sunk length=%d remaining=%s", length, self._remaining)

    def _is_open(self, cell: Coord) -> bool:
        return cell not in self._excluded

    def _aim_at(self, cell: Coord) -> Coord:
        self._last_aim = cell
        return cell

    def _require_bounds(self) -> GridBounds:
        if self._bounds is None:
            raise TargetingContractError("Targeting engine used before reset.")
        return self._bounds
