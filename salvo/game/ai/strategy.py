"""Targeting strategy contract used by the protocol driver."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from salvo.game.core.geometry import Coord, GridBounds
from salvo.game.core.models import ShotOutcome


class TargetingStrategy(ABC):
    """Attacking-side strategy that only sees reported shot outcomes."""

    @property
    @abstractmethod
    def last_aim(self) -> Coord | None:
        """Most recently emitted target, or None before the first one."""

    @abstractmethod
    def reset(self, bounds: GridBounds, fleet_lengths: Sequence[int]) -> None:
        """Start a new match."""

    @abstractmethod
    def record_outcome(self, outcome: ShotOutcome) -> None:
        """Apply the outcome of the shot at `last_aim`."""

    @abstractmethod
    def next_target(self) -> Coord:
        """Return next coordinate to fire."""
