"""Points awarded by games and the ledger that totals them."""

import logging
from typing import Callable, List, Protocol

from .models import PointEvent


logger = logging.getLogger(__name__)


class PointSink(Protocol):
    """Anything a game can send earned points to."""

    def add_points(self, points: int, source: str, reason: str = "") -> None:
        ...


class PointsLedger:
    """
    Running total of points across all games.

    Listeners are called with every event after it is recorded.
    """

    def __init__(self):
        self.total = 0
        self.events: List[PointEvent] = []
        self._listeners: List[Callable[[PointEvent], None]] = []

    def add_points(self, points: int, source: str, reason: str = "") -> None:
        event = PointEvent(points=points, source=source, reason=reason)
        self.events.append(event)
        self.total += points
        logger.info("+%d points from %s (total %d)", points, source, self.total)

        for listener in self._listeners:
            listener(event)

    def subscribe(self, listener: Callable[[PointEvent], None]) -> None:
        self._listeners.append(listener)

    def points_from(self, source: str) -> int:
        return sum(e.points for e in self.events if e.source == source)
