from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Tuple, Union

from .log import get_logger
from .point import Point, Site

if TYPE_CHECKING:
    from .beachline import Arc

logger = get_logger(__name__)

SITE = 0
CIRCLE = 1


@dataclass(eq=False)
class SiteEvent:
    site: Site
    kind = SITE
    # site events are never invalidated
    valid = True

    @property
    def y(self) -> float:
        return self.site.y

    @property
    def x(self) -> float:
        return self.site.x


@dataclass(eq=False)
class CircleEvent:
    """
    Predicted disappearance of `arc` when the sweep reaches `y`, the lowest
    point of the circle through the arc and its two neighbours.
    """
    center: Point
    y: float
    arc: "Arc"
    valid: bool = field(default=True)
    kind = CIRCLE

    @property
    def x(self) -> float:
        return self.center.x


Event = Union[SiteEvent, CircleEvent]


def event_priority(event: Event) -> Tuple[float, int, float]:
    """
    Processing order of events: the sweep runs from the largest y downward;
    at equal y sites come before circles, then ascending x.
    """
    return -event.y, event.kind, event.x


class EventQueue:
    """
    Binary heap of site and circle events.

    Circle events are invalidated in place and dropped lazily when they reach
    the top of the heap.
    """

    def __init__(self):
        self._heap: List[Tuple[Tuple[float, int, float], int, Event]] = []
        self._counter = itertools.count()
        self.discarded = 0

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def push(self, event: Event) -> None:
        heapq.heappush(self._heap, (event_priority(event), next(self._counter), event))

    def pop_min(self) -> Optional[Event]:
        while self._heap:
            _, _, event = heapq.heappop(self._heap)
            if event.valid:
                return event
            self.discarded += 1
            logger.debug("Skipping invalidated circle event", y=event.y, x=event.x)
        return None

    def peek(self) -> Optional[Event]:
        while self._heap and not self._heap[0][2].valid:
            heapq.heappop(self._heap)
            self.discarded += 1
        return self._heap[0][2] if self._heap else None

    @staticmethod
    def invalidate(event: Optional[CircleEvent]) -> None:
        if event is not None:
            event.valid = False
