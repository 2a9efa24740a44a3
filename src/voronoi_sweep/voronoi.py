from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Optional

from .beachline import Arc, Beachline
from .cell import Cell, PointLike, as_point
from .dcel import DCEL, DCELBuilder
from .events import SITE, CircleEvent, EventQueue, SiteEvent
from .exceptions import ClippingError
from .geometry import EPSILON, circumcircle, orientation
from .log import get_logger
from .point import Site

logger = get_logger(__name__)


class SweepState(Enum):
    RUNNING = "running"
    FINALIZING = "finalizing"
    DONE = "done"


def make_sites(points: Iterable[PointLike]) -> List[Site]:
    """
    Tag points with their input index. Repeated coordinates keep only their
    first occurrence, so duplicates share one face.
    """
    sites = []
    seen = set()
    for i, p in enumerate(points):
        pt = as_point(p)
        if pt in seen:
            continue
        seen.add(pt)
        sites.append(Site(pt.x, pt.y, index=i))
    return sites


class FortuneSweep:
    """
    One run of Fortune's algorithm over a fixed set of sites.

    The sweep line moves from the largest y downward. `step` handles one
    event; once the queue is empty `finish` clips the diagram to the boundary.
    """

    def __init__(self, sites: List[Site], boundary: Cell):
        self.sites = sites
        self.boundary = boundary
        self.queue = EventQueue()
        self.builder = DCELBuilder(sites)
        self.beachline = Beachline(self.builder)
        self.sweep_y: Optional[float] = None
        self.state = SweepState.RUNNING
        self.circle_events = 0

        for site in sites:
            self.queue.push(SiteEvent(site))

    def step(self) -> bool:
        """Process the next valid event. Returns False when none is left."""
        if self.state is not SweepState.RUNNING:
            return False
        event = self.queue.pop_min()
        if event is None:
            self.state = SweepState.FINALIZING
            return False

        self.sweep_y = event.y
        if event.kind == SITE:
            self._handle_site(event)
        else:
            self._handle_circle(event)
        return True

    def _handle_site(self, event: SiteEvent) -> None:
        _, left, right = self.beachline.insert_site(event.site)
        for arc in (left, right):
            if arc is not None:
                self._check_circle_event(arc)

    def _handle_circle(self, event: CircleEvent) -> None:
        self.circle_events += 1
        vertex = self.builder.add_vertex(event.center)
        left, right = self.beachline.remove_arc(event.arc, vertex)
        self._check_circle_event(left)
        self._check_circle_event(right)

    def _check_circle_event(self, arc: Arc) -> None:
        """
        Schedule the disappearance of `arc` if its two breakpoints converge,
        replacing whatever event was pending for it.
        """
        EventQueue.invalidate(arc.event)
        arc.event = None
        if arc.prev is None or arc.next is None:
            return

        a, b, c = arc.prev.site, arc.site, arc.next.site
        # breakpoints only converge when the sites turn clockwise
        if orientation(a, b, c) >= 0:
            return
        circle = circumcircle(a, b, c)
        if circle is None:
            return

        center, radius = circle
        y = center.y - radius
        if y > self.sweep_y + EPSILON * max(1.0, abs(self.sweep_y)):
            return
        arc.event = CircleEvent(center=center, y=min(y, self.sweep_y), arc=arc)
        self.queue.push(arc.event)

    def run(self, *, weld_decimals: int = 9) -> DCEL:
        logger.debug("Sweep started", sites=len(self.sites))
        while self.step():
            pass
        logger.debug("Sweep finished", circle_events=self.circle_events,
                     discarded_events=self.queue.discarded,
                     edge_pairs=self.builder.pair_count())
        return self.finish(weld_decimals=weld_decimals)

    def finish(self, *, weld_decimals: int = 9) -> DCEL:
        if self.state is SweepState.RUNNING:
            raise RuntimeError("The sweep still has events to process")
        dcel = self.builder.finalize(self.boundary, weld_decimals=weld_decimals)
        self.state = SweepState.DONE
        return dcel


def voronoi(points: Iterable[PointLike], boundary: Cell, *, weld_decimals: int = 9) -> DCEL:
    """
    Voronoi diagram of `points` clipped to `boundary`.

    Every point must lie inside the boundary (its edges included). The result
    has one face per distinct coordinate, in order of first appearance.
    """
    sites = make_sites(points)
    if not sites:
        raise ValueError("voronoi needs at least one point")
    for site in sites:
        if not boundary.contains(site):
            raise ClippingError(f"Site {site.index} at {site.as_tuple()} lies outside the boundary")

    return FortuneSweep(sites, boundary).run(weld_decimals=weld_decimals)
