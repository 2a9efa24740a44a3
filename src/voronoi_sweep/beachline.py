from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from .dcel import DCELBuilder, HalfEdgePair
from .events import CircleEvent, EventQueue
from .geometry import breakpoint_x
from .point import Site


class Arc:
    """
    Piece of the beachline where the sweep-line frontier is closest to `site`.

    `right_pair` is the half-edge pair traced by the breakpoint between this
    arc and `next`; `event` is the circle event that would remove the arc.
    """
    __slots__ = ("site", "prev", "next", "event", "right_pair")

    def __init__(self, site: Site, prev: Optional["Arc"] = None, next: Optional["Arc"] = None):
        self.site = site
        self.prev = prev
        self.next = next
        self.event: Optional[CircleEvent] = None
        self.right_pair: Optional[HalfEdgePair] = None

    def __repr__(self):
        return f"Arc(site={self.site.index})"


class Beachline:
    """
    Left-to-right doubly linked list of arcs.

    Breakpoints move with the sweep line, so they are recomputed from the
    neighbouring sites on every query instead of being stored.
    """

    def __init__(self, builder: DCELBuilder):
        self.builder = builder
        self.head: Optional[Arc] = None
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Arc]:
        arc = self.head
        while arc is not None:
            yield arc
            arc = arc.next

    def is_empty(self) -> bool:
        return self.head is None

    def sites(self) -> List[int]:
        return [arc.site.index for arc in self]

    def breakpoints(self, sweep_y: float) -> List[float]:
        return [breakpoint_x(arc.site, arc.next.site, sweep_y)
                for arc in self if arc.next is not None]

    def locate(self, x: float, sweep_y: float) -> Arc:
        """Arc lying above position x when the sweep line is at sweep_y."""
        if self.head is None:
            raise LookupError("Cannot locate an arc on an empty beachline")
        arc = self.head
        # a position exactly on a breakpoint belongs to the arc on its right
        while arc.next is not None and breakpoint_x(arc.site, arc.next.site, sweep_y) <= x:
            arc = arc.next
        return arc

    def insert_site(self, site: Site) -> Tuple[Arc, Optional[Arc], Optional[Arc]]:
        """
        Add the arc of a new site reached by the sweep line.

        Returns (new arc, left neighbour, right neighbour). The located arc is
        split around the new one and both new breakpoints share one bisector
        half-edge pair, each of them fixing one end of it.
        """
        if self.head is None:
            self.head = Arc(site)
            self._size = 1
            return self.head, None, None

        arc = self.locate(site.x, site.y)
        EventQueue.invalidate(arc.event)
        arc.event = None

        if arc.site.y == site.y:
            return self._append_level_site(arc, site)

        pair = self.builder.open_edge_pair(arc.site, site)
        new = Arc(site, prev=arc)
        right = Arc(arc.site, prev=new, next=arc.next)
        new.next = right
        if arc.next is not None:
            arc.next.prev = right
        arc.next = new

        right.right_pair = arc.right_pair
        new.right_pair = pair.reversed()
        arc.right_pair = pair
        self._size += 2
        return new, arc, right

    def _append_level_site(self, arc: Arc, site: Site) -> Tuple[Arc, Optional[Arc], Optional[Arc]]:
        # Every site processed so far lies on the sweep line, so every arc is
        # still a vertical ray and the breakpoints are midpoints. Sites at
        # equal y arrive in ascending x, so `arc` is the rightmost arc and the
        # new one goes after it, separated by a vertical bisector.
        new = Arc(site, prev=arc, next=arc.next)
        if arc.next is not None:
            arc.next.prev = new
        arc.next = new
        new.right_pair = arc.right_pair
        arc.right_pair = self.builder.open_edge_pair(arc.site, site)
        self._size += 1
        return new, arc, new.next

    def remove_arc(self, arc: Arc, vertex: int) -> Tuple[Arc, Arc]:
        """
        Remove an arc whose circle event fired at `vertex`.

        Both breakpoints of the arc end at the vertex and a new breakpoint
        between the former neighbours starts there. Returns the neighbours.
        """
        left, right = arc.prev, arc.next
        if left is None or right is None:
            raise ValueError(f"{arc!r} has no neighbour on one side and cannot vanish")

        EventQueue.invalidate(arc.event)
        arc.event = None

        self.builder.close_edge_pair(left.right_pair, vertex)
        self.builder.close_edge_pair(arc.right_pair, vertex)
        pair = self.builder.open_edge_pair(left.site, right.site)
        self.builder.start_edge_pair(pair, vertex)
        left.right_pair = pair

        left.next = right
        right.prev = left
        arc.prev = arc.next = None
        self._size -= 1
        return left, right
