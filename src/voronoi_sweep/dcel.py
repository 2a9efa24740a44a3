from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .cell import Cell
from .exceptions import ClippingError, VoronoiError
from .geometry import bisector_direction, line_segment_intersection, signed_area
from .log import get_logger
from .point import Point, Site

logger = get_logger(__name__)

# labels of half-edges while the faces are linked
_OUTER = -2
_UNKNOWN = -1


@dataclass
class Vertex:
    point: Point
    incident_edges: List[int] = field(default_factory=list)


@dataclass
class HalfEdge:
    """
    Directed edge of a face boundary. Faces are traversed counter-clockwise,
    so the face lies to the left. `face` is None on the outer face.
    """
    origin: int
    twin: int = -1
    next: int = -1
    prev: int = -1
    face: Optional[int] = None


@dataclass
class Face:
    """
    Region of one site inside the boundary.

    On a non-convex boundary the region can fall apart into several pieces;
    `components` holds one half-edge of each boundary cycle, largest piece
    first, and `outer_component` is the first of them.
    """
    site: int  # input index of the generating point
    point: Point
    outer_component: int
    components: List[int] = field(default_factory=list)

    def cycles(self) -> List[int]:
        return self.components or [self.outer_component]


@dataclass
class DCEL:
    """
    Doubly-connected edge list of a clipped Voronoi diagram.
    All references are indices into the three lists.
    """
    vertices: List[Vertex]
    halfedges: List[HalfEdge]
    faces: List[Face]

    def face_count(self) -> int:
        return len(self.faces)

    def vertex_count(self) -> int:
        return len(self.vertices)

    def edge_count(self) -> int:
        return len(self.halfedges) // 2

    def destination(self, halfedge: int) -> int:
        return self.halfedges[self.halfedges[halfedge].twin].origin

    def cycle(self, start: int) -> Iterator[int]:
        h = start
        while True:
            yield h
            h = self.halfedges[h].next
            if h == start:
                break

    def face_halfedges(self, face: int) -> Iterator[int]:
        return self.cycle(self.faces[face].outer_component)

    def face_polygon(self, face: int) -> List[Point]:
        return [self.vertices[self.halfedges[h].origin].point for h in self.face_halfedges(face)]

    def face_polygons(self, face: int) -> List[List[Point]]:
        """Every piece of the face, the main one first."""
        return [[self.vertices[self.halfedges[h].origin].point for h in self.cycle(start)]
                for start in self.faces[face].cycles()]

    def validate(self) -> None:
        """Raise VoronoiError when a twin/next/prev link is inconsistent."""
        n = len(self.halfedges)
        for i, he in enumerate(self.halfedges):
            if not (0 <= he.twin < n and 0 <= he.next < n and 0 <= he.prev < n):
                raise VoronoiError(f"Half-edge {i} has a dangling reference")
            if self.halfedges[he.twin].twin != i:
                raise VoronoiError(f"Half-edge {i} is not the twin of its twin")
            if self.halfedges[he.next].prev != i:
                raise VoronoiError(f"Half-edge {i} is not the prev of its next")
            if self.halfedges[he.next].face != he.face:
                raise VoronoiError(f"Half-edge {i} and its next bound different faces")
            if self.halfedges[he.next].origin != self.halfedges[he.twin].origin:
                raise VoronoiError(f"Half-edge {i} does not end where its next starts")
        for f, face in enumerate(self.faces):
            for start in face.cycles():
                if self.halfedges[start].face != f:
                    raise VoronoiError(f"Face {f} points at a half-edge of another face")
                steps = 0
                for _ in self.cycle(start):
                    steps += 1
                    if steps > n:
                        raise VoronoiError(f"Face {f} boundary does not close")


class HalfEdgePair(NamedTuple):
    """
    Twinned half-edges traced by one breakpoint.

    `left` bounds the face of the site on the breakpoint's left and starts
    where the breakpoint ends; `right` bounds the face on its right and starts
    where the breakpoint starts.
    """
    left: int
    right: int

    def reversed(self) -> "HalfEdgePair":
        return HalfEdgePair(self.right, self.left)


class _VertexWelder:
    """Merges points that agree to `decimals` decimal places."""

    def __init__(self, decimals: int):
        self.decimals = decimals
        self.points: List[Point] = []
        self._index: Dict[Tuple[float, float], int] = {}

    def index(self, p: Point) -> int:
        key = (round(p.x, self.decimals), round(p.y, self.decimals))
        if key not in self._index:
            self._index[key] = len(self.points)
            self.points.append(Point(key[0], key[1]))
        return self._index[key]


def _segment_distances(p: np.ndarray, A: np.ndarray, B: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Distance from p to every segment A[i]-B[i], and the position along it."""
    AB = B - A
    t = np.clip(((p - A) * AB).sum(axis=1) / (AB * AB).sum(axis=1), 0.0, 1.0)
    closest = A + t[:, None] * AB
    return np.hypot(closest[:, 0] - p[0], closest[:, 1] - p[1]), t


class DCELBuilder:
    """
    Grows the raw vertex and half-edge tables while the sweep runs and turns
    them into a clipped DCEL once the event queue is empty.

    Half-edges come in pairs (2k, 2k + 1), so the twin of h is h ^ 1. An
    origin stays None while the end of the edge is unknown.
    """

    def __init__(self, sites: Sequence[Site]):
        self.sites = list(sites)
        self._face_of = {site.index: f for f, site in enumerate(self.sites)}
        self.points: List[Point] = []
        self.incident: List[List[int]] = []
        self.origin: List[Optional[int]] = []
        self.face: List[int] = []

    def add_vertex(self, point: Point) -> int:
        self.points.append(point)
        self.incident.append([])
        return len(self.points) - 1

    def open_edge_pair(self, site_a: Site, site_b: Site) -> HalfEdgePair:
        h = len(self.origin)
        self.origin.extend([None, None])
        self.face.extend([self._face_of[site_a.index], self._face_of[site_b.index]])
        return HalfEdgePair(h, h + 1)

    def close_edge_pair(self, pair: HalfEdgePair, vertex: int) -> None:
        self._set_origin(pair.left, vertex)

    def start_edge_pair(self, pair: HalfEdgePair, vertex: int) -> None:
        self._set_origin(pair.right, vertex)

    def _set_origin(self, halfedge: int, vertex: int) -> None:
        self.origin[halfedge] = vertex
        self.incident[vertex].append(halfedge)

    def pair_count(self) -> int:
        return len(self.origin) // 2

    # ------------------------------------------------------------------
    # finalisation

    def _clip_pair(self, h: int, cell: Cell) -> List[Tuple[Point, Point]]:
        """
        Pieces of half-edge h that lie inside the cell, as (start, end) points
        in the direction of h. Unset origins extend the edge to infinity.
        """
        s = self.sites[self.face[h]]
        t = self.sites[self.face[h ^ 1]]
        d = bisector_direction(s, t)
        m = (s + t) * 0.5
        dd = d.dot(d)

        def param(v: int) -> float:
            return (self.points[v] - m).dot(d) / dd

        def at(tau: float) -> Point:
            return m + d * tau

        start_v = self.origin[h]
        end_v = self.origin[h ^ 1]
        lo = -math.inf if start_v is None else param(start_v)
        hi = math.inf if end_v is None else param(end_v)
        if not lo < hi:
            return []

        cuts = []
        for a, b in cell.edges():
            tau = line_segment_intersection(m, d, a, b)
            if tau is not None and lo < tau < hi:
                cuts.append(tau)
        cuts.sort()

        # A ray leaving a point strictly inside a bounded cell always crosses
        # an edge, so this only fires when that crossing is lost to rounding.
        if not cuts and math.isinf(lo) != math.isinf(hi):
            anchor = self.points[end_v if math.isinf(lo) else start_v]
            if cell.contains(anchor) and not cell.on_boundary(anchor):
                raise ClippingError(
                    f"Unbounded edge between sites {s.index} and {t.index} starting at "
                    f"{anchor.as_tuple()} never meets the boundary")

        bounds = [lo] + cuts + [hi]
        pieces = []
        for a, b in zip(bounds, bounds[1:]):
            if math.isinf(a) or math.isinf(b):
                continue
            if not cell.contains(at(0.5 * (a + b))):
                continue
            p = self.points[start_v] if a == lo else at(a)
            q = self.points[end_v] if b == hi else at(b)
            pieces.append((p, q))
        return pieces

    def finalize(self, cell: Cell, *, weld_decimals: int = 9) -> DCEL:
        """
        Clip every traced edge to the cell and link the result into a planar
        subdivision.

        The clipped pieces and the boundary edges, split where pieces end on
        them, form one planar graph. Every half-edge continues with the next
        edge clockwise around its destination, which traces each region
        counter-clockwise whatever the shape of the boundary. A region takes
        the face of the bisector half-edges on its cycle.
        """
        welder = _VertexWelder(weld_decimals)
        corners = [welder.index(c) for c in cell.vertices]
        C = np.array([c.as_tuple() for c in cell.vertices], dtype=np.float64)
        A = C
        B = np.roll(C, -1, axis=0)
        minx, miny, maxx, maxy = cell.bounds
        scale = max(1.0, abs(minx), abs(miny), abs(maxx), abs(maxy))
        tol = max(10.0 ** -weld_decimals, 1e-12 * scale)

        def snap(p: Point) -> int:
            d = np.hypot(C[:, 0] - p.x, C[:, 1] - p.y)
            k = int(np.argmin(d))
            return corners[k] if d[k] <= tol else welder.index(p)

        pieces: List[Tuple[int, int, int, int]] = []
        dropped = 0
        for h in range(0, len(self.origin), 2):
            for p, q in self._clip_pair(h, cell):
                mid = (p + q) * 0.5
                # pieces running along the boundary separate nothing
                if _segment_distances(np.array(mid.as_tuple()), A, B)[0].min() <= tol:
                    dropped += 1
                    continue
                a, b = snap(p), snap(q)
                if a == b:
                    dropped += 1
                    continue
                pieces.append((a, b, self.face[h], self.face[h ^ 1]))

        if dropped:
            logger.debug("Dropped degenerate edge pieces", count=dropped)

        # split the boundary wherever a piece ends on it
        splits: List[List[Tuple[float, int]]] = [[] for _ in corners]
        ends = {v for a, b, _, _ in pieces for v in (a, b)} - set(corners)
        for v in sorted(ends):
            dist, t = _segment_distances(np.array(welder.points[v].as_tuple()), A, B)
            k = int(np.argmin(dist))
            if dist[k] <= tol:
                splits[k].append((float(t[k]), v))

        origin: List[int] = []
        label: List[int] = []
        directed: Dict[Tuple[int, int], int] = {}

        def add_pair(u: int, v: int, left: int, right: int) -> None:
            for s, e, f in ((u, v, left), (v, u, right)):
                if (s, e) in directed:
                    raise ClippingError(f"Edge {s}->{e} is traced twice; faces overlap")
                directed[(s, e)] = len(origin)
                origin.append(s)
                label.append(f)

        for a, b, left, right in pieces:
            add_pair(a, b, left, right)

        ccw = cell.is_counter_clockwise()
        n = len(corners)
        for k in range(n):
            run = [corners[k]] + [v for _, v in sorted(splits[k])] + [corners[(k + 1) % n]]
            for u, v in zip(run, run[1:]):
                if u == v:
                    continue
                if ccw:
                    add_pair(u, v, _UNKNOWN, _OUTER)
                else:
                    add_pair(u, v, _OUTER, _UNKNOWN)

        H = len(origin)
        P = np.array([p.as_tuple() for p in welder.points], dtype=np.float64)
        O = np.array(origin, dtype=np.int64)
        D = O[np.arange(H) ^ 1]
        angles = np.arctan2(P[D, 1] - P[O, 1], P[D, 0] - P[O, 0])

        outgoing: Dict[int, List[int]] = defaultdict(list)
        for h in range(H):
            outgoing[origin[h]].append(h)
        slot = [0] * H
        for v, hs in outgoing.items():
            if len(hs) < 2:
                raise ClippingError(
                    f"Vertex {welder.points[v].as_tuple()} ends a single edge; "
                    f"the diagram does not close against the boundary")
            hs.sort(key=lambda e: angles[e])
            for i, e in enumerate(hs):
                slot[e] = i

        nxt = [0] * H
        prv = [0] * H
        for h in range(H):
            around = outgoing[origin[h ^ 1]]
            g = around[(slot[h ^ 1] - 1) % len(around)]
            nxt[h] = g
            prv[g] = h

        face_of: List[Optional[int]] = [None] * H
        components: List[List[Tuple[float, int]]] = [[] for _ in self.sites]
        seen = [False] * H
        for start in range(H):
            if seen[start]:
                continue
            cycle = []
            h = start
            while not seen[h]:
                seen[h] = True
                cycle.append(h)
                h = nxt[h]

            labels = {label[h] for h in cycle} - {_UNKNOWN}
            if labels == {_OUTER}:
                continue
            if _OUTER in labels or len(labels) > 1:
                raise ClippingError(
                    f"Faces of sites {sorted(self.sites[f].index for f in labels if f >= 0)} "
                    f"share one region")
            if labels:
                f = labels.pop()
            elif len(self.sites) == 1:
                f = 0
            else:
                raise ClippingError("A region of the boundary belongs to no site")

            area = signed_area([welder.points[origin[h]] for h in cycle])
            if len(cycle) < 3 or area <= 0:
                raise ClippingError(
                    f"Face of site {self.sites[f].index} closes with {len(cycle)} vertices; "
                    f"the site or the boundary is degenerate")
            for h in cycle:
                face_of[h] = f
            components[f].append((area, start))

        faces: List[Face] = []
        for f, site in enumerate(self.sites):
            if not components[f]:
                raise ClippingError(f"Site {site.index} has no region inside the boundary")
            starts = [h for _, h in sorted(components[f], key=lambda c: -c[0])]
            faces.append(Face(site=site.index, point=site.point(),
                              outer_component=starts[0], components=starts))

        # keep only the vertices that edges use
        used = sorted(set(origin))
        renumber = {old: new for new, old in enumerate(used)}
        vertices = [Vertex(point=welder.points[old]) for old in used]
        halfedges: List[HalfEdge] = []
        for h in range(H):
            u = renumber[origin[h]]
            halfedges.append(HalfEdge(origin=u, twin=h ^ 1, next=nxt[h], prev=prv[h], face=face_of[h]))
            vertices[u].incident_edges.append(h)

        logger.debug("DCEL finalized", vertices=len(vertices),
                     halfedges=len(halfedges), faces=len(faces))
        return DCEL(vertices=vertices, halfedges=halfedges, faces=faces)


def make_polygons(dcel: DCEL) -> List[List[Point]]:
    """
    One counter-clockwise vertex loop per face, in site order. A face split
    by a non-convex boundary contributes its largest piece.
    """
    return [dcel.face_polygon(f) for f in range(dcel.face_count())]


def make_line_segments(dcel: DCEL, *, internal_only: bool = False) -> List[Tuple[Point, Point]]:
    """
    One (start, end) pair per edge; twins are not repeated.
    With internal_only, edges on the boundary are left out.
    """
    segments = []
    for h, he in enumerate(dcel.halfedges):
        if he.twin < h:
            continue
        if internal_only and (he.face is None or dcel.halfedges[he.twin].face is None):
            continue
        segments.append((dcel.vertices[he.origin].point, dcel.vertices[dcel.destination(h)].point))
    return segments
