import logging

from .point import Point, Site
from .exceptions import VoronoiError, BoundaryError, ClippingError
from .cell import Cell
from .dcel import DCEL, Vertex, HalfEdge, Face, make_polygons, make_line_segments
from .voronoi import voronoi, FortuneSweep
from .lloyd import polygon_centroid, lloyd_relaxation
from .sampling import sample_points_in_cell, random_points

__all__ = [
    "Point",
    "Site",
    "VoronoiError",
    "BoundaryError",
    "ClippingError",
    "Cell",
    "DCEL",
    "Vertex",
    "HalfEdge",
    "Face",
    "make_polygons",
    "make_line_segments",
    "voronoi",
    "FortuneSweep",
    "polygon_centroid",
    "lloyd_relaxation",
    "sample_points_in_cell",
    "random_points",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
