class VoronoiError(Exception):
    """Base class for errors raised while building a diagram."""


class BoundaryError(VoronoiError, ValueError):
    """The boundary polygon cannot be constructed (too few or invalid vertices)."""


class ClippingError(VoronoiError, RuntimeError):
    """
    The diagram cannot be closed against its boundary: a site lies outside the
    boundary, or an unbounded edge never meets the boundary.
    """
