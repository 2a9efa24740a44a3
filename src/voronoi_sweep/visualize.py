from io import BytesIO
from typing import Optional

import matplotlib.pyplot as plt

from .cell import Cell
from .dcel import DCEL, make_line_segments


def plot_diagram(diagram: DCEL, ax=None, *, show_sites: bool = True):
    if ax is None:
        fig, ax = plt.subplots()

    for p, q in make_line_segments(diagram):
        ax.plot([p.x, q.x], [p.y, q.y], "-k", linewidth=1)

    if show_sites:
        ax.plot([f.point.x for f in diagram.faces], [f.point.y for f in diagram.faces], ".r")

    ax.set_aspect("equal")
    ax.set_title("Voronoi (Fortune sweep)")
    return ax


def render_png(diagram: DCEL, boundary: Optional[Cell] = None, *, size_px=(600, 600), dpi: int = 100) -> bytes:
    """Render the diagram to PNG bytes with a fixed frame around the boundary."""
    fig, ax = plt.subplots(figsize=(size_px[0] / dpi, size_px[1] / dpi), dpi=dpi)
    try:
        plot_diagram(diagram, ax=ax)
        if boundary is not None:
            minx, miny, maxx, maxy = boundary.bounds
            ax.set_xlim(minx, maxx)
            ax.set_ylim(miny, maxy)
        ax.set_axis_off()
        buf = BytesIO()
        fig.savefig(buf, format="png", dpi=dpi)
    finally:
        plt.close(fig)
    return buf.getvalue()
