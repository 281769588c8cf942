"""Shared annotator constants.

Centralises the option lists offered by the viewer controls and the
string literals that the interaction layer and serializer agree on.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Polygon capture
# ---------------------------------------------------------------------------

MIN_POLYGON_VERTICES: int = 3
"""Minimum number of clicked vertices before a polygon can be saved."""

NO_SELECTION: str = "none"
"""View-selector entry meaning "no saved polygon is previewed"."""

# ---------------------------------------------------------------------------
# Viewer options
# ---------------------------------------------------------------------------

DRAW_COLORS: tuple[str, ...] = ("white", "black", "red", "blue", "green", "orange", "gray")
"""Colors offered for the in-progress polygon, pointer readout and preview."""

COLORMAPS: tuple[str, ...] = (
    "viridis",
    "gray",
    "inferno",
    "plasma",
    "magma",
    "cividis",
    "terrain",
    "RdBu",
    "BrBG",
)
"""Matplotlib colormap names offered for the heatmap."""

DEFAULT_MAX_RESOLUTION: int = 1000
"""Default maximum display size (pixels per side) of the raster heatmap."""

DEFAULT_UI_WIDTH: int = 300
"""Default width in pixels of the control column."""

HEATMAP_SIZE_PX: tuple[int, int] = (1300, 1200)
"""Size in pixels of the heatmap area; the control column is added to the width."""
