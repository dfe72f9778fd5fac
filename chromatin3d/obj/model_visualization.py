# ChromatinModel Visualization Module - visual policy handed to a renderer
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence, Tuple

import matplotlib
import numpy as np
import pandas as pd
from matplotlib.colors import Normalize, is_color_like, to_hex
from scipy.spatial import cKDTree

from ..utils.helper import validate_coordinates

DEFAULT_SPHERE_RADIUS = 0.01
# link radius relative to the bin sphere radius
TUBE_TO_SPHERE_RATIO = 0.4


class Mark(str, Enum):
    SPHERE = "sphere"
    BOX = "box"
    OCTAHEDRON = "octahedron"


@dataclass(frozen=True)
class Primitive:
    """Unit-size geometry a renderer instantiates once per bin."""
    kind: str
    params: Tuple[Tuple[str, Any], ...] = ()


_PRIMITIVES = {
    Mark.SPHERE: Primitive("sphere", (("radius", 1.0), ("width_segments", 16), ("height_segments", 16))),
    Mark.BOX: Primitive("box", (("width", 1.0), ("height", 1.0), ("depth", 1.0))),
    Mark.OCTAHEDRON: Primitive("octahedron", (("radius", 1.0), ("detail", 0))),
}


def decide_geometry(mark):
    """Primitive for a mark; raises ValueError for marks outside Mark."""
    return _PRIMITIVES[Mark(mark)]


@dataclass
class VisualAttributes:
    """
    Visual attributes shared by the bins of one segment.

    ``color`` is a single matplotlib color or one color per bin. When
    ``values`` holds a per-bin signal, colors come from ``cmap`` instead,
    clipped to [vmin, vmax] (5% and 95% quantiles by default), and
    ``size_range`` optionally maps the same signal onto the bin scale.
    """
    color: Any = "#1f77b4"
    values: Optional[Sequence[float]] = None
    cmap: str = "viridis"
    vmin: Optional[float] = None
    vmax: Optional[float] = None
    size: float = 1.0
    size_range: Optional[Tuple[float, float]] = None
    nan_color: str = "#d3d3d3"
    mark: Mark = Mark.SPHERE
    make_links: bool = True

    def norm(self):
        """Normalize for the current values and limits."""
        values = np.asarray(self.values, dtype=np.float64)
        vmin = self.vmin if self.vmin is not None else np.nanquantile(values, 0.05)
        vmax = self.vmax if self.vmax is not None else np.nanquantile(values, 0.95)
        return Normalize(vmin=vmin, vmax=vmax, clip=True)


def decide_visual_parameters(attributes, i, norm=None):
    """
    Color (hex string) and scale of bin ``i`` under ``attributes``.

    ``norm`` is the Normalize of ``attributes.norm()``; pass it when looping
    over many bins so the limits are computed once.

    Examples:
    ---------
    >>> decide_visual_parameters(VisualAttributes(color="red", size=2.0), 0)
    ('#ff0000', 2.0)
    """
    if attributes.values is None:
        if is_color_like(attributes.color):
            color = attributes.color
        else:
            color = attributes.color[i]
        return to_hex(color), float(attributes.size)

    value = float(attributes.values[i])
    if math.isnan(value):
        return to_hex(attributes.nan_color), float(attributes.size)

    if norm is None:
        norm = attributes.norm()
    t = float(norm(value))
    if math.isnan(t):
        # vmin == vmax
        t = 0.0
    color = to_hex(matplotlib.colormaps[attributes.cmap](t))
    if attributes.size_range is None:
        scale = float(attributes.size)
    else:
        low, high = attributes.size_range
        scale = low + t * (high - low)
    return color, scale


def part_visuals(part, attributes):
    """Per-bin x, y, z, color and scale of a part, for instanced bin marks."""
    norm = attributes.norm() if attributes.values is not None else None
    visuals = [decide_visual_parameters(attributes, i, norm) for i in range(len(part))]
    return pd.DataFrame({
        "x": part.bins[:, 0],
        "y": part.bins[:, 1],
        "z": part.bins[:, 2],
        "color": [color for color, _ in visuals],
        "scale": np.array([scale for _, scale in visuals], dtype=np.float64),
    })


def estimate_best_sphere_size(positions):
    """
    Radius that keeps spheres around the points from overlapping: half the
    smallest non-zero distance between a point and its nearest neighbour.
    """
    positions = validate_coordinates(positions)
    if len(positions) < 2:
        return DEFAULT_SPHERE_RADIUS
    distances, _ = cKDTree(positions).query(positions, k=2)
    nearest = distances[:, 1]
    nearest = nearest[np.isfinite(nearest) & (nearest > 0)]
    if len(nearest) == 0:
        return DEFAULT_SPHERE_RADIUS
    return float(nearest.min() / 2.0)


def calculate_grid_positions(i, n):
    """Column and row of item ``i`` when ``n`` items are laid out on a square-ish grid."""
    if n < 1:
        raise ValueError("n should be at least 1")
    x_dim = math.floor(math.sqrt(n))
    return i % x_dim, i // x_dim


def layout_transform(i, n, layout="center"):
    """
    Offset and uniform scale applied to model ``i`` of ``n``.

    "center" keeps every model at the origin at its own size; "grid" shrinks
    the models and tiles them around the origin.
    """
    if layout == "center":
        return np.zeros(3), 1.0
    elif layout == "grid":
        grid_x, grid_y = calculate_grid_positions(i, n)
        scale = 1.0 / math.floor(math.sqrt(n))
        return np.array([grid_x * scale - 0.5, grid_y * scale - 0.5, 0.0]), scale
    else:
        raise ValueError(f'layout should be "center" or "grid", got {layout!r}')


def normalize_points(coords, method="fit"):
    """
    Normalize coordinates for rendering.

    Methods:
    --------
    center : move the centroid to the origin
    minmax : scale every axis to [0, 1]
    fit : center the bounding box on the origin and scale uniformly so the
        largest side is 1
    """
    coords = validate_coordinates(coords)
    if len(coords) == 0:
        return coords.copy()

    if method == 'center':
        return coords - np.mean(coords, axis=0)

    elif method == 'minmax':
        min_vals = np.min(coords, axis=0)
        max_vals = np.max(coords, axis=0)
        return (coords - min_vals) / (max_vals - min_vals + 1e-10)

    elif method == 'fit':
        min_vals = np.min(coords, axis=0)
        max_vals = np.max(coords, axis=0)
        centered = coords - (min_vals + max_vals) / 2.0
        extent = np.max(max_vals - min_vals)
        if extent > 0:
            centered = centered / extent
        return centered

    else:
        raise ValueError(f"Unsupported normalization method: {method}")


class ModelVisualization:
    """Visual parameters for all parts of a ChromatinModel"""

    def sphere_radius(self):
        """Sphere radius estimated over the bins of every part together"""
        if self.total_bins == 0:
            return DEFAULT_SPHERE_RADIUS
        return estimate_best_sphere_size(np.vstack([part.bins for part in self.parts]))

    def tube_radius(self):
        return TUBE_TO_SPHERE_RATIO * self.sphere_radius()

    def visuals(self, attributes=None):
        """
        Per-bin color and scale of every part, with ``part`` and ``label``
        columns. ``attributes`` is one VisualAttributes for all parts or a
        list with one per part.
        """
        if attributes is None:
            attributes = VisualAttributes()
        if isinstance(attributes, VisualAttributes):
            attributes = [attributes] * len(self.parts)
        if len(attributes) != len(self.parts):
            raise ValueError(f"Got {len(attributes)} attributes for {len(self.parts)} parts")

        frames = [part_visuals(part, attrs).assign(part=i, label=part.label)
                  for i, (part, attrs) in enumerate(zip(self.parts, attributes))]
        if not frames:
            return pd.DataFrame(columns=["x", "y", "z", "color", "scale", "part", "label"])
        return pd.concat(frames, ignore_index=True)
