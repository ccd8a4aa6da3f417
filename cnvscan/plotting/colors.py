"""Numeric range to color mapping used by the track and heatmap renderers."""

from __future__ import annotations

import matplotlib
import matplotlib.colors as mcolors
import numpy as np
from matplotlib.cm import ScalarMappable


def make_color_map(
    values: np.ndarray,
    cmap: str = "bwr",
    *,
    n: int = 256,
) -> ScalarMappable:
    """Build a mappable spanning the finite range of ``values``.

    A two-element ``values`` such as ``(-t, t)`` fixes the range explicitly.
    """
    arr = np.asarray(values, dtype=float).ravel()
    arr = arr[np.isfinite(arr)]
    if arr.size == 0:
        raise ValueError("values must contain at least one finite number.")
    vmin, vmax = float(arr.min()), float(arr.max())
    if np.isclose(vmin, vmax):
        vmin, vmax = vmin - 0.5, vmax + 0.5
    colormap = matplotlib.colormaps[cmap].resampled(int(n))
    return ScalarMappable(norm=mcolors.Normalize(vmin=vmin, vmax=vmax), cmap=colormap)


def map_colors(values: np.ndarray, mappable: ScalarMappable) -> np.ndarray:
    """RGBA rows for ``values``; out-of-range values take the end colors."""
    arr = np.asarray(values, dtype=float).ravel()
    return np.asarray(mappable.to_rgba(arr), dtype=float)
