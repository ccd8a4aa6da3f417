"""Shared plotting style settings for deterministic figure outputs."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

import matplotlib
import matplotlib.pyplot as plt
import numpy as np


@dataclass(frozen=True)
class PlotStyle:
    """Centralized plotting defaults used across report figures."""

    dpi: int = 200
    figsize_page: tuple[float, float] = (8.5, 8.5)
    figsize_track: tuple[float, float] = (11.0, 4.0)
    figsize_heatmap: tuple[float, float] = (11.0, 7.0)
    panel_rows: int = 2
    panel_cols: int = 2
    marker_size: float = 6.0
    track_marker_size: float = 9.0
    ylim: tuple[float, float] = (-2.0, 2.0)
    loss_level: float = -1.0
    gain_level: float = 0.58
    cmap_track: str = "bwr"
    cmap_heatmap: str = "RdBu_r"
    axis_label_fontsize: int = 9
    title_fontsize: int = 10
    tick_fontsize: int = 7
    colorbar_shrink: float = 0.8
    colorbar_pad: float = 0.02


DEFAULT_PLOT_STYLE = PlotStyle()


def apply_plot_style(style: PlotStyle = DEFAULT_PLOT_STYLE) -> None:
    """Apply deterministic matplotlib rcParams for report plots."""
    plt.rcParams.update(
        {
            "figure.dpi": style.dpi,
            "savefig.dpi": style.dpi,
            "savefig.facecolor": "white",
            "font.family": "DejaVu Sans",
            "axes.titlesize": style.title_fontsize,
            "axes.labelsize": style.axis_label_fontsize,
            "xtick.labelsize": style.tick_fontsize,
            "ytick.labelsize": style.tick_fontsize,
            "axes.grid": False,
        }
    )


def plot_style_dict(style: PlotStyle = DEFAULT_PLOT_STYLE) -> dict[str, Any]:
    """Return style + dependency versions for run logs."""
    d = asdict(style)
    d["matplotlib_version"] = str(matplotlib.__version__)
    d["numpy_version"] = str(np.__version__)
    return d
