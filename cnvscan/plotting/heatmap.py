"""Heatmap rendering for per-cell ratio grids."""

from __future__ import annotations

import matplotlib.pyplot as plt
import numpy as np

from cnvscan.core.types import HeatmapGrid
from cnvscan.plotting.colors import make_color_map
from cnvscan.plotting.styles import DEFAULT_PLOT_STYLE, PlotStyle

TOO_FEW_GENES_MESSAGE = "Too few genes to infer CNV pattern"


def plot_heatmap_grid(
    grid: HeatmapGrid,
    *,
    ax: plt.Axes | None = None,
    style: PlotStyle = DEFAULT_PLOT_STYLE,
) -> tuple[plt.Figure, plt.Axes]:
    """Draw cells as rows and smoothed genes as columns, one color per value."""
    if ax is None:
        fig, ax = plt.subplots(figsize=style.figsize_heatmap)
    else:
        fig = ax.figure

    mappable = make_color_map(np.array([-grid.clip, grid.clip]), style.cmap_heatmap)
    ax.imshow(
        np.asarray(grid.values, dtype=float).T,
        aspect="auto",
        interpolation="nearest",
        cmap=mappable.cmap,
        norm=mappable.norm,
        origin="lower",
    )
    if grid.degenerate:
        ax.set_xticks([])
        ax.text(
            0.5,
            0.5,
            TOO_FEW_GENES_MESSAGE,
            transform=ax.transAxes,
            ha="center",
            va="center",
            fontsize=style.axis_label_fontsize,
        )
    else:
        for bp in grid.boundaries[1:-1]:
            ax.axvline(float(bp) - 0.5, color="black", lw=0.8)
        ax.set_xticks(grid.tick_positions())
        ax.set_xticklabels(list(grid.chromosomes), rotation=90, color="grey")
    ax.set_yticks([])
    fig.colorbar(
        mappable,
        ax=ax,
        shrink=style.colorbar_shrink,
        pad=style.colorbar_pad,
    )
    return fig, ax
