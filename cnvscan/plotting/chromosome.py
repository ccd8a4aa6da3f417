"""Chromosome panels and genome tracks drawn from precomputed results."""

from __future__ import annotations

import matplotlib.pyplot as plt
import numpy as np

from cnvscan.core.types import ChromosomeResult, GenomeTrack
from cnvscan.plotting.colors import make_color_map, map_colors
from cnvscan.plotting.styles import DEFAULT_PLOT_STYLE, PlotStyle

TOO_FEW_GENES_MESSAGE = "Too few genes \n on chromosome to \n infer CNV pattern"


def plot_chromosome_ratio(
    result: ChromosomeResult,
    *,
    ax: plt.Axes | None = None,
    style: PlotStyle = DEFAULT_PLOT_STYLE,
) -> tuple[plt.Figure, plt.Axes]:
    """Scatter smoothed log2 tumor/normal ratios of one chromosome.

    Degenerate results draw the placeholder with an explanatory message. A
    located breakpoint adds a dotted arm boundary with "p" and "q" labels.
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=style.figsize_page)
    else:
        fig = ax.figure

    values = np.asarray(result.values, dtype=float)
    x = np.arange(1, values.size + 1)
    ax.scatter(x, values, s=style.marker_size, color="black", linewidths=0)
    ax.set_ylim(*style.ylim)
    ax.set_ylabel("Log2 Tumor/Normal ratio")
    ax.set_title(f"Chromosome {result.chromosome}")

    if result.degenerate:
        ax.text(
            (values.size + 1) / 2.0,
            0.0,
            TOO_FEW_GENES_MESSAGE,
            ha="center",
            va="center",
            fontsize=style.axis_label_fontsize,
        )
        return fig, ax

    ax.axhline(0.0, color="grey", lw=2)
    ax.axhline(style.loss_level, color="blue", lw=2)
    ax.axhline(style.gain_level, color="red", lw=2)

    labels = result.arm_label_positions
    if labels is not None:
        at = float(result.breakpoint_index) + 1.0
        ax.axvline(at, linestyle=":", color="black")
        p_x, q_x = labels
        top = style.ylim[1]
        ax.text(p_x + 1.0, top, "p", ha="center", va="top")
        ax.text(q_x + 1.0, top, "q", ha="center", va="top")
    return fig, ax


def plot_genome_track(
    track: GenomeTrack,
    *,
    offset: float = 40.0,
    ax: plt.Axes | None = None,
    style: PlotStyle = DEFAULT_PLOT_STYLE,
) -> tuple[plt.Figure, plt.Axes]:
    """One colored square per smoothed value, in chromosome order."""
    if ax is None:
        fig, ax = plt.subplots(figsize=style.figsize_track)
    else:
        fig = ax.figure

    values = np.asarray(track.values, dtype=float)
    mappable = make_color_map(values, style.cmap_track)
    x = np.arange(1, values.size + 1)
    ax.scatter(
        x,
        np.ones(values.size),
        c=map_colors(values, mappable),
        marker="s",
        s=style.track_marker_size,
        linewidths=0,
    )
    for sep in track.separator_positions(offset):
        ax.axvline(sep, color="lightgrey", lw=1)
    ax.set_xticks(track.tick_positions(offset))
    ax.set_xticklabels(list(track.chromosomes), rotation=90, color="grey")
    ax.set_yticks([])
    fig.colorbar(
        mappable,
        ax=ax,
        shrink=style.colorbar_shrink,
        pad=style.colorbar_pad,
    )
    return fig, ax
