"""Rendering API for cnvscan results."""

from cnvscan.plotting.chromosome import plot_chromosome_ratio, plot_genome_track
from cnvscan.plotting.colors import make_color_map, map_colors
from cnvscan.plotting.heatmap import plot_heatmap_grid
from cnvscan.plotting.report import write_chromosome_report, write_heatmap_report
from cnvscan.plotting.styles import (
    DEFAULT_PLOT_STYLE,
    PlotStyle,
    apply_plot_style,
    plot_style_dict,
)
from cnvscan.plotting.utils import pdf_path, sanitize_label

__all__ = [
    "PlotStyle",
    "DEFAULT_PLOT_STYLE",
    "apply_plot_style",
    "plot_style_dict",
    "make_color_map",
    "map_colors",
    "plot_chromosome_ratio",
    "plot_genome_track",
    "plot_heatmap_grid",
    "write_chromosome_report",
    "write_heatmap_report",
    "pdf_path",
    "sanitize_label",
]
