"""Multi-page PDF export of chromosome scans and heatmaps."""

from __future__ import annotations

import logging
from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

from cnvscan.core.types import GenomeTrack, HeatmapGrid
from cnvscan.plotting.chromosome import plot_chromosome_ratio, plot_genome_track
from cnvscan.plotting.heatmap import plot_heatmap_grid
from cnvscan.plotting.styles import DEFAULT_PLOT_STYLE, PlotStyle, apply_plot_style
from cnvscan.plotting.utils import pdf_path

logger = logging.getLogger(__name__)


def write_chromosome_report(
    track: GenomeTrack,
    out: str | Path,
    *,
    offset: float = 40.0,
    style: PlotStyle = DEFAULT_PLOT_STYLE,
) -> Path:
    """Write chromosome panels (rows x cols per page) then the genome track.

    Returns:
        Path of the written PDF.
    """
    out_path = pdf_path(out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    apply_plot_style(style)
    per_page = style.panel_rows * style.panel_cols
    results = list(track.results)

    with PdfPages(out_path) as pdf:
        for start in range(0, len(results), per_page):
            fig, axes = plt.subplots(
                style.panel_rows,
                style.panel_cols,
                figsize=style.figsize_page,
                squeeze=False,
            )
            chunk = results[start : start + per_page]
            flat = list(axes.ravel())
            for ax, result in zip(flat, chunk):
                plot_chromosome_ratio(result, ax=ax, style=style)
            for ax in flat[len(chunk) :]:
                ax.set_axis_off()
            fig.tight_layout()
            pdf.savefig(fig)
            plt.close(fig)

        fig, _ = plot_genome_track(track, offset=offset, style=style)
        pdf.savefig(fig)
        plt.close(fig)

    logger.info("Wrote chromosome report: %s", out_path)
    return out_path


def write_heatmap_report(
    grid: HeatmapGrid,
    out: str | Path,
    *,
    style: PlotStyle = DEFAULT_PLOT_STYLE,
) -> Path:
    """Write a one-page heatmap PDF."""
    out_path = pdf_path(out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    apply_plot_style(style)
    with PdfPages(out_path) as pdf:
        fig, _ = plot_heatmap_grid(grid, style=style)
        pdf.savefig(fig)
        plt.close(fig)
    logger.info("Wrote heatmap report: %s", out_path)
    return out_path
