"""Per-cell smoothed expression ratios for genome-wide heatmaps."""

from __future__ import annotations

import logging
from typing import Any, Sequence

import numpy as np
import pandas as pd
from scipy.cluster.hierarchy import leaves_list, linkage
from scipy.spatial.distance import pdist

from cnvscan.core.positions import as_position_table, normalize_chromosome
from cnvscan.core.ratio import resolve_columns
from cnvscan.core.transform import to_linear
from cnvscan.core.types import AUTOSOMES, HeatmapGrid
from cnvscan.smoothing import centered_moving_average_columns, degenerate_placeholder

logger = logging.getLogger(__name__)


def cluster_cell_order(ratios: np.ndarray, method: str = "complete") -> np.ndarray:
    """Dendrogram leaf order of cells (rows of ``ratios``) under Euclidean distance."""
    x = np.asarray(ratios, dtype=float)
    if x.ndim != 2:
        raise ValueError(f"ratios must be 2D (cells x genes), got shape {x.shape}.")
    if x.shape[0] < 2:
        return np.arange(x.shape[0])
    z = linkage(pdist(x, metric="euclidean"), method=method)
    return leaves_list(z)


def _sorted_positions(positions: pd.DataFrame, chroms: tuple[str, ...]) -> pd.DataFrame:
    rank = {c: i for i, c in enumerate(chroms)}
    pos = positions[positions["chromosome"].isin(rank)].copy()
    pos["_rank"] = pos["chromosome"].map(rank)
    pos = pos.sort_values(["_rank", "start"], kind="mergesort")
    return pos.drop(columns="_rank")


def build_heatmap_grid(
    matrix: pd.DataFrame,
    reference: Sequence[Any],
    cells: Sequence[Any],
    positions: pd.DataFrame,
    window: int = 121,
    *,
    order_chromosomes: Sequence[Any] | None = None,
    exp_thresh: float = 0.4,
    thresh: float = 1.0,
    chromosomes: Sequence[Any] = AUTOSOMES,
    linear: bool = False,
) -> HeatmapGrid:
    """Smoothed, per-cell centred and clipped ratio-to-reference grid.

    Ratios are differences ``cell - reference mean``. By default they are
    taken on the scale of ``matrix`` as given, which for log2(CPM/10+1)
    input means log-scale differences rather than linear CPM differences.
    ``linear=True`` applies :func:`~cnvscan.core.transform.to_linear` first
    so the differences are ``cellLinear - referenceLinear``. When
    ``order_chromosomes`` is given, cells are reordered by hierarchical
    clustering of their unsmoothed ratios on those chromosomes.

    Fewer positioned genes than ``window`` do not raise: the grid is marked
    ``degenerate`` and holds the clipped constant placeholder per cell.

    Returns:
        HeatmapGrid with genes x cells values in ``[-thresh, thresh]``.
    """
    if not float(thresh) > 0.0:
        raise ValueError("thresh must be positive.")
    chroms = tuple(normalize_chromosome(c) for c in chromosomes)
    positions = as_position_table(positions)
    ref_cols = resolve_columns(matrix, reference)
    cell_cols = resolve_columns(matrix, cells)
    if not ref_cols or not cell_cols:
        raise ValueError("reference and cells must be non-empty.")

    data = matrix.astype(float)
    if linear:
        data = to_linear(data)

    ref = data.loc[:, ref_cols].mean(axis=1)
    ref = ref[ref > float(exp_thresh)]
    gexp = data.loc[ref.index, cell_cols]
    gexp = gexp[gexp.mean(axis=1) > float(exp_thresh)]

    pos = _sorted_positions(positions, chroms)
    genes = [g for g in pos.index if g in gexp.index]
    if len(genes) < int(window):
        logger.warning(
            "Heatmap: %d positioned genes pass exp_thresh=%s; window is %d. "
            "Too few genes to infer CNV pattern.",
            len(genes),
            exp_thresh,
            int(window),
        )
        placeholder = np.tile(degenerate_placeholder()[:, None], (1, len(cell_cols)))
        return HeatmapGrid(
            values=np.clip(placeholder, -float(thresh), float(thresh)),
            genes=(),
            cells=tuple(str(c) for c in cell_cols),
            chromosomes=(),
            boundaries=np.array([0, placeholder.shape[0]]),
            clip=float(thresh),
            degenerate=True,
        )
    rat = gexp.loc[genes].sub(ref.loc[genes], axis=0)
    logger.info("Heatmap: %d genes x %d cells.", len(genes), len(cell_cols))

    smoothed = centered_moving_average_columns(rat.to_numpy(), window)
    cell_order = np.arange(len(cell_cols))
    if order_chromosomes is not None:
        wanted = {normalize_chromosome(c) for c in order_chromosomes}
        on_chrom = pos.loc[genes, "chromosome"].isin(wanted).to_numpy()
        if on_chrom.any():
            cell_order = cluster_cell_order(rat.to_numpy()[on_chrom].T)
        else:
            logger.warning(
                "No heatmap genes on chromosomes %s; keeping input cell order.",
                sorted(wanted),
            )
    smoothed = smoothed[:, cell_order]

    centred = smoothed - smoothed.mean(axis=0, keepdims=True)
    clipped = np.clip(centred, -float(thresh), float(thresh))

    k = int(window) // 2
    gene_chroms = pos.loc[genes, "chromosome"].to_numpy()
    seen = set(gene_chroms)
    present = tuple(c for c in chroms if c in seen)
    boundaries = [0]
    for chrom in present[1:]:
        first = int(np.flatnonzero(gene_chroms == chrom)[0])
        boundaries.append(first - k)
    boundaries.append(clipped.shape[0])
    bounds = np.clip(np.asarray(boundaries, dtype=int), 0, clipped.shape[0])
    bounds = np.maximum.accumulate(bounds)

    return HeatmapGrid(
        values=clipped,
        genes=tuple(str(g) for g in genes[k : len(genes) - k]),
        cells=tuple(str(cell_cols[i]) for i in cell_order),
        chromosomes=present,
        boundaries=bounds,
        clip=float(thresh),
    )
