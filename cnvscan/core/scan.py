"""Per-chromosome ratio scans and their genome-wide concatenation."""

from __future__ import annotations

import logging
from typing import Any, Sequence

import numpy as np
import pandas as pd

from cnvscan.core.positions import (
    aligned_positions,
    arm_boundary,
    as_position_table,
    locate_breakpoint,
    normalize_chromosome,
    order_by_position,
)
from cnvscan.core.ratio import compute_ratio_vector
from cnvscan.core.types import AUTOSOMES, ChromosomeResult, GenomeTrack
from cnvscan.smoothing import smooth_or_placeholder

logger = logging.getLogger(__name__)


def compute_chromosome_ratio(
    matrix: pd.DataFrame,
    reference: Sequence[Any],
    target: Sequence[Any],
    window: int,
    positions: pd.DataFrame,
    chromosome: Any,
    *,
    subject_labels: Any = None,
    subject: Any = None,
    breakpoints: pd.DataFrame | None = None,
    ratio: pd.Series | None = None,
    min_expr: float = 5.0,
) -> ChromosomeResult:
    """Smoothed, position-ordered tumor/normal ratios for one chromosome.

    ``ratio`` may carry a precomputed ratio vector so genome-wide loops do not
    recompute group means per chromosome. Chromosomes with no more genes than
    ``window`` yield the degenerate placeholder instead of raising.
    """
    chrom = normalize_chromosome(chromosome)
    positions = as_position_table(positions)
    if ratio is None:
        ratio = compute_ratio_vector(
            matrix,
            reference,
            target,
            subject_labels=subject_labels,
            subject=subject,
            min_expr=min_expr,
        )
    ordered = order_by_position(ratio, positions, chrom)
    values, degenerate = smooth_or_placeholder(ordered.to_numpy(), window)
    n_genes = int(ordered.size)
    if degenerate:
        logger.info(
            "Chromosome %s: %d genes <= window %d; too few genes to infer CNV pattern.",
            chrom,
            n_genes,
            int(window),
        )
        return ChromosomeResult(
            chromosome=chrom,
            values=values,
            degenerate=True,
            n_genes=n_genes,
            window=int(window),
        )

    k = int(window) // 2
    genes = tuple(str(g) for g in ordered.index[k : n_genes - k])
    starts = positions.loc[list(ordered.index), "start"].to_numpy(dtype=float)
    centre_pos = aligned_positions(starts, window)

    bp_index = None
    if breakpoints is not None:
        target_coord = arm_boundary(breakpoints, chrom)
        if target_coord is not None:
            bp_index = locate_breakpoint(centre_pos, target_coord)

    return ChromosomeResult(
        chromosome=chrom,
        values=values,
        degenerate=False,
        n_genes=n_genes,
        window=int(window),
        genes=genes,
        positions=centre_pos,
        breakpoint_index=bp_index,
    )


def scan_genome(
    matrix: pd.DataFrame,
    reference: Sequence[Any],
    target: Sequence[Any],
    window: int,
    positions: pd.DataFrame,
    *,
    subject_labels: Any = None,
    subject: Any = None,
    breakpoints: pd.DataFrame | None = None,
    chromosomes: Sequence[Any] = AUTOSOMES,
    min_expr: float = 5.0,
) -> GenomeTrack:
    """Run :func:`compute_chromosome_ratio` per chromosome and concatenate.

    Concatenation follows ``chromosomes`` order. ``boundaries`` starts at 0 and
    gains the cumulative length after each chromosome.
    """
    chroms = tuple(normalize_chromosome(c) for c in chromosomes)
    if not chroms:
        raise ValueError("chromosomes must be non-empty.")
    positions = as_position_table(positions)
    ratio = compute_ratio_vector(
        matrix,
        reference,
        target,
        subject_labels=subject_labels,
        subject=subject,
        min_expr=min_expr,
    )
    logger.info("Ratio vector: %d expressed genes.", int(ratio.size))

    results: list[ChromosomeResult] = []
    boundaries = [0]
    for chrom in chroms:
        res = compute_chromosome_ratio(
            matrix,
            reference,
            target,
            window,
            positions,
            chrom,
            breakpoints=breakpoints,
            ratio=ratio,
            min_expr=min_expr,
        )
        results.append(res)
        boundaries.append(boundaries[-1] + int(res.values.size))

    values = np.concatenate([r.values for r in results]).astype(float)
    return GenomeTrack(
        values=values,
        boundaries=np.asarray(boundaries, dtype=int),
        chromosomes=chroms,
        results=tuple(results),
    )
