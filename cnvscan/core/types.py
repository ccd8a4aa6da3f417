"""Typed configuration and result containers for cnvscan core operations."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

# Human autosomes; other organisms pass their own chromosome list.
AUTOSOMES: tuple[str, ...] = tuple(str(i) for i in range(1, 23))

PLACEHOLDER_LENGTH = 13


@dataclass(frozen=True)
class ScanConfig:
    """Configuration for per-chromosome ratio scans."""

    window: int = 101
    min_expr: float = 5.0
    chromosomes: tuple[str, ...] = AUTOSOMES
    tick_offset: float = 40.0


@dataclass(frozen=True)
class HeatmapConfig:
    """Configuration for the per-cell heatmap grid."""

    window: int = 121
    exp_thresh: float = 0.4
    thresh: float = 1.0
    order_chromosomes: tuple[str, ...] | None = None
    chromosomes: tuple[str, ...] = AUTOSOMES
    linear: bool = False


@dataclass(frozen=True)
class ChromosomeResult:
    """Smoothed tumor/normal ratios for one chromosome.

    - `values`: smoothed ratios, or the constant placeholder when `degenerate`.
    - `genes` / `positions`: centre gene and start coordinate of each window.
    """

    chromosome: str
    values: np.ndarray
    degenerate: bool
    n_genes: int
    window: int
    genes: tuple[str, ...] = ()
    positions: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=float))
    breakpoint_index: int | None = None

    @property
    def arm_label_positions(self) -> tuple[float, float] | None:
        """x positions for the "p" and "q" labels, centred on each arm."""
        if self.breakpoint_index is None:
            return None
        at = float(self.breakpoint_index)
        return at / 2.0, at + (self.values.size - at) / 2.0


@dataclass(frozen=True)
class GenomeTrack:
    """Per-chromosome results concatenated in chromosome order."""

    values: np.ndarray
    boundaries: np.ndarray
    chromosomes: tuple[str, ...]
    results: tuple[ChromosomeResult, ...]

    def segment(self, chromosome: str) -> np.ndarray:
        key = str(chromosome)
        if key not in self.chromosomes:
            raise KeyError(f"Chromosome '{chromosome}' not in genome track.")
        i = self.chromosomes.index(key)
        return self.values[int(self.boundaries[i]) : int(self.boundaries[i + 1])]

    def separator_positions(self, offset: float = 0.0) -> np.ndarray:
        return self.boundaries[1:-1].astype(float) - float(offset)

    def tick_positions(self, offset: float = 0.0) -> np.ndarray:
        b = self.boundaries.astype(float)
        return b[1:] - (b[1:] - b[:-1]) / 2.0 - float(offset)


@dataclass(frozen=True)
class HeatmapGrid:
    """Centred, clipped per-cell ratio grid (genes x cells).

    When too few genes pass filtering, `degenerate` is set and `values` holds
    the clipped constant placeholder for every cell.
    """

    values: np.ndarray
    genes: tuple[str, ...]
    cells: tuple[str, ...]
    chromosomes: tuple[str, ...]
    boundaries: np.ndarray
    clip: float
    degenerate: bool = False

    def tick_positions(self) -> np.ndarray:
        b = self.boundaries.astype(float)
        return b[1:] - (b[1:] - b[:-1]) / 2.0
