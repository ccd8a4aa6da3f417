"""Core compute subpackage."""

from cnvscan.core.errors import MissingSubjectCellsError
from cnvscan.core.heatmap import build_heatmap_grid, cluster_cell_order
from cnvscan.core.positions import (
    arm_boundary,
    locate_breakpoint,
    normalize_gene_positions,
    order_by_position,
)
from cnvscan.core.ratio import compute_ratio_vector
from cnvscan.core.scan import compute_chromosome_ratio, scan_genome
from cnvscan.core.transform import to_linear, to_log_cpm
from cnvscan.core.types import (
    AUTOSOMES,
    ChromosomeResult,
    GenomeTrack,
    HeatmapConfig,
    HeatmapGrid,
    ScanConfig,
)

__all__ = [
    "AUTOSOMES",
    "ScanConfig",
    "HeatmapConfig",
    "ChromosomeResult",
    "GenomeTrack",
    "HeatmapGrid",
    "MissingSubjectCellsError",
    "to_linear",
    "to_log_cpm",
    "compute_ratio_vector",
    "normalize_gene_positions",
    "order_by_position",
    "locate_breakpoint",
    "arm_boundary",
    "compute_chromosome_ratio",
    "scan_genome",
    "build_heatmap_grid",
    "cluster_cell_order",
]
