"""cnvscan public API."""

from cnvscan._version import __version__
from cnvscan.core.heatmap import build_heatmap_grid
from cnvscan.core.positions import locate_breakpoint, normalize_gene_positions
from cnvscan.core.scan import compute_chromosome_ratio, scan_genome
from cnvscan.core.transform import to_linear


def write_chromosome_report(*args, **kwargs):
    """Lazy wrapper to avoid importing matplotlib at import time."""
    from cnvscan.plotting.report import write_chromosome_report as _write

    return _write(*args, **kwargs)


__all__ = [
    "__version__",
    "to_linear",
    "normalize_gene_positions",
    "compute_chromosome_ratio",
    "locate_breakpoint",
    "scan_genome",
    "build_heatmap_grid",
    "write_chromosome_report",
]
