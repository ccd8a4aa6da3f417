"""Report runners: load inputs, run the core, hand results to the PDF sink."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from cnvscan.config import heatmap_config_from_dict, scan_config_from_dict
from cnvscan.core.heatmap import build_heatmap_grid
from cnvscan.core.scan import scan_genome
from cnvscan.pipeline.io import (
    cells_in_group,
    read_breakpoints,
    read_cell_groups,
    read_expression_matrix,
    read_gene_positions,
    setup_logger,
)
from cnvscan.plotting.report import write_chromosome_report, write_heatmap_report
from cnvscan.plotting.styles import plot_style_dict
from cnvscan.plotting.utils import sanitize_label

REQUIRED_KEYS: tuple[str, ...] = ("expression", "positions", "cell_groups", "outdir")


def _require_keys(cfg: dict[str, Any], keys: tuple[str, ...]) -> None:
    missing = [k for k in keys if cfg.get(k) in (None, "")]
    if missing:
        raise KeyError(f"Missing required config keys: {', '.join(missing)}")


def _as_list(value: Any) -> list[str]:
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]


def run_chromosome_report(cfg: dict[str, Any]) -> Path:
    """Scan all configured chromosomes and write the multi-page PDF.

    Config keys: ``expression``, ``positions``, ``cell_groups``, ``outdir``;
    optional ``group_column`` (default ``"group"``), ``reference`` /
    ``target`` group values, ``subject_column`` + ``subject``,
    ``breakpoints``, ``layer``, ``name`` and a ``scan`` section for
    :class:`~cnvscan.core.types.ScanConfig`.
    """
    _require_keys(cfg, REQUIRED_KEYS)
    scan_cfg = scan_config_from_dict(dict(cfg.get("scan") or {}))
    outdir = Path(cfg["outdir"])
    subject = cfg.get("subject")
    name = str(cfg.get("name") or "chromosomes")
    if subject is not None:
        name = f"{name}_{sanitize_label(str(subject))}"
    logger = setup_logger(outdir / "logs" / f"{name}.log", "cnvscan")

    matrix = read_expression_matrix(cfg["expression"], layer=cfg.get("layer"))
    positions = read_gene_positions(cfg["positions"])
    groups = read_cell_groups(cfg["cell_groups"])
    group_col = str(cfg.get("group_column") or "group")
    reference = cells_in_group(groups, group_col, str(cfg.get("reference", "normal")))
    target = cells_in_group(groups, group_col, str(cfg.get("target", "tumor")))
    logger.info(
        "Loaded %d genes x %d cells; %d reference, %d target cells.",
        matrix.shape[0],
        matrix.shape[1],
        len(reference),
        len(target),
    )

    subject_labels = None
    if subject is not None:
        subject_col = str(cfg.get("subject_column") or "subject")
        if subject_col not in groups.columns:
            raise KeyError(f"Subject column '{subject_col}' not found.")
        subject_labels = groups[subject_col]
        logger.info("Restricting target cells to subject '%s'.", subject)

    breakpoints = None
    if cfg.get("breakpoints"):
        breakpoints = read_breakpoints(cfg["breakpoints"])

    track = scan_genome(
        matrix,
        reference,
        target,
        scan_cfg.window,
        positions,
        subject_labels=subject_labels,
        subject=subject,
        breakpoints=breakpoints,
        chromosomes=scan_cfg.chromosomes,
        min_expr=scan_cfg.min_expr,
    )
    degenerate = [r.chromosome for r in track.results if r.degenerate]
    if degenerate:
        logger.warning(
            "Too few genes to infer CNV pattern on chromosomes: %s",
            ", ".join(degenerate),
        )
    logger.info(
        "Genome track: %d values over %d chromosomes.",
        track.values.size,
        len(track.chromosomes),
    )
    logger.info("Plot style: %s", plot_style_dict())
    return write_chromosome_report(track, outdir / name, offset=scan_cfg.tick_offset)


def run_heatmap_report(cfg: dict[str, Any]) -> Path:
    """Build the per-cell grid and write the heatmap PDF.

    Config keys as for :func:`run_chromosome_report`; ``cells`` names one or
    more group values to display (default: the ``target`` group) and a
    ``heatmap`` section configures :class:`~cnvscan.core.types.HeatmapConfig`.
    """
    _require_keys(cfg, REQUIRED_KEYS)
    hm_cfg = heatmap_config_from_dict(dict(cfg.get("heatmap") or {}))
    outdir = Path(cfg["outdir"])
    name = str(cfg.get("name") or "heatmap")
    logger = setup_logger(outdir / "logs" / f"{name}.log", "cnvscan")

    matrix = read_expression_matrix(cfg["expression"], layer=cfg.get("layer"))
    positions = read_gene_positions(cfg["positions"])
    groups = read_cell_groups(cfg["cell_groups"])
    group_col = str(cfg.get("group_column") or "group")
    reference = cells_in_group(groups, group_col, str(cfg.get("reference", "normal")))
    cells: list[str] = []
    for value in _as_list(cfg.get("cells") or cfg.get("target", "tumor")):
        cells.extend(cells_in_group(groups, group_col, value))
    logger.info("Heatmap over %d cells, %d reference cells.", len(cells), len(reference))

    grid = build_heatmap_grid(
        matrix,
        reference,
        cells,
        positions,
        hm_cfg.window,
        order_chromosomes=hm_cfg.order_chromosomes,
        exp_thresh=hm_cfg.exp_thresh,
        thresh=hm_cfg.thresh,
        chromosomes=hm_cfg.chromosomes,
        linear=hm_cfg.linear,
    )
    if grid.degenerate:
        logger.warning(
            "Too few genes to infer CNV pattern for window %d; writing placeholder heatmap.",
            hm_cfg.window,
        )
    logger.info("Plot style: %s", plot_style_dict())
    return write_heatmap_report(grid, outdir / name)
