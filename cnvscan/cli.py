"""Command-line interface for cnvscan reports."""

from __future__ import annotations

import argparse
from typing import Any, Iterable

from cnvscan.config import load_json_config
from cnvscan.pipeline.report import run_chromosome_report, run_heatmap_report


def _add_input_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=None,
        help="JSON config; flags override its keys",
    )
    parser.add_argument(
        "--expression",
        default=None,
        help="Genes x cells matrix (.csv/.tsv) or .h5ad",
    )
    parser.add_argument(
        "--layer",
        default=None,
        help="AnnData layer to read instead of X",
    )
    parser.add_argument("--positions", default=None, help="Gene position table")
    parser.add_argument(
        "--cell-groups",
        dest="cell_groups",
        default=None,
        help="Cell annotation table",
    )
    parser.add_argument(
        "--group-column",
        dest="group_column",
        default=None,
        help="Group column in the cell table",
    )
    parser.add_argument(
        "--reference",
        default=None,
        help="Group value of reference (normal) cells",
    )
    parser.add_argument(
        "--target",
        default=None,
        help="Group value of target (tumor) cells",
    )
    parser.add_argument("--outdir", default=None, help="Output directory")
    parser.add_argument("--name", default=None, help="Output file stem")
    parser.add_argument(
        "--window",
        type=int,
        default=None,
        help="Odd smoothing window size",
    )


def _merge_config(
    args: argparse.Namespace, section: str, section_keys: Iterable[str]
) -> dict[str, Any]:
    cfg: dict[str, Any] = {}
    if args.config is not None:
        cfg = load_json_config(args.config)
    cfg[section] = dict(cfg.get(section) or {})
    section_keys = tuple(section_keys)
    skip = {"config", "command"} | set(section_keys)
    for key, value in vars(args).items():
        if key in skip or value is None:
            continue
        cfg[key] = value
    for key in section_keys:
        value = getattr(args, key, None)
        if value is not None:
            cfg[section][key] = value
    return cfg


def plot_chromosomes_main(argv: Iterable[str] | None = None) -> int:
    """Write the per-chromosome ratio report.

    Args:
        argv: Command-line arguments (if None, uses sys.argv).

    Returns:
        Exit code (0 for success).
    """
    parser = argparse.ArgumentParser(description="cnvscan chromosome ratio report")
    _add_input_args(parser)
    parser.add_argument(
        "--subject-column",
        dest="subject_column",
        default=None,
        help="Subject column in the cell table",
    )
    parser.add_argument(
        "--subject",
        default=None,
        help="Restrict target cells to this subject",
    )
    parser.add_argument("--breakpoints", default=None, help="Chromosome arm table")
    parser.add_argument(
        "--min-expr",
        dest="min_expr",
        type=float,
        default=None,
        help="Linear CPM expression filter",
    )
    parser.add_argument(
        "--tick-offset",
        dest="tick_offset",
        type=float,
        default=None,
        help="Axis tick margin",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    cfg = _merge_config(args, "scan", ("window", "min_expr", "tick_offset"))
    out = run_chromosome_report(cfg)
    print(f"report={out}")
    return 0


def plot_heatmap_main(argv: Iterable[str] | None = None) -> int:
    """Write the per-cell heatmap report.

    Args:
        argv: Command-line arguments (if None, uses sys.argv).

    Returns:
        Exit code (0 for success).
    """
    parser = argparse.ArgumentParser(description="cnvscan per-cell heatmap")
    _add_input_args(parser)
    parser.add_argument(
        "--cells",
        nargs="+",
        default=None,
        help="Group values of cells to display",
    )
    parser.add_argument(
        "--order-chromosomes",
        dest="order_chromosomes",
        nargs="+",
        default=None,
        help="Cluster cells on these chromosomes",
    )
    parser.add_argument(
        "--exp-thresh",
        dest="exp_thresh",
        type=float,
        default=None,
        help="Mean expression filter",
    )
    parser.add_argument(
        "--thresh",
        type=float,
        default=None,
        help="Display clip threshold",
    )
    parser.add_argument(
        "--linear",
        action="store_true",
        default=None,
        help="Difference in linear CPM space",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    cfg = _merge_config(
        args, "heatmap", ("window", "order_chromosomes", "exp_thresh", "thresh", "linear")
    )
    out = run_heatmap_report(cfg)
    print(f"report={out}")
    return 0


def main(argv: Iterable[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (if None, uses sys.argv).

    Returns:
        Exit code.
    """
    parser = argparse.ArgumentParser(description="cnvscan CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("plot-chromosomes", help="Per-chromosome tumor/normal ratio report")
    sub.add_parser("plot-heatmap", help="Per-cell genome-wide heatmap")

    args, remainder = parser.parse_known_args(list(argv) if argv is not None else None)
    if args.command == "plot-chromosomes":
        return plot_chromosomes_main(remainder)
    if args.command == "plot-heatmap":
        return plot_heatmap_main(remainder)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
