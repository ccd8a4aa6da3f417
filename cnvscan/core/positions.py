"""Gene position tables, positional ordering and arm-boundary lookup."""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
import pandas as pd

GENE_COLUMNS: tuple[str, ...] = ("gene", "hgnc_symbol", "gene_name", "ensembl_gene_id")
CHROM_COLUMNS: tuple[str, ...] = ("chromosome", "chromosome_name", "chrom", "chr")
START_COLUMNS: tuple[str, ...] = ("start", "start_position")
END_COLUMNS: tuple[str, ...] = ("end", "end_position")


def _pick(columns: pd.Index, candidates: Sequence[str], what: str) -> str:
    lowered = {str(c).lower(): c for c in columns}
    for cand in candidates:
        if cand in lowered:
            return lowered[cand]
    raise KeyError(f"No {what} column found. Tried: {', '.join(candidates)}")


def normalize_chromosome(value: Any) -> str:
    """Canonical chromosome label: ``"chr7"``, ``7`` and ``7.0`` all map to ``"7"``."""
    text = str(value).strip()
    if text.lower().startswith("chr"):
        text = text[3:]
    try:
        num = float(text)
    except ValueError:
        return text
    if num.is_integer():
        return str(int(num))
    return text


def normalize_gene_positions(table: pd.DataFrame) -> pd.DataFrame:
    """Return a gene-indexed table with ``chromosome``, ``start`` and ``end`` columns.

    Accepts biomaRt-style column names. When no gene column exists the index is
    taken as gene ids. Only the first record per gene is kept; rows without a
    start coordinate are dropped.
    """
    df = table.copy()
    try:
        gene_col = _pick(df.columns, GENE_COLUMNS, "gene")
        genes = df[gene_col].astype(str)
    except KeyError:
        genes = pd.Series(df.index.astype(str), index=df.index)
    chrom_col = _pick(df.columns, CHROM_COLUMNS, "chromosome")
    start_col = _pick(df.columns, START_COLUMNS, "start")
    try:
        end_col = _pick(df.columns, END_COLUMNS, "end")
        end = pd.to_numeric(df[end_col], errors="coerce")
    except KeyError:
        end = pd.to_numeric(df[start_col], errors="coerce")

    out = pd.DataFrame(
        {
            "chromosome": df[chrom_col].map(normalize_chromosome).to_numpy(),
            "start": pd.to_numeric(df[start_col], errors="coerce").to_numpy(),
            "end": end.to_numpy(),
        },
        index=pd.Index(genes.to_numpy(), name="gene"),
    )
    out = out[np.isfinite(out["start"].to_numpy(dtype=float))]
    out = out[~out.index.duplicated(keep="first")]
    return out


def order_by_position(
    ratio: pd.Series,
    positions: pd.DataFrame,
    chromosome: Any,
) -> pd.Series:
    """Ratios of genes on ``chromosome``, ordered by ascending start.

    Genes without a position record, or absent from ``ratio``, are dropped.
    """
    chrom = normalize_chromosome(chromosome)
    positions = as_position_table(positions)
    on_chrom = positions[positions["chromosome"] == chrom]
    on_chrom = on_chrom.sort_values("start", kind="mergesort")
    genes = [g for g in on_chrom.index if g in ratio.index]
    return ratio.loc[genes]


def aligned_positions(starts: np.ndarray, window: int) -> np.ndarray:
    """Start coordinates of the centre gene of each smoothing window."""
    arr = np.asarray(starts, dtype=float).ravel()
    k = int(window) // 2
    return arr[k : arr.size - k]


def locate_breakpoint(positions: np.ndarray, target: float) -> int:
    """Index of the position closest to ``target``; the first one wins ties."""
    pos = np.asarray(positions, dtype=float).ravel()
    if pos.size == 0:
        raise ValueError("positions must be non-empty.")
    return int(np.argmin(np.abs(pos - float(target))))


def arm_boundary(breakpoints: pd.DataFrame, chromosome: Any) -> float | None:
    """End coordinate of the p arm of ``chromosome``, or None if unknown.

    With an ``arm`` column the p-arm row is matched by label; otherwise the
    table is read as two rows (p, q) per chromosome in numeric order.
    """
    if breakpoints is None or len(breakpoints) == 0:
        return None
    chrom = normalize_chromosome(chromosome)
    end_col = _pick(breakpoints.columns, ("end", "end_position"), "end")
    cols = {str(c).lower(): c for c in breakpoints.columns}
    if "arm" in cols:
        chrom_col = _pick(breakpoints.columns, CHROM_COLUMNS, "chromosome")
        chroms = breakpoints[chrom_col].map(normalize_chromosome)
        arms = breakpoints[cols["arm"]].astype(str).str.strip().str.lower()
        rows = breakpoints[(chroms == chrom) & (arms == "p")]
        if rows.empty:
            return None
        return float(rows[end_col].iloc[0])
    if not chrom.isdigit():
        return None
    row = 2 * (int(chrom) - 1)
    if row >= len(breakpoints):
        return None
    return float(breakpoints[end_col].iloc[row])


def as_position_table(table: pd.DataFrame) -> pd.DataFrame:
    """Normalise ``table`` unless it already has the canonical layout.

    The canonical layout includes canonical chromosome labels, so a
    gene-indexed table with ``"chr1"`` labels is still normalised.
    """
    if (
        table.index.name == "gene"
        and {"chromosome", "start", "end"}.issubset(table.columns)
        and table.index.is_unique
        and all(
            isinstance(c, str) and c == normalize_chromosome(c)
            for c in table["chromosome"]
        )
    ):
        return table
    return normalize_gene_positions(table)
