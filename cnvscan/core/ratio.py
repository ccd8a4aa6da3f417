"""Tumor/normal expression ratios over a genes x cells matrix."""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
import pandas as pd

from cnvscan.core.errors import MissingSubjectCellsError
from cnvscan.core.transform import log1p2, to_linear


def resolve_columns(matrix: pd.DataFrame, cols: Sequence[Any]) -> list[str]:
    """Resolve cell identifiers to column labels without reordering them.

    Labels present in ``matrix.columns`` are used as-is; otherwise integer
    entries are read as column positions.
    """
    items = list(cols)
    columns = pd.Index(matrix.columns)
    if all(c in columns for c in items):
        return items
    if all(isinstance(c, (int, np.integer)) and not isinstance(c, bool) for c in items):
        n = len(columns)
        bad = [int(c) for c in items if int(c) < 0 or int(c) >= n]
        if bad:
            raise KeyError(f"Column positions out of range for {n} cells: {bad[:5]}")
        return [columns[int(c)] for c in items]
    missing = [c for c in items if c not in columns]
    raise KeyError(f"Cells not found in expression matrix: {missing[:5]}")


def _subject_series(matrix: pd.DataFrame, subject_labels: Any) -> pd.Series:
    if isinstance(subject_labels, pd.Series):
        return subject_labels.reindex(matrix.columns)
    labels = np.asarray(subject_labels).ravel()
    if labels.size != matrix.shape[1]:
        raise ValueError(
            f"subject_labels length {labels.size} does not match {matrix.shape[1]} cells."
        )
    return pd.Series(labels, index=matrix.columns)


def select_target_columns(
    matrix: pd.DataFrame,
    target: Sequence[Any],
    *,
    subject_labels: Any = None,
    subject: Any = None,
) -> list[str]:
    """Target columns, narrowed to one subject's cells when ``subject`` is set."""
    cols = resolve_columns(matrix, target)
    if subject is None:
        return cols
    if subject_labels is None:
        raise ValueError("subject requires subject_labels.")
    labels = _subject_series(matrix, subject_labels)
    keep = set(labels.index[labels.astype(str) == str(subject)])
    selected = [c for c in cols if c in keep]
    if not selected:
        raise MissingSubjectCellsError(
            f"No target cells belong to subject '{subject}'."
        )
    return selected


def group_mean_linear(matrix: pd.DataFrame, cols: Sequence[str]) -> pd.Series:
    """Per-gene mean of linear CPM over ``cols``; a single column is not averaged."""
    if len(cols) == 0:
        raise ValueError("At least one column is required.")
    linear = to_linear(matrix.loc[:, list(cols)].astype(float))
    if len(cols) == 1:
        return linear.iloc[:, 0]
    return linear.mean(axis=1)


def compute_ratio_vector(
    matrix: pd.DataFrame,
    reference: Sequence[Any],
    target: Sequence[Any],
    *,
    subject_labels: Any = None,
    subject: Any = None,
    min_expr: float = 5.0,
) -> pd.Series:
    """Median-centred log2 tumor/normal ratio per expressed gene.

    Means are taken in linear CPM space, genes with mean ``<= min_expr`` in
    either group are dropped, and the difference of log2(x+1) means is centred
    on its median.

    Returns:
        Series gene -> ratio; empty when no gene passes the filter.
    """
    ref_cols = resolve_columns(matrix, reference)
    tgt_cols = select_target_columns(
        matrix, target, subject_labels=subject_labels, subject=subject
    )
    ref_expr = group_mean_linear(matrix, ref_cols)
    tgt_expr = group_mean_linear(matrix, tgt_cols)

    keep = (ref_expr > float(min_expr)) & (tgt_expr > float(min_expr))
    if not bool(keep.any()):
        return pd.Series(dtype=float, name="ratio")

    ratio = log1p2(tgt_expr[keep]) - log1p2(ref_expr[keep])
    ratio = ratio - float(np.median(ratio.to_numpy()))
    return ratio.astype(float).rename("ratio")
