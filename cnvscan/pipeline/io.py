"""Pipeline input loading and logging helpers."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pandas as pd
import scipy.sparse as sp

from cnvscan.core.positions import normalize_gene_positions


def ensure_dir(path: str | Path) -> None:
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)


def setup_logger(log_path: Path, logger_name: str) -> logging.Logger:
    ensure_dir(log_path.parent)
    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(message)s")
    fh = logging.FileHandler(log_path, mode="w", encoding="utf-8")
    fh.setFormatter(formatter)
    logger.addHandler(fh)
    sh = logging.StreamHandler()
    sh.setFormatter(formatter)
    logger.addHandler(sh)
    return logger


def _require(path: str | Path) -> Path:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Input file '{p}' not found.")
    return p


def read_table(path: str | Path, index_col: int | None = 0) -> pd.DataFrame:
    """Read a delimited table; ``.csv`` is comma separated, anything else tabs."""
    p = _require(path)
    sep = "," if p.suffix.lower() == ".csv" else "\t"
    return pd.read_csv(p, sep=sep, index_col=index_col)


def read_expression_matrix(path: str | Path, layer: str | None = None) -> pd.DataFrame:
    """Load a genes x cells log2(CPM/10+1) matrix.

    Delimited files are read genes x cells. ``.h5ad`` files are cells x genes
    and get transposed; ``layer`` selects an AnnData layer instead of ``X``.
    """
    p = _require(path)
    if p.suffix.lower() != ".h5ad":
        mat = read_table(p, index_col=0)
        mat.index = mat.index.astype(str)
        mat.columns = mat.columns.astype(str)
        return mat.astype(float)

    import anndata as ad

    adata = ad.read_h5ad(p)
    if layer is None:
        x = adata.X
    elif layer in adata.layers:
        x = adata.layers[layer]
    else:
        raise KeyError(f"adata.layers['{layer}'] not found.")
    dense = x.toarray() if sp.issparse(x) else np.asarray(x)
    return pd.DataFrame(
        dense.T.astype(float),
        index=pd.Index(adata.var_names.astype(str)),
        columns=pd.Index(adata.obs_names.astype(str)),
    )


def read_gene_positions(path: str | Path) -> pd.DataFrame:
    return normalize_gene_positions(read_table(path, index_col=None))


def read_breakpoints(path: str | Path) -> pd.DataFrame:
    return read_table(path, index_col=None)


def read_cell_groups(path: str | Path) -> pd.DataFrame:
    """Cell annotation table indexed by cell id (first column)."""
    groups = read_table(path, index_col=0)
    groups.index = groups.index.astype(str)
    return groups


def cells_in_group(groups: pd.DataFrame, column: str, value: str) -> list[str]:
    if column not in groups.columns:
        raise KeyError(f"Cell group column '{column}' not found.")
    cells = groups.index[groups[column].astype(str) == str(value)]
    if len(cells) == 0:
        raise ValueError(f"No cells with {column} == '{value}'.")
    return [str(c) for c in cells]
