from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from cnvscan.core.transform import to_log_cpm


@pytest.fixture
def loss_dataset():
    """70 genes: 30 on chromosome 1 (genes 0-14 halved in tumor), 40 neutral on 2."""
    n1, n2 = 30, 40
    genes = [f"G{i:03d}" for i in range(n1 + n2)]
    normal = [f"N{i}" for i in range(4)]
    tumor = [f"T{i}" for i in range(4)]

    linear = np.full((n1 + n2, len(normal) + len(tumor)), 100.0)
    linear[:15, len(normal) :] = 50.0
    matrix = pd.DataFrame(to_log_cpm(linear), index=genes, columns=normal + tumor)

    starts = [1000 * (i + 1) for i in range(n1)] + [500 * (i + 1) for i in range(n2)]
    positions = pd.DataFrame(
        {
            "gene": genes,
            "chromosome": ["1"] * n1 + ["2"] * n2,
            "start": starts,
            "end": [s + 400 for s in starts],
        }
    ).sample(frac=1.0, random_state=0)
    return matrix, normal, tumor, positions


@pytest.fixture
def random_dataset():
    rng = np.random.default_rng(7)
    n_genes, n_cells = 400, 24
    genes = [f"g{i}" for i in range(n_genes)]
    cells = [f"c{i}" for i in range(n_cells)]
    linear = rng.uniform(0.0, 300.0, size=(n_genes, n_cells))
    matrix = pd.DataFrame(to_log_cpm(linear), index=genes, columns=cells)
    chroms = rng.integers(1, 23, size=n_genes)
    positions = pd.DataFrame(
        {
            "hgnc_symbol": genes,
            "chromosome_name": chroms,
            "start_position": rng.integers(1, 10_000_000, size=n_genes),
            "end_position": rng.integers(10_000_000, 20_000_000, size=n_genes),
        }
    )
    return matrix, cells[:8], cells[8:], positions
