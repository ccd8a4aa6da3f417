from __future__ import annotations

import anndata as ad
import numpy as np
import pandas as pd
import pytest
import scipy.sparse as sp

from cnvscan.pipeline.io import (
    cells_in_group,
    read_cell_groups,
    read_expression_matrix,
    read_gene_positions,
    setup_logger,
)


def test_read_delimited_matrix(tmp_path):
    df = pd.DataFrame({"c1": [1.0, 2.0], "c2": [3.0, 4.0]}, index=["g1", "g2"])
    df.to_csv(tmp_path / "m.csv")
    df.to_csv(tmp_path / "m.tsv", sep="\t")
    for name in ["m.csv", "m.tsv"]:
        mat = read_expression_matrix(tmp_path / name)
        assert list(mat.index) == ["g1", "g2"]
        assert list(mat.columns) == ["c1", "c2"]
        assert mat.loc["g2", "c1"] == 2.0


def test_read_h5ad_is_transposed(tmp_path):
    x = np.array([[1.0, 0.0, 2.0], [0.0, 3.0, 0.0]])
    adata = ad.AnnData(
        X=sp.csr_matrix(x),
        obs=pd.DataFrame(index=["cellA", "cellB"]),
        var=pd.DataFrame(index=["g1", "g2", "g3"]),
    )
    adata.layers["dense"] = x * 2.0
    path = tmp_path / "m.h5ad"
    adata.write_h5ad(path)

    mat = read_expression_matrix(path)
    assert mat.shape == (3, 2)
    assert list(mat.columns) == ["cellA", "cellB"]
    assert mat.loc["g2", "cellB"] == 3.0
    assert read_expression_matrix(path, layer="dense").loc["g3", "cellA"] == 4.0
    with pytest.raises(KeyError):
        read_expression_matrix(path, layer="missing")


def test_missing_input_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_expression_matrix(tmp_path / "none.tsv")


def test_read_gene_positions_normalizes(tmp_path):
    pd.DataFrame(
        {
            "ensembl_gene_id": ["E1", "E2"],
            "chromosome_name": [1, "X"],
            "start_position": [10, 20],
            "end_position": [15, 25],
        }
    ).to_csv(tmp_path / "pos.tsv", sep="\t", index=False)
    pos = read_gene_positions(tmp_path / "pos.tsv")
    assert list(pos.index) == ["E1", "E2"]
    assert list(pos["chromosome"]) == ["1", "X"]


def test_cell_groups(tmp_path):
    pd.DataFrame(
        {"group": ["normal", "tumor", "tumor"], "patient": ["p1", "p1", "p2"]},
        index=pd.Index(["a", "b", "c"], name="cell"),
    ).to_csv(tmp_path / "groups.tsv", sep="\t")
    groups = read_cell_groups(tmp_path / "groups.tsv")
    assert cells_in_group(groups, "group", "tumor") == ["b", "c"]
    with pytest.raises(ValueError, match="No cells"):
        cells_in_group(groups, "group", "stroma")
    with pytest.raises(KeyError):
        cells_in_group(groups, "celltype", "tumor")


def test_setup_logger_writes_file(tmp_path):
    log_path = tmp_path / "logs" / "run.log"
    logger = setup_logger(log_path, "cnvscan.test")
    logger.info("hello")
    for handler in logger.handlers:
        handler.flush()
    assert "hello" in log_path.read_text(encoding="utf-8")
    assert len(logger.handlers) == 2
