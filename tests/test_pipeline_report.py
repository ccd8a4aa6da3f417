from __future__ import annotations

import json
import logging

import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest

from cnvscan import cli
from cnvscan.core.errors import MissingSubjectCellsError
from cnvscan.pipeline.report import run_chromosome_report, run_heatmap_report


@pytest.fixture
def report_inputs(tmp_path, loss_dataset):
    matrix, normal, tumor, positions = loss_dataset
    matrix.to_csv(tmp_path / "expression.tsv", sep="\t")
    positions.to_csv(tmp_path / "positions.tsv", sep="\t", index=False)
    groups = pd.DataFrame(
        {
            "group": ["normal"] * len(normal) + ["tumor"] * len(tumor),
            "patient": ["p1"] * len(normal) + ["p1", "p1", "p2", "p2"],
        },
        index=pd.Index(normal + tumor, name="cell"),
    )
    groups.to_csv(tmp_path / "groups.tsv", sep="\t")
    pd.DataFrame(
        {
            "chromosome": ["1", "1", "2", "2"],
            "arm": ["p", "q", "p", "q"],
            "end": [15_000, 31_000, 9_000, 21_000],
        }
    ).to_csv(tmp_path / "arms.tsv", sep="\t", index=False)
    return {
        "expression": str(tmp_path / "expression.tsv"),
        "positions": str(tmp_path / "positions.tsv"),
        "cell_groups": str(tmp_path / "groups.tsv"),
        "breakpoints": str(tmp_path / "arms.tsv"),
        "outdir": str(tmp_path / "out"),
    }


def test_chromosome_report(report_inputs, tmp_path, caplog):
    caplog.set_level(logging.INFO)
    cfg = dict(report_inputs, scan={"window": 5})
    out = run_chromosome_report(cfg)
    assert out == tmp_path / "out" / "chromosomes.pdf"
    assert out.read_bytes()[:4] == b"%PDF"
    log_text = (tmp_path / "out" / "logs" / "chromosomes.log").read_text(encoding="utf-8")
    assert "Genome track" in log_text
    assert "Too few genes" in log_text


def test_chromosome_report_for_one_subject(report_inputs, tmp_path):
    cfg = dict(report_inputs, subject="p2", subject_column="patient", scan={"window": 5})
    out = run_chromosome_report(cfg)
    assert out.name == "chromosomes_p2.pdf"
    assert out.exists()


def test_chromosome_report_unknown_subject(report_inputs):
    cfg = dict(report_inputs, subject="p7", subject_column="patient", scan={"window": 5})
    with pytest.raises(MissingSubjectCellsError):
        run_chromosome_report(cfg)


def test_missing_required_keys():
    with pytest.raises(KeyError, match="expression"):
        run_chromosome_report({"positions": "x", "cell_groups": "y", "outdir": "z"})


def test_heatmap_report(report_inputs, tmp_path):
    cfg = dict(report_inputs, heatmap={"window": 5, "order_chromosomes": [1]})
    out = run_heatmap_report(cfg)
    assert out == tmp_path / "out" / "heatmap.pdf"
    assert out.read_bytes()[:4] == b"%PDF"


def test_heatmap_report_with_too_few_genes(report_inputs, tmp_path):
    cfg = dict(report_inputs, name="sparse", heatmap={"window": 10001})
    out = run_heatmap_report(cfg)
    assert out.read_bytes()[:4] == b"%PDF"
    log_text = (tmp_path / "out" / "logs" / "sparse.log").read_text(encoding="utf-8")
    assert "Too few genes" in log_text


def test_cli_config_with_flag_override(report_inputs, tmp_path, capsys):
    cfg_path = tmp_path / "cfg.json"
    cfg_path.write_text(
        json.dumps(dict(report_inputs, scan={"window": 101})), encoding="utf-8"
    )
    rc = cli.main(
        ["plot-chromosomes", "--config", str(cfg_path), "--window", "5", "--name", "cli"]
    )
    assert rc == 0
    assert "cli.pdf" in capsys.readouterr().out
    assert (tmp_path / "out" / "cli.pdf").exists()


def test_cli_heatmap_flags_only(report_inputs, tmp_path):
    rc = cli.main(
        [
            "plot-heatmap",
            "--expression",
            report_inputs["expression"],
            "--positions",
            report_inputs["positions"],
            "--cell-groups",
            report_inputs["cell_groups"],
            "--outdir",
            report_inputs["outdir"],
            "--window",
            "5",
            "--cells",
            "tumor",
            "normal",
            "--thresh",
            "0.5",
        ]
    )
    assert rc == 0
    assert (tmp_path / "out" / "heatmap.pdf").exists()
