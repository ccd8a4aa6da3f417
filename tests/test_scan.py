import logging

import numpy as np
import pandas as pd

from cnvscan.core.positions import normalize_gene_positions
from cnvscan.core.scan import compute_chromosome_ratio, scan_genome
from cnvscan.core.types import AUTOSOMES


def test_loss_region_is_detected(loss_dataset):
    matrix, normal, tumor, positions = loss_dataset
    result = compute_chromosome_ratio(matrix, normal, tumor, 5, positions, 1)
    assert not result.degenerate
    assert result.n_genes == 30
    assert result.values.size == 26
    # Windows 0-10 lie entirely within the halved genes, 15+ entirely outside.
    assert np.all(result.values[:11] < -0.5)
    assert np.all(np.abs(result.values[15:]) < 0.05)
    assert result.genes[0] == "G002"
    assert result.positions[0] == 3000.0
    assert result.breakpoint_index is None


def test_breakpoint_is_located(loss_dataset):
    matrix, normal, tumor, positions = loss_dataset
    bps = pd.DataFrame(
        {"chromosome": ["1", "1"], "arm": ["p", "q"], "end": [15_400, 40_000]}
    )
    result = compute_chromosome_ratio(
        matrix, normal, tumor, 5, positions, 1, breakpoints=bps
    )
    # Centre starts are 3000, 4000, ...; 15400 is closest to 15000.
    assert result.breakpoint_index == 12
    p_x, q_x = result.arm_label_positions
    assert p_x == 6.0
    assert q_x == 12.0 + (26 - 12) / 2.0


def test_too_few_genes_gives_placeholder(loss_dataset, caplog):
    caplog.set_level(logging.INFO)
    matrix, normal, tumor, positions = loss_dataset
    result = compute_chromosome_ratio(matrix, normal, tumor, 31, positions, 1)
    assert result.degenerate
    assert np.array_equal(result.values, np.ones(13))
    assert result.n_genes == 30
    assert result.breakpoint_index is None
    assert "too few genes" in caplog.text


def test_window_must_be_smaller_than_gene_count(loss_dataset):
    matrix, normal, tumor, positions = loss_dataset
    result = compute_chromosome_ratio(matrix, normal, tumor, 29, positions, 1)
    assert not result.degenerate
    assert result.values.size == 2
    assert compute_chromosome_ratio(matrix, normal, tumor, 31, positions, 1).degenerate


def test_precomputed_ratio_is_used(loss_dataset):
    matrix, normal, tumor, positions = loss_dataset
    ratio = pd.Series(0.25, index=matrix.index)
    result = compute_chromosome_ratio(
        matrix, normal, tumor, 5, positions, 2, ratio=ratio
    )
    assert np.allclose(result.values, 0.25)


def test_scan_genome_boundaries(random_dataset):
    matrix, normal, tumor, positions = random_dataset
    track = scan_genome(matrix, normal, tumor, 5, positions)
    assert track.chromosomes == AUTOSOMES
    assert track.boundaries.size == 23
    assert track.boundaries[0] == 0
    assert np.all(np.diff(track.boundaries) > 0)
    assert track.boundaries[-1] == track.values.size
    for chrom, result in zip(track.chromosomes, track.results):
        assert result.chromosome == chrom
        assert np.array_equal(track.segment(chrom), result.values)


def test_scan_genome_follows_configured_order(loss_dataset):
    matrix, normal, tumor, positions = loss_dataset
    track = scan_genome(matrix, normal, tumor, 5, positions, chromosomes=[2, 1, 3])
    assert track.chromosomes == ("2", "1", "3")
    sizes = np.diff(track.boundaries)
    assert list(sizes) == [36, 26, 13]
    assert track.results[2].degenerate
    assert np.allclose(track.segment("2"), 0.0)


def test_genome_track_axis_helpers(loss_dataset):
    matrix, normal, tumor, positions = loss_dataset
    track = scan_genome(matrix, normal, tumor, 5, positions, chromosomes=["1", "2"])
    assert np.allclose(track.separator_positions(offset=4), [22.0])
    assert np.allclose(track.tick_positions(offset=0), [13.0, 44.0])


def test_scan_accepts_raw_position_tables(loss_dataset):
    matrix, normal, tumor, positions = loss_dataset
    a = scan_genome(matrix, normal, tumor, 5, positions, chromosomes=["1"])
    b = scan_genome(
        matrix, normal, tumor, 5, normalize_gene_positions(positions), chromosomes=["1"]
    )
    assert np.array_equal(a.values, b.values)


def test_scan_accepts_gene_indexed_chr_prefixed_positions(loss_dataset):
    matrix, normal, tumor, positions = loss_dataset
    prefixed = positions.set_index("gene")
    prefixed["chromosome"] = "chr" + prefixed["chromosome"]
    result = compute_chromosome_ratio(matrix, normal, tumor, 5, prefixed, 1)
    assert result.n_genes == 30
    assert not result.degenerate
