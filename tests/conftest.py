"""Shared fixtures for chromatin3d tests."""

import numpy as np
import pandas as pd
import pytest

from chromatin3d import ChromatinModel, Chunk, GenomicCoordinates, Part


def make_part(n, resolution, start=0, label=None, chunk_id=0, offset=0.0):
    bins = np.arange(n * 3, dtype=np.float64).reshape(n, 3) + offset
    return Part(Chunk(chunk_id, bins, bins * 10.0),
                GenomicCoordinates(start, start + n * resolution),
                resolution, label)


@pytest.fixture
def chrx_model():
    """One part: chrX, 10 bins of 1000 bp starting at 0."""
    return ChromatinModel([make_part(10, 1000, label="chrX")], name="chrX_only")


@pytest.fixture
def chr1_model():
    """One part: chr1, 100 bins of 100 bp starting at 0."""
    return ChromatinModel([make_part(100, 100, label="chr1")])


@pytest.fixture
def two_part_model():
    """chr1 with 10 bins and chr2 with 5 bins, both at 100 bp."""
    return ChromatinModel([
        make_part(10, 100, label="chr1", chunk_id=0),
        make_part(5, 100, start=500, label="chr2", chunk_id=1, offset=1000.0),
    ])


@pytest.fixture
def tdg_df():
    """chr1 with a gap after 2000, chr10 and chr2, listed out of order."""
    return pd.DataFrame({
        0: ["chr10", "chr1", "chr1", "chr1", "chr1", "chr1", "chr2", "chr2"],
        1: [0, 2000, 0, 1000, 5000, 6000, 0, 1000],
        2: [9.0, 2.0, 0.0, 1.0, 5.0, 6.0, 0.0, 0.0],
        3: [9.0, 0.0, 0.0, 0.0, 0.0, 0.0, 1.0, 2.0],
        4: [9.0, 0.0, 0.0, 0.0, 0.0, 0.0, 3.0, 3.0],
    })
