"""Tests for coordinate/bin conversion and locus parsing."""

import math

import numpy as np
import pytest

from chromatin3d import MalformedLocusError, auto_genome_coord, bin_to_coordinate, coordinate_to_bin
from chromatin3d.utils.helper import natural_chr_key, validate_coordinates

# ---------------------------------------------------------------------------
# coordinate_to_bin
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("coordinate,resolution,start", [
    (0, 1, 0),
    (2500, 1000, 0),
    (2999, 1000, 1000),
    (999, 1000, 1000),
    (-1, 1000, 0),
    (-2500, 1000, 0),
    (123456789, 40000, 100000),
    (7, 3, -5),
])
def test_coordinate_to_bin_is_floor_division(coordinate, resolution, start):
    assert coordinate_to_bin(coordinate, resolution, start) == math.floor((coordinate - start) / resolution)


@pytest.mark.parametrize("resolution,start", [(1, 0), (100, 0), (40000, 123), (7, -50)])
def test_coordinate_to_bin_anchors(resolution, start):
    assert coordinate_to_bin(start, resolution, start) == 0
    assert coordinate_to_bin(start + resolution, resolution, start) == 1
    assert coordinate_to_bin(start + resolution - 1, resolution, start) == 0


@pytest.mark.parametrize("resolution", [0, -1000])
def test_coordinate_to_bin_rejects_non_positive_resolution(resolution):
    with pytest.raises(ValueError):
        coordinate_to_bin(100, resolution, 0)


def test_coordinate_to_bin_on_arrays():
    coords = np.array([0, 999, 1000, 2500, -1])
    np.testing.assert_array_equal(coordinate_to_bin(coords, 1000, 0), [0, 0, 1, 2, -1])


def test_bin_to_coordinate_inverts_on_bin_starts():
    for index in range(-3, 10):
        coordinate = bin_to_coordinate(index, 250, 1000)
        assert coordinate_to_bin(coordinate, 250, 1000) == index


# ---------------------------------------------------------------------------
# auto_genome_coord
# ---------------------------------------------------------------------------


def test_auto_genome_coord_region():
    assert auto_genome_coord("chr1:1000-5000") == ("chr1", 1000, 5000)


def test_auto_genome_coord_label_only_is_trimmed():
    assert auto_genome_coord("  chrX \n") == ("chrX", None, None)


def test_auto_genome_coord_list_and_tuple():
    assert auto_genome_coord(["chr1a", 10000, 20000]) == ("chr1a", 10000, 20000)
    assert auto_genome_coord(("chr2", "5", "7")) == ("chr2", 5, 7)


def test_auto_genome_coord_splits_once_on_colon():
    # the label keeps nothing after the first colon; the range must parse
    with pytest.raises(MalformedLocusError):
        auto_genome_coord("chr1:100-200:300")


@pytest.mark.parametrize("locus", [
    "chr1:abc-5000",
    "chr1:1000-",
    "chr1:-",
    "chr1:1000",
    "chr1:1,000-2,000",
    "chr1:1e3-2e3",
    "chr1:1_000-2_000",
    "chr1:+-5",
])
def test_auto_genome_coord_malformed(locus):
    with pytest.raises(MalformedLocusError):
        auto_genome_coord(locus)


@pytest.mark.parametrize("locus", [
    ("chr1", "abc", 2000),
    ("chr1", None, 5),
    ["chr1", 0, "1_000"],
    ("chr1", 1000.5, 2000),
    ("chr1", True, 5),
])
def test_auto_genome_coord_malformed_sequence(locus):
    with pytest.raises(MalformedLocusError):
        auto_genome_coord(locus)


def test_auto_genome_coord_accepts_numpy_integers():
    assert auto_genome_coord(("chr1", np.int64(-5), np.int32(10))) == ("chr1", -5, 10)


def test_malformed_locus_is_a_value_error():
    with pytest.raises(ValueError):
        auto_genome_coord("chr1:x-y")


def test_auto_genome_coord_rejects_other_types():
    with pytest.raises(ValueError):
        auto_genome_coord(12345)
    with pytest.raises(ValueError):
        auto_genome_coord(("chr1", 1))


# ---------------------------------------------------------------------------
# misc helpers
# ---------------------------------------------------------------------------


def test_natural_chr_key():
    chroms = ["chr10", "chrX", "chr1b", "chr2", "chr1", "chr1a"]
    assert sorted(chroms, key=natural_chr_key) == ["chr1", "chr1a", "chr1b", "chr2", "chr10", "chrX"]


def test_validate_coordinates_shape():
    assert validate_coordinates([]).shape == (0, 3)
    with pytest.raises(ValueError):
        validate_coordinates(np.zeros((4, 2)))


def test_validate_coordinates_warns_on_nan():
    with pytest.warns(UserWarning, match="NaN"):
        validate_coordinates([[0.0, np.nan, 1.0]])
