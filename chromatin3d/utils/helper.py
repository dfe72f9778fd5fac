# small helpers shared by the model and the query code

import numbers
import re
import warnings

import numpy as np

# plain base-10 integers, no separators or exponents
_POSITION_RE = re.compile(r"[+-]?[0-9]+")


class MalformedLocusError(ValueError):
    """Raised when a locus string can't be split into label, start and end."""


def coordinate_to_bin(coordinate, resolution, part_start):
    """
    Convert a genomic coordinate into a bin index of a part.

    Parameters:
    -----------
    coordinate : int or numpy.ndarray
        Genomic position in base pairs.
    resolution : int
        Size of one bin in base pairs, must be positive.
    part_start : int
        Genomic position of the first bin of the part.

    Returns:
    --------
    int or numpy.ndarray
        ``floor((coordinate - part_start) / resolution)``

    Examples:
    ---------
    >>> coordinate_to_bin(2500, 1000, 0)
    2
    >>> coordinate_to_bin(-1, 1000, 0)
    -1
    """
    if resolution <= 0:
        raise ValueError(f"resolution must be positive, got {resolution}")
    # floor division keeps negative offsets on the lower bin
    return (coordinate - part_start) // resolution


def bin_to_coordinate(index, resolution, part_start):
    """Genomic start of bin ``index``; inverse of coordinate_to_bin."""
    if resolution <= 0:
        raise ValueError(f"resolution must be positive, got {resolution}")
    return part_start + index * resolution


def _parse_position(text, genome_coord):
    if isinstance(text, numbers.Integral) and not isinstance(text, bool):
        return int(text)
    if isinstance(text, str) and _POSITION_RE.fullmatch(text.strip()):
        return int(text.strip())
    raise MalformedLocusError(
        f'Invalid position "{text}" in locus "{genome_coord}". '
        'Expected "chr1:10000-20000" or "chr1"')


def auto_genome_coord(genome_coord):
    """
    Automatically convert genome coordinate to chrom, start, end format.

    The string form is split once on ``:`` into label and range, then the
    range is split once on ``-`` into start and end. Both positions have to be
    base-10 integers.

    Parameters:
    -----------
    genome_coord : str, list, or tuple
        Genome coordinate in one of the following formats:
        - String with colon/hyphen separator: "chr1:10000-20000"
        - List or tuple: ["chr1a", 10000, 20000]
        - Chromosome name only: "chr1a"

    Returns:
    --------
    tuple
        (chrom, start, end); start and end are None for chromosome-only input.

    Raises:
    -------
    MalformedLocusError
        If the positions can't be parsed.
    ValueError
        If genome_coord is neither a string nor a 3-item list/tuple.

    Examples:
    ---------
    >>> auto_genome_coord("chr1:10000-20000")
    ('chr1', 10000, 20000)
    >>> auto_genome_coord(["chr1a", 10000, 20000])
    ('chr1a', 10000, 20000)
    >>> auto_genome_coord(" chr1a ")
    ('chr1a', None, None)
    """
    if isinstance(genome_coord, str):
        if ":" not in genome_coord:
            return genome_coord.strip(), None, None
        chrom, coords = genome_coord.split(":", 1)
        if "-" not in coords:
            raise MalformedLocusError(
                f'Locus "{genome_coord}" has no "-" between start and end')
        start, end = coords.split("-", 1)
        return chrom.strip(), _parse_position(start, genome_coord), _parse_position(end, genome_coord)
    elif isinstance(genome_coord, (list, tuple)):
        if len(genome_coord) != 3:
            raise ValueError('Genome_coord list/tuple should be (chrom, start, end), e.g. ["chr1a",10000,20000]')
        chrom, start, end = genome_coord
        return chrom, _parse_position(start, genome_coord), _parse_position(end, genome_coord)
    else:
        raise ValueError('Genome_coord should be str or list/tuple. e.g. "chr1a:10000-20000" or ["chr1a",10000,20000] or "chr1a"')


def natural_chr_key(ch: str):
    """Sort key putting chromosomes in natural order.

    Examples:
    ---------
    >>> sorted(['chr10', 'chr1', 'chr2', 'chrX'], key=natural_chr_key)
    ['chr1', 'chr2', 'chr10', 'chrX']
    """
    ch_clean = ch.replace('chr', '')
    # haplotype suffixes ("1a", "1b") sort with their chromosome number
    digits = ch_clean.rstrip('ab')
    if digits.isdigit():
        return (0, int(digits), ch_clean[len(digits):])
    else:
        return (1, ch_clean, '')


def validate_coordinates(coords):
    """Return ``coords`` as an (N, 3) float array, warning on NaN/inf values."""
    coords = np.asarray(coords, dtype=np.float64)
    if coords.size == 0:
        return coords.reshape(0, 3)
    if coords.ndim != 2 or coords.shape[1] != 3:
        raise ValueError("Coordinates must be Nx3 array")

    if np.any(np.isnan(coords)):
        warnings.warn("NaN values found in coordinates")

    if np.any(np.isinf(coords)):
        warnings.warn("Infinite values found in coordinates")

    return coords
