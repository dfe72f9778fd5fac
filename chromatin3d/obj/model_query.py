# ChromatinModel Query Module - locus resolution and bin range slicing
from functools import reduce

from ..utils.helper import auto_genome_coord


class ModelQuery:
    """Range queries on a ChromatinModel. Every query returns fresh copies and leaves the model untouched."""

    def resolve_locus(self, genome_coord):
        """
        Get the bins of a locus.

        Parameters:
        -----------
        genome_coord : str, list, or tuple
            "chr1" for a whole part, "chr1:10000-20000" or
            ["chr1", 10000, 20000] for a genomic range of it.

        Returns:
        --------
        Part or None
            The part (chromosome only) or a derived part holding the bins of
            the range; None when no part carries the label.

        Raises:
        -------
        MalformedLocusError
            If start or end is not an integer.
        """
        chrom, start, end = auto_genome_coord(genome_coord)
        if start is None:
            part = self.find_part_by_label(chrom)
            return None if part is None else part.copy()
        return self.find_part_at_range(chrom, start, end)

    def slice_by_bin_range(self, start, end):
        """
        Select bins [start, end) of the model, numbering bins across all parts
        in part order.

        Part boundaries are kept: the result has one (possibly empty) part per
        part of this model and bins of different parts are never merged.
        """
        def step(state, part):
            offset, parts = state
            n = len(part)
            local_start = min(max(start - offset, 0), n)
            local_end = min(max(end - offset, local_start), n)
            return offset + n, parts + [part.take_bins(local_start, local_end)]

        _, parts = reduce(step, self.parts, (0, []))
        return type(self)(parts, name=self.name)
