# ChromatinModel - one 3D structure as an ordered list of parts
# Main class that inherits from all modules

from .model_core import ModelCore
from .model_query import ModelQuery
from .model_links import ModelLinks, compute_tubes
from .model_visualization import ModelVisualization


class ChromatinModel(ModelCore, ModelQuery, ModelLinks, ModelVisualization):
    """
    ChromatinModel: one 3D chromatin structure (e.g. one cell or one
    conformation) made of parts, each a contiguous run of bins of one
    chromosome.

    The class is modularly designed with functionality split across:
    - Core: construction from points or 3dg tables, part lookup
    - Query: locus resolution and slicing by absolute bin range
    - Links: cylinder transforms between consecutive bins of a part
    - Visualization: per-bin colors and sizes, sphere and tube radii

    Parts are never assumed to be adjacent to each other: no query or link
    computation joins bins of two different parts.
    """

    def __init__(self, parts=None, name=None):
        """
        Parameters:
        -----------
        parts : list of Part, optional
            Parts in model order.
        name : str, optional
            Name of the structure.
        """
        ModelCore.__init__(self, parts, name)


# Functional interface over ChromatinModel and Part

def find_part_by_label(model, label):
    """First part labelled ``label`` or None"""
    return model.find_part_by_label(label)


def find_part_at_range(model, label, start, end):
    """Derived part with the bins of ``label`` in genomic [start, end) or None"""
    return model.find_part_at_range(label, start, end)


def resolve_locus(model, genome_coord):
    """Part for "chr1", "chr1:10000-20000" or ("chr1", 10000, 20000), or None"""
    return model.resolve_locus(genome_coord)


def slice_model_by_bin_range(model, start, end):
    """New model with absolute bins [start, end), part boundaries kept"""
    return model.slice_by_bin_range(start, end)


def slice_bins_within_part(part, start, end):
    """New part with bins [start, end) of ``part``, bounds clamped to [0, len - 1]"""
    return part.slice_bins(start, end)


def compute_links(positions):
    """Cylinder transforms joining consecutive points"""
    return compute_tubes(positions)
