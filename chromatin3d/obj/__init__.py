# chromatin3d obj module
# Modular ChromatinModel implementation

from .chromatin_types import (DERIVED_CHUNK_ID, Chunk, GenomicCoordinates, Part, Scene,
                              SceneConfig, add_chunk_to_scene, add_model_to_scene)
from .ChromatinModel import (ChromatinModel, compute_links, find_part_at_range,
                             find_part_by_label, resolve_locus, slice_bins_within_part,
                             slice_model_by_bin_range)
from .model_core import DEFAULT_RESOLUTION, ModelCore
from .model_query import ModelQuery
from .model_links import ModelLinks, compute_tubes, tube_matrices
from .model_visualization import (Mark, ModelVisualization, Primitive, VisualAttributes,
                                  decide_geometry, decide_visual_parameters,
                                  estimate_best_sphere_size, layout_transform, normalize_points,
                                  part_visuals)

__all__ = [
    'ChromatinModel',
    'ModelCore',
    'ModelQuery',
    'ModelLinks',
    'ModelVisualization',
    'Chunk',
    'GenomicCoordinates',
    'Part',
    'Scene',
    'SceneConfig',
    'DERIVED_CHUNK_ID',
    'DEFAULT_RESOLUTION',
    'add_chunk_to_scene',
    'add_model_to_scene',
    'find_part_by_label',
    'find_part_at_range',
    'resolve_locus',
    'slice_model_by_bin_range',
    'slice_bins_within_part',
    'compute_links',
    'compute_tubes',
    'tube_matrices',
    'Mark',
    'Primitive',
    'VisualAttributes',
    'decide_geometry',
    'decide_visual_parameters',
    'estimate_best_sphere_size',
    'layout_transform',
    'normalize_points',
    'part_visuals',
]
