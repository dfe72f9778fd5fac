# chromatin3d - 3D chromatin structures as parts of positioned bins

from .obj import *  # noqa: F401,F403
from .obj import __all__ as _obj_all
from .utils.helper import (MalformedLocusError, auto_genome_coord, bin_to_coordinate,
                           coordinate_to_bin)

__all__ = _obj_all + ['MalformedLocusError', 'auto_genome_coord', 'bin_to_coordinate',
                      'coordinate_to_bin']

__version__ = "0.1.0"
