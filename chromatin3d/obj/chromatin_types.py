# Chromatin data types - coordinates, chunks, parts and scenes
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from ..utils.helper import bin_to_coordinate, validate_coordinates
from .model_visualization import layout_transform

# id given to chunks created by locus queries; they belong to no scene
DERIVED_CHUNK_ID = -1


@dataclass(frozen=True)
class GenomicCoordinates:
    """Genomic range in base pairs; ``start == end`` is an empty range."""
    start: int
    end: int

    @property
    def length(self):
        return self.end - self.start

    def __str__(self):
        return f"{self.start}-{self.end}"


class Chunk:
    """
    Position arrays backing one Part.

    ``bins`` are the positions used for rendering, ``raw_bins`` the positions
    as they came from the structure file. Both are (N, 3) float arrays of the
    same length, copied on construction.
    """

    def __init__(self, id, bins, raw_bins=None):
        self.id = int(id)
        self.bins = validate_coordinates(np.array(bins, dtype=np.float64))
        if raw_bins is None:
            self.raw_bins = self.bins.copy()
        else:
            self.raw_bins = validate_coordinates(np.array(raw_bins, dtype=np.float64))
        if len(self.bins) != len(self.raw_bins):
            raise ValueError(f"bins and raw_bins differ in length: {len(self.bins)} != {len(self.raw_bins)}")

    def __len__(self):
        return len(self.bins)

    def __repr__(self):
        return f"Chunk(id={self.id}, n_bins={len(self)})"

    def slice(self, start, end, id=None):
        """Copy of bins[start:end] and raw_bins[start:end] as a new chunk."""
        return Chunk(self.id if id is None else id,
                     self.bins[start:end],
                     self.raw_bins[start:end])

    def copy(self):
        return Chunk(self.id, self.bins, self.raw_bins)


class Part:
    """
    A contiguous run of equally spaced bins of one chromosome.

    Parameters:
    -----------
    chunk : Chunk
        Positions of the bins; owned by this part.
    coordinates : GenomicCoordinates
        Genomic range covered by the part.
    resolution : int
        Base pairs per bin, must be positive.
    label : str, optional
        Chromosome or contig name.
    """

    def __init__(self, chunk, coordinates, resolution, label=None):
        if resolution <= 0:
            raise ValueError(f"resolution must be positive, got {resolution}")
        if not isinstance(coordinates, GenomicCoordinates):
            coordinates = GenomicCoordinates(*coordinates)
        self.chunk = chunk
        self.coordinates = coordinates
        self.resolution = int(resolution)
        self.label = label

    def __len__(self):
        return len(self.chunk)

    def __repr__(self):
        return (f"Part(label={self.label!r}, coordinates={self.coordinates}, "
                f"resolution={self.resolution}, n_bins={len(self)})")

    @property
    def bins(self):
        return self.chunk.bins

    @property
    def raw_bins(self):
        return self.chunk.raw_bins

    def positions(self):
        """Genomic start of every bin."""
        return bin_to_coordinate(np.arange(len(self)), self.resolution, self.coordinates.start)

    def take_bins(self, start, end, chunk_id=None):
        """Copy of bins ``[start, end)`` with coordinates on this part's grid.

        Indices must already lie in ``[0, len]``.
        """
        start_pos = bin_to_coordinate(start, self.resolution, self.coordinates.start)
        end_pos = bin_to_coordinate(end, self.resolution, self.coordinates.start)
        return Part(self.chunk.slice(start, end, id=chunk_id),
                    GenomicCoordinates(int(start_pos), int(end_pos)),
                    self.resolution,
                    self.label)

    def slice_bins(self, start, end):
        """
        Window of bins inside this part, never crossing its boundaries.

        Both bounds are clamped independently into ``[0, len - 1]`` and then
        used as ``[start, end)``, so the last bin is never reachable through
        this window.
        """
        n = len(self)

        def clamp(val):
            return max(min(n - 1, val), 0)

        start_index = clamp(start)
        end_index = max(clamp(end), start_index)
        return self.take_bins(start_index, end_index)

    def copy(self):
        return Part(self.chunk.copy(), self.coordinates, self.resolution, self.label)

    def to_dataframe(self, raw=False):
        """Bins as a chrom/pos/x/y/z table, raw file coordinates if ``raw``."""
        xyz = self.raw_bins if raw else self.bins
        return pd.DataFrame({
            "chrom": self.label,
            "pos": self.positions().astype(int),
            "x": xyz[:, 0],
            "y": xyz[:, 1],
            "z": xyz[:, 2],
        })


@dataclass(frozen=True)
class SceneConfig:
    """How models of a scene are placed next to each other: "center" or "grid"."""
    layout: str = "center"

    def __post_init__(self):
        if self.layout not in ("center", "grid"):
            raise ValueError(f'layout should be "center" or "grid", got {self.layout!r}')


@dataclass(frozen=True)
class Scene:
    """Append-only container of chunks and models handed to a renderer."""
    chunks: Tuple[Chunk, ...] = ()
    models: Tuple = ()
    config: SceneConfig = field(default_factory=SceneConfig)

    def add_chunk(self, chunk):
        return Scene(self.chunks + (chunk,), self.models, self.config)

    def add_model(self, model):
        return Scene(self.chunks, self.models + (model,), self.config)

    def with_config(self, config: Optional[SceneConfig] = None, **kwargs):
        return Scene(self.chunks, self.models, config or SceneConfig(**kwargs))

    def placements(self):
        """(offset, scale) of every model under the scene layout."""
        n = len(self.models)
        return [layout_transform(i, n, self.config.layout) for i in range(n)]


def add_chunk_to_scene(scene, chunk):
    """Return a new scene with ``chunk`` appended."""
    return scene.add_chunk(chunk)


def add_model_to_scene(scene, model):
    """Return a new scene with ``model`` appended."""
    return scene.add_model(model)
