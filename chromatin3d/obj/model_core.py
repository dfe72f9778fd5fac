# ChromatinModel Core Module - construction, lookup and basic data management
import copy
import os
import warnings

import numpy as np
import pandas as pd

from ..utils.helper import coordinate_to_bin, natural_chr_key
from .chromatin_types import DERIVED_CHUNK_ID, Chunk, GenomicCoordinates, Part
from .model_visualization import normalize_points

DEFAULT_RESOLUTION = 40000


class ModelCore:
    """Core functionality for ChromatinModel: construction, loading and part lookup"""

    def __init__(self, parts=None, name=None):
        self.parts = list(parts) if parts is not None else []
        self.name = name

    def __repr__(self):
        return f"ChromatinModel(name={self.name!r}, n_parts={len(self.parts)}, n_bins={self.total_bins})"

    def __len__(self):
        return len(self.parts)

    def __iter__(self):
        return iter(self.parts)

    def copy(self):
        return copy.deepcopy(self)

    @property
    def labels(self):
        """Labels of all parts, in part order, duplicates kept"""
        return [part.label for part in self.parts]

    @property
    def total_bins(self):
        return sum(len(part) for part in self.parts)

    def get_info(self):
        print("chromatin3d ChromatinModel")
        print("Name: {}".format(self.name))
        print(f"Parts: {len(self.parts)}")
        print(f"Bins: {self.total_bins}")
        for part in self.parts:
            print(f"  {part.label}:{part.coordinates} @ {part.resolution} ({len(part)} bins)")
        return ""

    # ------------------------------------------------------------------
    # construction

    @classmethod
    def from_points(cls, points, resolution=DEFAULT_RESOLUTION, label=None, start=0,
                    normalize=None, chunk_id=0, name=None):
        """
        Build a single-part model from an ordered point sequence.

        Parameters:
        -----------
        points : array-like, shape (N, 3)
        resolution : int
            Base pairs per bin.
        label : str, optional
            Chromosome name of the part.
        start : int
            Genomic position of the first point.
        normalize : str, optional
            Method passed to normalize_points for the rendering positions;
            raw positions are used unchanged when None.
        """
        raw = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        bins = normalize_points(raw, method=normalize) if normalize else raw
        part = Part(Chunk(chunk_id, bins, raw),
                    GenomicCoordinates(int(start), int(start + len(raw) * resolution)),
                    resolution, label)
        return cls([part], name=name)

    @staticmethod
    def _load_tdg(tdg):
        if isinstance(tdg, pd.DataFrame):
            tdg = tdg.copy()
        elif isinstance(tdg, (str, os.PathLike)):
            if not os.path.exists(tdg):
                raise FileNotFoundError(f"TDG file not found: {tdg}")
            try:
                tdg = pd.read_csv(tdg, sep="\t", header=None, comment="#")
            except pd.errors.EmptyDataError:
                raise ValueError(f"TDG file is empty: {tdg}")
        else:
            raise ValueError("tdg should be a pandas.DataFrame or a path")

        if tdg.shape[1] < 5:
            raise ValueError(f"TDG needs 5 columns (chrom, pos, x, y, z), got {tdg.shape[1]}")
        tdg = tdg.iloc[:, :5].copy()
        tdg.columns = ["chrom", "pos", "x", "y", "z"]
        tdg["chrom"] = tdg["chrom"].astype(str)
        tdg["pos"] = tdg["pos"].astype(int)
        tdg[["x", "y", "z"]] = tdg[["x", "y", "z"]].astype(np.float64)

        tdg["chrom"] = tdg["chrom"].str.replace(r"\(pat\)", "a", regex=True)
        tdg["chrom"] = tdg["chrom"].str.replace(r"\(mat\)", "b", regex=True)
        return tdg

    @classmethod
    def from_tdg(cls, tdg, resolution=DEFAULT_RESOLUTION, normalize="fit", name=None):
        """
        Build a model from a 3dg table (chrom, pos, x, y, z).

        Chromosomes become parts in natural order. A chromosome is split into
        several parts wherever two consecutive positions are not exactly
        ``resolution`` apart, so bins on both sides of a gap are never linked.

        Parameters:
        -----------
        tdg : pandas.DataFrame or str
            Table or path to a tab separated 3dg file.
        resolution : int
            Base pairs per bin.
        normalize : str, optional
            normalize_points method applied to the whole structure for the
            rendering positions; ``raw_bins`` keep the file coordinates.
        name : str, optional
            Model name, defaults to the file name stem.
        """
        if name is None and isinstance(tdg, (str, os.PathLike)):
            name = os.path.basename(str(tdg)).split(".")[0]
        tdg = cls._load_tdg(tdg).reset_index(drop=True)

        raw_all = tdg[["x", "y", "z"]].to_numpy()
        if normalize and len(raw_all):
            bins_all = normalize_points(raw_all, method=normalize)
        else:
            bins_all = raw_all

        parts = []
        for chrom in sorted(tdg["chrom"].unique(), key=natural_chr_key):
            group = tdg[tdg["chrom"] == chrom].sort_values("pos")
            pos_diff = group["pos"].diff().fillna(resolution).to_numpy()
            bounds = [0, *np.where(pos_diff != resolution)[0], len(group)]
            for seg_start, seg_end in zip(bounds[:-1], bounds[1:]):
                segment = group.iloc[seg_start:seg_end]
                if len(segment) == 0:
                    continue
                first = int(segment["pos"].iloc[0])
                rows = segment.index.to_numpy()
                chunk = Chunk(len(parts), bins_all[rows], raw_all[rows])
                parts.append(Part(chunk,
                                  GenomicCoordinates(first, first + len(segment) * resolution),
                                  resolution, chrom))
        return cls(parts, name=name)

    def to_dataframe(self, raw=False):
        """All bins of all parts as one chrom/pos/x/y/z table, with a ``part`` column"""
        frames = [part.to_dataframe(raw=raw).assign(part=i) for i, part in enumerate(self.parts)]
        if not frames:
            return pd.DataFrame(columns=["chrom", "pos", "x", "y", "z", "part"])
        return pd.concat(frames, ignore_index=True)

    # ------------------------------------------------------------------
    # lookup

    def find_part_by_label(self, label):
        """
        First part whose label equals ``label`` (case-sensitive), or None.
        """
        matches = [part for part in self.parts if part.label == label]
        if not matches:
            return None
        if len(matches) > 1:
            warnings.warn(f"{len(matches)} parts are labelled {label!r}, using the first one")
        return matches[0]

    def find_part_at_range(self, label, start, end):
        """
        Bins of the part labelled ``label`` covering genomic ``[start, end)``.

        The returned part is a copy on a derived chunk (id DERIVED_CHUNK_ID).
        Bin bounds are clamped to the data of the part and its coordinates are
        recomputed from them. When several parts carry the label (a chromosome
        split at gaps), only those whose coordinates overlap ``[start, end)``
        are candidates; if none overlaps, every part with the label is. The
        last candidate is used.

        Returns:
        --------
        Part or None
            None when no part has this label.
        """
        matches = [part for part in self.parts if part.label == label]
        if not matches:
            return None
        overlapping = [part for part in matches
                       if part.coordinates.start < end and start < part.coordinates.end]
        candidates = overlapping or matches
        if len(candidates) > 1:
            warnings.warn(f"{len(candidates)} parts labelled {label!r} match "
                          f"[{start}, {end}), using the last one")

        part = candidates[-1]
        n = len(part)
        bin_start = coordinate_to_bin(start, part.resolution, part.coordinates.start)
        bin_end = coordinate_to_bin(end, part.resolution, part.coordinates.start)
        bin_start = min(max(bin_start, 0), n)
        bin_end = min(max(bin_end, bin_start), n)
        return part.take_bins(bin_start, bin_end, chunk_id=DERIVED_CHUNK_ID)
