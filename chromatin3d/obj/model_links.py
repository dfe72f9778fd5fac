# ChromatinModel Links Module - cylinder transforms between consecutive bins
import numpy as np
import pandas as pd
from scipy.spatial.transform import Rotation

# unit cylinders are built along +Y
CANONICAL_AXIS = np.array([0.0, 1.0, 0.0])
ROTATION_ORDER = "XYZ"
TUBE_COLUMNS = ["x", "y", "z", "rot_x", "rot_y", "rot_z", "qx", "qy", "qz", "qw", "scale"]

_EPS = 1e-12


def _empty_tubes():
    tubes = pd.DataFrame({col: pd.Series(dtype=np.float64) for col in TUBE_COLUMNS})
    tubes.attrs["rotation_order"] = ROTATION_ORDER
    return tubes


def _quaternions_from_y(directions):
    """
    Shortest-arc rotations taking +Y onto each unit direction, as (x, y, z, w).

    cross(Y, d) = (dz, 0, -dx) and dot(Y, d) = dy; rows with d == -Y get a half
    turn around Z.
    """
    quats = np.column_stack([directions[:, 2],
                             np.zeros(len(directions)),
                             -directions[:, 0],
                             1.0 + directions[:, 1]])
    opposite = quats[:, 3] < _EPS
    quats[opposite] = [0.0, 0.0, 1.0, 0.0]
    return quats / np.linalg.norm(quats, axis=1, keepdims=True)


def compute_tubes(positions):
    """
    Compute one cylinder transform per pair of consecutive points.

    A cylinder of length 1 along +Y, moved to ``(x, y, z)``, rotated by the
    Euler angles ``rot_*`` (order in ``attrs["rotation_order"]``) or the
    quaternion ``q*`` and stretched by ``scale`` along Y joins point i and
    point i + 1.

    Parameters:
    -----------
    positions : array-like, shape (N, 3)
        Ordered bin positions of one part.

    Returns:
    --------
    pandas.DataFrame
        N - 1 rows (none for N <= 1) with columns x, y, z (midpoint),
        rot_x, rot_y, rot_z, qx, qy, qz, qw (orientation) and scale (length).
        Zero-length segments get scale 0 and the identity rotation.
    """
    positions = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
    if len(positions) < 2:
        return _empty_tubes()

    starts, ends = positions[:-1], positions[1:]
    midpoints = (starts + ends) / 2.0
    vectors = ends - starts
    lengths = np.linalg.norm(vectors, axis=1)

    directions = np.tile(CANONICAL_AXIS, (len(vectors), 1))
    nonzero = lengths > 0
    directions[nonzero] = vectors[nonzero] / lengths[nonzero, None]

    quats = _quaternions_from_y(directions)
    eulers = Rotation.from_quat(quats).as_euler(ROTATION_ORDER)

    tubes = pd.DataFrame(np.column_stack([midpoints, eulers, quats, lengths]), columns=TUBE_COLUMNS)
    tubes.attrs["rotation_order"] = ROTATION_ORDER
    return tubes


def tube_matrices(tubes, offset=(0.0, 0.0, 0.0), scale=1.0):
    """
    4x4 instance matrices ``T @ U @ R @ S`` for a table from compute_tubes.

    S only stretches along Y, so the cylinder radius is left to the renderer.
    ``offset`` and ``scale`` place the model in the scene, as returned by
    layout_transform: a point ``p`` of the model ends up at
    ``offset + scale * p``.

    Returns:
    --------
    numpy.ndarray, shape (M, 4, 4)
    """
    n = len(tubes)
    matrices = np.tile(np.eye(4), (n, 1, 1))
    if n == 0:
        return matrices

    rotations = Rotation.from_quat(tubes[["qx", "qy", "qz", "qw"]].to_numpy()).as_matrix()
    stretch = np.ones((n, 3))
    stretch[:, 1] = tubes["scale"].to_numpy()
    matrices[:, :3, :3] = scale * rotations * stretch[:, None, :]
    matrices[:, :3, 3] = np.asarray(offset, dtype=np.float64) + scale * tubes[["x", "y", "z"]].to_numpy()
    return matrices


class ModelLinks:
    """Link geometry for all parts of a ChromatinModel"""

    def links(self):
        """
        Cylinder transforms of every part, one table with ``part`` and
        ``label`` columns. Links never join the last bin of one part to the
        first bin of the next.
        """
        frames = []
        for i, part in enumerate(self.parts):
            tubes = compute_tubes(part.bins)
            if len(tubes):
                frames.append(tubes.assign(part=i, label=part.label))
        if not frames:
            return _empty_tubes().assign(part=pd.Series(dtype=int), label=pd.Series(dtype=object))
        result = pd.concat(frames, ignore_index=True)
        result.attrs["rotation_order"] = ROTATION_ORDER
        return result
