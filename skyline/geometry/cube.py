"""
Cube Emitter - Closed, outward-facing boxes made of 12 triangles

Every voxel in the model (towers, base, text and logo pixels) goes through
here. Faces are emitted in a fixed order (-Z, +Z, -Y, +Y, -X, +X), each as
two triangles wound counter-clockwise when viewed from outside.
"""
from typing import List, Tuple

import numpy as np

from ..errors import GeometryError
from ..models import Triangle

# Quad corners per face as unit offsets, CCW seen from outside
_FACES: List[Tuple[Tuple[float, float, float], List[Tuple[int, int, int]]]] = [
    # -Z (bottom)
    ((0.0, 0.0, -1.0), [(0, 0, 0), (0, 1, 0), (1, 1, 0), (1, 0, 0)]),
    # +Z (top)
    ((0.0, 0.0, 1.0), [(0, 0, 1), (1, 0, 1), (1, 1, 1), (0, 1, 1)]),
    # -Y (front)
    ((0.0, -1.0, 0.0), [(0, 0, 0), (1, 0, 0), (1, 0, 1), (0, 0, 1)]),
    # +Y (back)
    ((0.0, 1.0, 0.0), [(0, 1, 0), (0, 1, 1), (1, 1, 1), (1, 1, 0)]),
    # -X (left)
    ((-1.0, 0.0, 0.0), [(0, 0, 0), (0, 0, 1), (0, 1, 1), (0, 1, 0)]),
    # +X (right)
    ((1.0, 0.0, 0.0), [(1, 0, 0), (1, 1, 0), (1, 1, 1), (1, 0, 1)]),
]

TRIANGLES_PER_CUBE = 12

# (12, 3, 3) unit triangle corners and (12, 3) normals
_UNIT_TRIANGLES = np.array(
    [[quad[a], quad[b], quad[c]] for _, quad in _FACES for a, b, c in ((0, 1, 2), (0, 2, 3))],
    dtype=np.float64,
)
_UNIT_NORMALS = np.array(
    [normal for normal, _ in _FACES for _ in range(2)],
    dtype=np.float64,
)


def create_cubes(origins: np.ndarray, extents: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Emit many boxes at once.

    Args:
        origins: (K, 3) minimum corners (x, y, z)
        extents: (K, 3) or (3,) sizes along x, y, z; all strictly positive

    Returns:
        (normals, vertices) with shapes (12K, 3) and (12K, 3, 3), cube by cube
        in the same order as the input rows
    """
    origins = np.asarray(origins, dtype=np.float64).reshape(-1, 3)
    extents = np.broadcast_to(np.asarray(extents, dtype=np.float64), origins.shape)

    if not np.all(extents > 0):
        raise GeometryError(f"cube extents must be positive, got {extents[~np.all(extents > 0, axis=1)][0].tolist()}")

    count = origins.shape[0]
    vertices = origins[:, None, None, :] + _UNIT_TRIANGLES[None, :, :, :] * extents[:, None, None, :]
    normals = np.tile(_UNIT_NORMALS, (count, 1))
    return normals, vertices.reshape(count * TRIANGLES_PER_CUBE, 3, 3)


def create_cube(x: float, y: float, z: float, width: float, depth: float, height: float) -> List[Triangle]:
    """
    Closed box with its minimum corner at (x, y, z).

    Args:
        x, y, z: Minimum corner
        width: Extent along x
        depth: Extent along y
        height: Extent along z

    Returns:
        Exactly 12 triangles
    """
    if width <= 0 or depth <= 0 or height <= 0:
        raise GeometryError(f"cube extents must be positive, got ({width}, {depth}, {height})")

    normals, vertices = create_cubes(np.array([[x, y, z]]), np.array([width, depth, height]))
    return [
        Triangle(
            normal=tuple(float(c) for c in n),
            v1=tuple(float(c) for c in v[0]),
            v2=tuple(float(c) for c in v[1]),
            v3=tuple(float(c) for c in v[2]),
        )
        for n, v in zip(normals, vertices)
    ]
