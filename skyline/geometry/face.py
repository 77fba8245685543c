"""
Face - Maps pixels of a virtual raster onto the model's front face

The front face is sampled at a fixed horizontal resolution; the vertical
resolution follows the face's aspect ratio. A pixel (px, py) becomes a voxel
protruding from the face (negative y), with z measured downward from the top
edge of the base.
"""
from typing import Tuple

import numpy as np

from ..errors import ValidationError
from .cube import create_cubes

FACE_WIDTH_RESOLUTION = 2000  # pixels across the face
VOXEL_DEPTH = 1.0  # mm protruding from the face
ACTIVE_THRESHOLD = 127  # channel values above half of 255 count as "on"


def face_resolution(face_width: float, face_height: float) -> Tuple[int, int]:
    """Raster size (width, height) in pixels for a face of the given size"""
    if face_width <= 0 or face_height <= 0:
        raise ValidationError(f"face dimensions must be positive, got {face_width} x {face_height}")
    width_res = FACE_WIDTH_RESOLUTION
    height_res = int(width_res * face_height / face_width)
    if height_res < 1:
        raise ValidationError(f"face {face_width} x {face_height} is too flat to rasterize")
    return width_res, height_res


def face_voxels(
    pixels: np.ndarray,
    voxel_size: float,
    depth: float,
    face_width: float,
    face_height: float,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Voxels for a set of face pixels.

    Args:
        pixels: (K, 2) face pixel coordinates (x left to right, y top to bottom)
        voxel_size: Voxel edge in face pixels
        depth: Distance the voxel comes out of the face (mm)
        face_width: Physical face width (mm)
        face_height: Physical face height (mm)

    Returns:
        (normals, vertices) arrays, 12 triangles per pixel in input order
    """
    pixels = np.asarray(pixels, dtype=np.float64).reshape(-1, 2)

    x_resolution = float(FACE_WIDTH_RESOLUTION)
    y_resolution = x_resolution * face_height / face_width

    x = pixels[:, 0] / x_resolution * face_width
    y = pixels[:, 1] / y_resolution * face_height
    size_x = voxel_size / x_resolution * face_width
    size_y = voxel_size / y_resolution * face_height

    origins = np.column_stack([
        x,                              # left to right
        np.full_like(x, -depth),        # negative y comes out of the face
        -size_y - y,                    # top edge of the face is z = 0
    ])
    return create_cubes(origins, np.array([size_x, depth, size_y]))
