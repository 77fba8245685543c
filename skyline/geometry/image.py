"""
Image Rasterizer - The logo extruded from the front face
"""
import logging

import numpy as np
from PIL import Image

from ..errors import GeometryError
from .assets import AssetProvider
from .face import ACTIVE_THRESHOLD, VOXEL_DEPTH, face_resolution, face_voxels
from .mesh import Mesh

logger = logging.getLogger(__name__)

LOGO_SCALE = 3.5  # face pixels per logo pixel
LOGO_LEFT_OFFSET = 0.03  # fraction of face width
LOGO_TOP_OFFSET = 0.15  # fraction of face height


def active_pixels(image: Image.Image) -> np.ndarray:
    """
    Logo pixels that get printed, as (x, y) rows.

    A pixel is printed when both its alpha and red channels exceed half of
    255; there is no anti-aliasing. Rows are ordered x ascending, then y
    descending.
    """
    rgba = np.asarray(image.convert("RGBA"))
    active = (rgba[..., 3] > ACTIVE_THRESHOLD) & (rgba[..., 0] > ACTIVE_THRESHOLD)
    height = active.shape[0]
    xs, flipped = np.nonzero(active.T[:, ::-1])
    return np.column_stack([xs, height - 1 - flipped])


def render_image(
    image: Image.Image,
    scale: float,
    depth: float,
    left_offset: float,
    top_offset: float,
    face_width: float,
    face_height: float,
) -> Mesh:
    """
    Transfer image pixels onto the face as voxels.

    Args:
        image: Source raster (any mode, read as RGBA)
        scale: Face pixels per source pixel; also the voxel edge in face pixels
        depth: Voxel thickness out of the face (mm)
        left_offset: Fraction of face width before the image starts
        top_offset: Fraction of face height above the image
        face_width: Physical face width (mm)
        face_height: Physical face height (mm)
    """
    if scale <= 0:
        raise GeometryError(f"image scale must be positive, got {scale}")
    width_res, height_res = face_resolution(face_width, face_height)

    pixels = active_pixels(image).astype(np.float64)
    face_pixels = np.column_stack([
        left_offset * width_res + pixels[:, 0] * scale,
        top_offset * height_res + pixels[:, 1] * scale,
    ])
    logger.debug("Image lit %d of %d pixels", len(pixels), image.width * image.height)
    return Mesh.from_arrays(*face_voxels(face_pixels, scale, depth, face_width, face_height))


def generate_image_geometry(face_width: float, face_height: float, assets: AssetProvider) -> Mesh:
    """Logo mesh in the upper-left corner of the face"""
    with assets.logo() as logo:
        return render_image(
            logo,
            LOGO_SCALE,
            VOXEL_DEPTH,
            LOGO_LEFT_OFFSET,
            LOGO_TOP_OFFSET,
            face_width,
            face_height,
        )
