"""
Text Rasterizer - Username and year labels extruded from the front face

Text is drawn white-on-black into an off-screen raster at the face
resolution; every lit pixel becomes one voxel.
"""
import logging

import numpy as np
from PIL import Image, ImageDraw

from .assets import AssetProvider
from .face import ACTIVE_THRESHOLD, VOXEL_DEPTH, face_resolution, face_voxels
from .mesh import Mesh

logger = logging.getLogger(__name__)

USERNAME_FONT_SIZE = 120.0
USERNAME_JUSTIFICATION = "left"
USERNAME_LEFT_OFFSET = 0.1  # fraction of face width

YEAR_FONT_SIZE = 100.0
YEAR_JUSTIFICATION = "right"
YEAR_LEFT_OFFSET = 0.97

# Pillow anchors: horizontal part from the justification, vertically centred
_ANCHORS = {
    "left": "lm",
    "center": "mm",
    "right": "rm",
}


def rasterize_text(
    text: str,
    justification: str,
    left_offset: float,
    font_size: float,
    face_width: float,
    face_height: float,
    assets: AssetProvider,
) -> np.ndarray:
    """
    Boolean (height, width) mask of lit pixels for the text on the face.

    The text is anchored at (left_offset * width, 0.5 * height); unknown
    justifications behave like "left".
    """
    width_res, height_res = face_resolution(face_width, face_height)
    anchor = _ANCHORS.get(justification, "lm")

    canvas = Image.new("L", (width_res, height_res), 0)
    try:
        draw = ImageDraw.Draw(canvas)
        with assets.font(font_size) as font:
            draw.text(
                (width_res * left_offset, height_res * 0.5),
                text,
                fill=255,
                font=font,
                anchor=anchor,
            )
        return np.asarray(canvas) > ACTIVE_THRESHOLD
    finally:
        canvas.close()


def render_text(
    text: str,
    justification: str,
    left_offset: float,
    font_size: float,
    face_width: float,
    face_height: float,
    assets: AssetProvider,
    depth: float = VOXEL_DEPTH,
) -> Mesh:
    """
    Place text on the face of the skyline.

    Args:
        text: Label to render
        justification: "left", "center" or "right" relative to the anchor
        left_offset: Anchor position as a fraction of the face width
        font_size: Font size in face pixels
        face_width: Physical face width (mm)
        face_height: Physical face height (mm)
        assets: Provides the font
        depth: Voxel thickness out of the face (mm)

    Returns:
        Mesh fragment with 12 triangles per lit pixel
    """
    mask = rasterize_text(text, justification, left_offset, font_size, face_width, face_height, assets)
    # Column-major scan: x outer, y inner
    pixels = np.argwhere(mask.T)
    logger.debug("Text %r lit %d pixels", text, len(pixels))
    return Mesh.from_arrays(*face_voxels(pixels, 1.0, depth, face_width, face_height))


def create_3d_text(username: str, year, face_width: float, face_height: float, assets: AssetProvider) -> Mesh:
    """Username (left) and year (right) labels as one mesh"""
    if not username:
        username = "anonymous"

    mesh = render_text(
        username,
        USERNAME_JUSTIFICATION,
        USERNAME_LEFT_OFFSET,
        USERNAME_FONT_SIZE,
        face_width,
        face_height,
        assets,
    )
    mesh.merge(render_text(
        str(year),
        YEAR_JUSTIFICATION,
        YEAR_LEFT_OFFSET,
        YEAR_FONT_SIZE,
        face_width,
        face_height,
        assets,
    ))
    return mesh
