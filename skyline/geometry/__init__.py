"""
Geometry for skyline models

Cube emission, the triangle mesh container, and the text/logo rasterizers
that extrude labels from the model's front face.
"""
from .assets import AssetProvider
from .cube import create_cube, create_cubes
from .image import generate_image_geometry, render_image
from .mesh import Mesh
from .text import create_3d_text, render_text

__all__ = [
    "AssetProvider",
    "create_cube", "create_cubes",
    "generate_image_geometry", "render_image",
    "Mesh",
    "create_3d_text", "render_text",
]
