"""
Assets - Fonts and the logo raster, acquired per rendering call

Rasterizers receive an AssetProvider instead of reaching for module-level
resources. Both assets are handed out through context managers so they are
released on every exit path.
"""
import logging
from contextlib import contextmanager
from typing import Dict, Iterator, Sequence, Tuple

import numpy as np
from PIL import Image, ImageFont

from ..config import DEFAULT_FONT
from ..errors import SkylineIOError

logger = logging.getLogger(__name__)

# Fixed palette for the embedded logo (RGBA)
LOGO_PALETTE: Dict[str, Tuple[int, int, int, int]] = {
    ".": (0, 0, 0, 0),            # transparent
    "#": (255, 255, 255, 255),    # solid white, printed
    "+": (48, 54, 61, 255),       # dark window, not printed
    "~": (255, 255, 255, 96),     # faint halo, not printed
}

# Skyline-in-a-ring mark, one character per pixel
LOGO_RASTER = (
    ".........~~~~~~.........",
    "......~~########~~......",
    ".....~############~.....",
    "....#####..#...#####....",
    "...####....#.....####...",
    "..~###...#####....###~..",
    ".~###....#####.....###~.",
    ".~##.....#####......##~.",
    ".###.....#+#+#......###.",
    "~##......#####.......##~",
    "~##..###.#####.......##~",
    "~##..###.#+#+#.......##~",
    "~##..###.#####.###...##~",
    "~##..###.#####.###...##~",
    "~##..###.#+#+#.###...##~",
    ".###.###.#####.###..###.",
    ".~##.###.#####.###..##~.",
    ".~####################~.",
    "..~##################~..",
    "...##################...",
    "....################....",
    ".....~############~.....",
    "......~~########~~......",
    ".........~~~~~~.........",
)


def decode_raster(rows=LOGO_RASTER, palette=LOGO_PALETTE) -> Image.Image:
    """
    Turn a fixed-palette character raster into an RGBA image.

    Raises:
        SkylineIOError: ragged rows or characters outside the palette
    """
    if not rows or len({len(row) for row in rows}) != 1:
        raise SkylineIOError("logo raster rows must be non-empty and equally long")
    try:
        pixels = np.array([[palette[ch] for ch in row] for row in rows], dtype=np.uint8)
    except KeyError as e:
        raise SkylineIOError("logo raster uses a character outside its palette", e) from e
    return Image.fromarray(pixels)


class AssetProvider:
    """
    Hands out the font and logo used on the model's front face.

    Args:
        font_path: Primary TrueType font (file path or a font name Pillow can resolve)
        logo_rows: Fixed-palette raster of the logo
    """

    def __init__(self, font_path: str = DEFAULT_FONT, logo_rows: Sequence[str] = LOGO_RASTER):
        self.font_path = font_path
        self.logo_rows = logo_rows

    def _load_primary_font(self, size: float) -> ImageFont.FreeTypeFont:
        return ImageFont.truetype(self.font_path, size=size)

    def _load_fallback_font(self, size: float):
        return ImageFont.load_default(size=size)

    @contextmanager
    def font(self, size: float) -> Iterator[ImageFont.ImageFont]:
        """Primary font, falling back to Pillow's embedded font"""
        try:
            font = self._load_primary_font(size)
        except OSError as primary_error:
            logger.debug("Primary font %s unavailable (%s), using embedded font", self.font_path, primary_error)
            try:
                font = self._load_fallback_font(size)
            except (OSError, ImportError) as e:
                raise SkylineIOError("failed to load any fonts", e) from e
        yield font

    @contextmanager
    def logo(self) -> Iterator[Image.Image]:
        """RGBA logo image, closed when the block exits"""
        image = decode_raster(self.logo_rows)
        try:
            yield image
        finally:
            image.close()
