"""
Mesh Assembler - Builds the printable skyline model from contribution grids

One year is a base slab, one tower per contributing day, and the username,
year and logo extruded from the base's front face. A range of years places
each year's model behind the previous one along +y.
"""
import logging
from pathlib import Path
from typing import List, Optional, Union

import numpy as np

from .classifier import classify_level, max_contributions
from .config import DEFAULT_LAYOUT, ModelLayout
from .errors import ValidationError
from .geometry.assets import AssetProvider
from .geometry.cube import create_cubes
from .geometry.image import generate_image_geometry
from .geometry.mesh import Mesh
from .geometry.text import create_3d_text
from .models import ContributionDay, ContributionGrid, HeightLevel
from .stl import write_stl_binary

logger = logging.getLogger(__name__)


def tower_height(level: HeightLevel, layout: ModelLayout = DEFAULT_LAYOUT) -> float:
    """Four discrete tiers: no tower for sky, then thirds of the maximum height"""
    return layout.max_tower_height * int(level) / int(HeightLevel.HIGH)


def day_row(day: ContributionDay) -> int:
    """Row of a day on the calendar, Sunday = 0 (front) to Saturday = 6 (back)"""
    return day.date.isoweekday() % 7


def create_base(layout: ModelLayout = DEFAULT_LAYOUT) -> Mesh:
    """The slab under the towers; its top sits at z = 0, its front face at y = 0"""
    normals, vertices = create_cubes(
        np.array([[0.0, 0.0, -layout.base_height]]),
        np.array([layout.base_width, layout.base_depth, layout.base_height]),
    )
    return Mesh.from_arrays(normals, vertices)


def create_contribution_geometry(grid: ContributionGrid, layout: ModelLayout = DEFAULT_LAYOUT) -> Mesh:
    """
    One box tower per contributing day.

    Args:
        grid: Weeks of contribution days
        layout: Physical model dimensions

    Returns:
        Mesh with 12 triangles per contributing day, week by week
    """
    if not grid:
        raise ValidationError("empty contribution grid")
    if len(grid) > layout.grid_weeks:
        raise ValidationError(f"grid has {len(grid)} weeks, the base holds {layout.grid_weeks}")

    max_count = max_contributions(grid)
    origins = []
    extents = []
    for week_idx, week in enumerate(grid):
        for day in week:
            level = classify_level(day.count, max_count)
            if level == HeightLevel.SKY:
                continue
            origins.append((
                layout.base_margin + week_idx * layout.cell_size,
                layout.base_margin + day_row(day) * layout.cell_size,
                0.0,
            ))
            extents.append((layout.cell_size, layout.cell_size, tower_height(level, layout)))

    normals, vertices = create_cubes(
        np.array(origins, dtype=np.float64).reshape(-1, 3),
        np.array(extents, dtype=np.float64).reshape(-1, 3),
    )
    return Mesh.from_arrays(normals, vertices)


def generate_year_mesh(
    grid: ContributionGrid,
    username: str,
    year: int,
    layout: ModelLayout = DEFAULT_LAYOUT,
    assets: Optional[AssetProvider] = None,
) -> Mesh:
    """Base, towers, labels and logo for one year, in one coordinate frame"""
    if assets is None:
        assets = AssetProvider()

    mesh = create_base(layout)
    towers = create_contribution_geometry(grid, layout)
    mesh.merge(towers)
    logger.debug("Year %d: %d contribution towers", year, len(towers) // 12)

    mesh.merge(create_3d_text(username, year, layout.base_width, layout.base_height, assets))
    mesh.merge(generate_image_geometry(layout.base_width, layout.base_height, assets))
    return mesh


def generate_range_mesh(
    grids: List[ContributionGrid],
    username: str,
    start_year: int,
    layout: ModelLayout = DEFAULT_LAYOUT,
    assets: Optional[AssetProvider] = None,
) -> Mesh:
    """
    Consecutive years laid out along +y, each with its own labels.

    The result is a plain concatenation; year_spacing in the layout keeps
    the front-face labels of one year clear of the previous year's back.
    """
    if not grids:
        raise ValidationError("no contribution grids to assemble")
    if assets is None:
        assets = AssetProvider()

    mesh = Mesh()
    for i, grid in enumerate(grids):
        year_mesh = generate_year_mesh(grid, username, start_year + i, layout, assets)
        mesh.merge(year_mesh.translated(dy=i * layout.year_pitch))
    return mesh


def _header(username: str, years: str) -> bytes:
    return f"skyline {username} {years}".encode("utf-8")


def generate_stl(
    grid: ContributionGrid,
    output_path: Union[str, Path],
    username: str,
    year: int,
    layout: ModelLayout = DEFAULT_LAYOUT,
    assets: Optional[AssetProvider] = None,
) -> Path:
    """Assemble one year and write it as a binary STL file"""
    logger.info("Generating STL for %s (%d)", username, year)
    mesh = generate_year_mesh(grid, username, year, layout, assets)
    return write_stl_binary(output_path, mesh, header=_header(username, str(year)))


def generate_stl_range(
    grids: List[ContributionGrid],
    output_path: Union[str, Path],
    username: str,
    start_year: int,
    end_year: int,
    layout: ModelLayout = DEFAULT_LAYOUT,
    assets: Optional[AssetProvider] = None,
) -> Path:
    """Assemble a range of years and write it as a single binary STL file"""
    if len(grids) != end_year - start_year + 1:
        raise ValidationError(f"expected {end_year - start_year + 1} grids for {start_year}-{end_year}, got {len(grids)}")

    logger.info("Generating STL for %s (%d-%d)", username, start_year, end_year)
    mesh = generate_range_mesh(grids, username, start_year, layout, assets)
    return write_stl_binary(output_path, mesh, header=_header(username, f"{start_year}-{end_year}"))
