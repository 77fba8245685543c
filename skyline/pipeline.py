"""
Pipeline - Fetch, preview and model a user's contribution history

Years are processed one after another: each grid is fetched, printed as an
ASCII skyline, and kept for the STL model written at the end. A failed
preview is only a warning; any failure on the model path aborts the run.
"""
import logging
from datetime import date
from pathlib import Path
from typing import List, Optional

from .ascii_art import generate_ascii, strip_preamble
from .config import DEFAULT_LAYOUT, ModelLayout
from .errors import SkylineError
from .generator import generate_stl, generate_stl_range
from .geometry.assets import AssetProvider
from .github_client import GitHubClient
from .models import ContributionGrid
from .utils import generate_output_filename

logger = logging.getLogger(__name__)


def print_preview(grid: ContributionGrid, username: str, year: int, first: bool,
                  art_only: bool, today: Optional[date] = None) -> None:
    """Print one year of the ASCII preview; only the first year carries the banner"""
    try:
        art = generate_ascii(
            grid,
            username,
            year,
            include_header=first and not art_only,
            include_footer=not art_only,
            today=today,
        )
    except SkylineError as e:
        logger.warning("Failed to generate ASCII preview for %d: %s", year, e)
        return

    print(art if first else strip_preamble(art))


def generate_skyline(
    client: GitHubClient,
    start_year: int,
    end_year: int,
    target_user: str = "",
    full: bool = False,
    output: str = "",
    art_only: bool = False,
    assets: Optional[AssetProvider] = None,
    layout: ModelLayout = DEFAULT_LAYOUT,
    today: Optional[date] = None,
) -> Optional[Path]:
    """
    Preview and model contributions for a year range.

    Args:
        client: Source of contribution data
        start_year: First year (ignored when full is set)
        end_year: Last year (ignored when full is set)
        target_user: GitHub login; the authenticated user when empty
        full: Use the user's join year through the current year
        output: Explicit STL path (".stl" appended when missing)
        art_only: Only print the ASCII preview
        assets: Font and logo provider for the model labels
        layout: Physical model dimensions
        today: Reference date for future days and lifetime ranges

    Returns:
        Path of the written STL file, or None in art-only mode
    """
    if not target_user:
        logger.debug("No target user specified, using authenticated user")
        target_user = client.get_authenticated_user()

    if full:
        start_year = client.get_user_join_year(target_user)
        end_year = (today or date.today()).year
        logger.debug("Full lifetime range for %s: %d-%d", target_user, start_year, end_year)

    grids: List[ContributionGrid] = []
    for year in range(start_year, end_year + 1):
        grid = client.fetch_contributions(target_user, year)
        grids.append(grid)
        print_preview(grid, target_user, year, year == start_year, art_only, today)

    if art_only:
        return None

    output_path = generate_output_filename(target_user, start_year, end_year, output)
    if len(grids) == 1:
        return generate_stl(grids[0], output_path, target_user, start_year, layout, assets)
    return generate_stl_range(grids, output_path, target_user, start_year, end_year, layout, assets)
