#!/usr/bin/env python3
"""CLI entry point for the skyline generator.

Usage examples
--------------

    # Current year for the authenticated user
    python -m skyline

    # A range of years for another user, custom output file
    python -m skyline --year 2020-2024 --user octocat -o octocat.stl

    # Everything since the account was created, preview only
    python -m skyline --full --art-only
"""

from __future__ import annotations

import argparse
import logging
import sys
import textwrap
import webbrowser
from datetime import date
from pathlib import Path

from .config import DEFAULT_HOST, Settings
from .errors import SkylineError
from .geometry.assets import AssetProvider
from .github_client import GitHubClient, initialize_github_client
from .logging_config import setup_logging
from .pipeline import generate_skyline
from .stl import load_stl
from .utils import parse_year_range

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="skyline",
        description="Generate a 3D model of a user's GitHub contribution history.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            While the STL file is being generated, an ASCII preview is
            printed to the terminal.

            ASCII Preview Legend:
              ' ' Empty/Sky     - No contributions
              '.' Future dates  - What contributions could you make?
              '░' Low level     - Light contribution activity
              '▒' Medium level  - Moderate contribution activity
              '▓' High level    - Heavy contribution activity
              '╻┃╽' Top level   - Last block with contributions in the week

            Each column is one week. Days within a week are reordered so
            empty days sit at the top, giving every week a building shape.
        """),
    )
    p.add_argument(
        "-y", "--year",
        default=str(date.today().year),
        help="Year or year range (e.g. 2024 or 2014-2024).",
    )
    p.add_argument(
        "-u", "--user",
        default="",
        help="GitHub username (defaults to the authenticated user).",
    )
    p.add_argument(
        "-f", "--full",
        action="store_true",
        help="Generate the contribution graph from the join year to the current year.",
    )
    p.add_argument(
        "-d", "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    p.add_argument(
        "-w", "--web",
        action="store_true",
        help="Open the GitHub profile of the user instead of generating a model.",
    )
    p.add_argument(
        "-a", "--art-only",
        dest="art_only",
        action="store_true",
        help="Generate only the ASCII preview.",
    )
    p.add_argument(
        "-o", "--output",
        default="",
        help="Output file path (optional).",
    )
    p.add_argument(
        "--stats",
        action="store_true",
        help="Print triangle count and size of the written model.",
    )
    return p


def open_github_profile(target_user: str, client: GitHubClient, browser=webbrowser,
                        host: str = DEFAULT_HOST) -> str:
    """Open https://<host>/<user> in a browser; the authenticated user when none given"""
    if not target_user:
        target_user = client.get_authenticated_user()

    profile_url = f"https://{host}/{target_user}"
    if not browser.open(profile_url):
        logger.warning("Could not open a browser for %s", profile_url)
    return profile_url


def print_stats(path: Path) -> None:
    model = load_stl(path)
    width, depth, height = model.extents
    print(f"Triangles: {len(model.faces)}")
    print(f"Size:      {width:.1f} x {depth:.1f} x {height:.1f} mm")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    setup_logging(debug=args.debug)
    settings = Settings.from_env()

    try:
        client = initialize_github_client(settings)

        if args.web:
            open_github_profile(args.user, client, host=settings.github_host)
            return 0

        start_year, end_year = parse_year_range(args.year)
        path = generate_skyline(
            client,
            start_year,
            end_year,
            target_user=args.user,
            full=args.full,
            output=args.output,
            art_only=args.art_only,
            assets=AssetProvider(settings.font_path),
        )
    except SkylineError as e:
        logger.error("%s", e)
        return 1

    if path is not None:
        print(f"Wrote STL → {path}")
        if args.stats:
            print_stats(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
