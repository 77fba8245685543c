"""
Utilities - Year range parsing and output file naming
"""
from datetime import date
from typing import Optional, Tuple

from .errors import ValidationError

GITHUB_LAUNCH_YEAR = 2008
OUTPUT_FILE_FORMAT = "{user}-{years}-github-skyline.stl"


def parse_year_range(year_range: str, current_year: Optional[int] = None) -> Tuple[int, int]:
    """
    Parse "2024" or "2014-2024" into (start, end) and validate it.

    Raises:
        ValidationError: malformed input or years out of range
    """
    if "-" in year_range:
        parts = year_range.split("-")
        if len(parts) != 2:
            raise ValidationError("invalid year range format")
        try:
            start_year, end_year = int(parts[0]), int(parts[1])
        except ValueError as e:
            raise ValidationError(f"invalid year in range {year_range!r}", e) from e
    else:
        try:
            start_year = end_year = int(year_range)
        except ValueError as e:
            raise ValidationError(f"invalid year {year_range!r}", e) from e

    validate_year_range(start_year, end_year, current_year)
    return start_year, end_year


def validate_year_range(start_year: int, end_year: int, current_year: Optional[int] = None) -> None:
    """Years must fall between GitHub's launch and the current year, start <= end"""
    if current_year is None:
        current_year = date.today().year
    if start_year < GITHUB_LAUNCH_YEAR or end_year > current_year:
        raise ValidationError(f"years must be between {GITHUB_LAUNCH_YEAR} and {current_year}")
    if start_year > end_year:
        raise ValidationError("start year cannot be after end year")


def format_year_range(start_year: int, end_year: int) -> str:
    """"2024" for a single year, "2020-24" for a range"""
    if start_year == end_year:
        return f"{start_year}"
    return f"{start_year:04d}-{end_year % 100:02d}"


def generate_output_filename(user: str, start_year: int, end_year: int, output: str = "") -> str:
    """
    File name for the STL model.

    An explicit output path wins and gets a ".stl" suffix when it lacks one.
    """
    if output:
        if not output.lower().endswith(".stl"):
            return output + ".stl"
        return output
    return OUTPUT_FILE_FORMAT.format(user=user, years=format_year_range(start_year, end_year))
