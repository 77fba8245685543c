"""
ASCII Skyline - Text preview of a contribution grid

Each column is one week. Inside a column, days without contributions float
to the top (sky) and contributing days stack from the bottom in
chronological order, so every week reads as a small building.
"""
from datetime import date
from typing import List, Optional

from .classifier import classify, max_contributions
from .errors import ValidationError
from .models import ContributionGrid, HeightLevel, StackRole, Week

DAYS_PER_WEEK = 7

EMPTY_BLOCK = " "
FUTURE_BLOCK = "."

FOUNDATION_LOW = "░"
FOUNDATION_MED = "▒"
FOUNDATION_HIGH = "▓"
MIDDLE_LOW = "░"
MIDDLE_MED = "▒"
MIDDLE_HIGH = "▓"
TOP_LOW = "╻"
TOP_MED = "┃"
TOP_HIGH = "╽"

_BLOCKS = {
    (HeightLevel.LOW, StackRole.FOUNDATION): FOUNDATION_LOW,
    (HeightLevel.MEDIUM, StackRole.FOUNDATION): FOUNDATION_MED,
    (HeightLevel.HIGH, StackRole.FOUNDATION): FOUNDATION_HIGH,
    (HeightLevel.LOW, StackRole.MIDDLE): MIDDLE_LOW,
    (HeightLevel.MEDIUM, StackRole.MIDDLE): MIDDLE_MED,
    (HeightLevel.HIGH, StackRole.MIDDLE): MIDDLE_HIGH,
    (HeightLevel.LOW, StackRole.TOP): TOP_LOW,
    (HeightLevel.MEDIUM, StackRole.TOP): TOP_MED,
    (HeightLevel.HIGH, StackRole.TOP): TOP_HIGH,
}

HEADER_TEMPLATE = r"""
    _____ __         ___
   / ___// /____  __/ (_)___  ___
   \__ \/ //_/ / / / / / __ \/ _ \
  ___/ / ,< / /_/ / / / / / /  __/
 /____/_/|_|\__, /_/_/_/ /_/\___/
           /____/""".strip("\n")

FOOTER_LEGEND = "\n".join([
    "Legend:",
    f"  '{EMPTY_BLOCK}' Empty/Sky     - No contributions",
    f"  '{FUTURE_BLOCK}' Future dates  - What contributions could you make?",
    f"  '{FOUNDATION_LOW}' Low level     - Light contribution activity",
    f"  '{FOUNDATION_MED}' Medium level  - Moderate contribution activity",
    f"  '{FOUNDATION_HIGH}' High level    - Heavy contribution activity",
    f"  '{TOP_LOW}{TOP_MED}{TOP_HIGH}' Top level   - Last block with contributions in the week (Low, Medium, High)",
])


def get_block(level: HeightLevel, role: Optional[StackRole]) -> str:
    """Glyph for a classified day. Sky (or no role) renders as empty."""
    if level == HeightLevel.SKY or role is None:
        return EMPTY_BLOCK
    return _BLOCKS[(level, role)]


def stack_week(week: Week) -> Week:
    """
    Days of a week from the bottom of the column up: contributing days in
    date order, then the empty days (sky), also in date order.
    """
    busy = [day for day in week if day.count > 0]
    empty = [day for day in week if day.count == 0]
    return busy + empty


def header_lines(username: str, year: int) -> List[str]:
    return HEADER_TEMPLATE.split("\n") + ["", f"{username} {year}", ""]


def generate_ascii(
    grid: ContributionGrid,
    username: str,
    year: int,
    include_header: bool = True,
    include_footer: bool = True,
    today: Optional[date] = None,
) -> str:
    """
    Render a year of contributions as an ASCII skyline.

    Args:
        grid: Weeks of contribution days (at least one week)
        username: Shown in the header
        year: Shown in the header
        include_header: Prefix the banner and the username/year line
        include_footer: Append the glyph legend
        today: Days after this date render as future placeholders (default: today)

    Returns:
        The multi-line text block
    """
    if not grid:
        raise ValidationError("empty contribution grid")
    if today is None:
        today = date.today()

    max_count = max_contributions(grid)
    rows = [[EMPTY_BLOCK] * len(grid) for _ in range(DAYS_PER_WEEK)]

    for week_idx, week in enumerate(grid):
        if len(week) > DAYS_PER_WEEK:
            raise ValidationError(f"week {week_idx} has {len(week)} days")

        column = stack_week(week)
        non_zero_count = sum(1 for day in column if day.count > 0)

        # Row 0 is the top line; short weeks leave sky above them
        for height, day in enumerate(column):
            row = rows[DAYS_PER_WEEK - 1 - height]
            if day.date > today:
                row[week_idx] = FUTURE_BLOCK
            elif day.count > 0:
                # Contributing days come first, so height is also the non-zero index
                c = classify(day.count, max_count, height, non_zero_count)
                row[week_idx] = get_block(c.level, c.role)

    lines: List[str] = []
    if include_header:
        lines.extend(header_lines(username, year))
    lines.extend("".join(row) for row in rows)
    if include_footer:
        lines.append("")
        lines.extend(FOOTER_LEGEND.split("\n"))

    return "\n".join(lines)


def strip_preamble(text: str) -> str:
    """
    Drop the banner and the username/year lines from the top of a preview.

    Grid rows are never removed, even when they hold only sky, spires or
    future days. Text without a leading banner is returned unchanged.
    """
    lines = text.split("\n")
    banner = HEADER_TEMPLATE.split("\n")
    if lines[:len(banner)] != banner:
        return text
    # banner, blank line, "username year", blank line
    return "\n".join(lines[len(banner) + 3:])
