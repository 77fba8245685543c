"""Tests for the ASCII skyline preview."""

from datetime import date

import pytest

from skyline.ascii_art import (
    EMPTY_BLOCK,
    FOOTER_LEGEND,
    FUTURE_BLOCK,
    HEADER_TEMPLATE,
    generate_ascii,
    get_block,
    header_lines,
    stack_week,
    strip_preamble,
)
from skyline.errors import ValidationError
from skyline.models import ContributionDay, HeightLevel, StackRole


def grid_rows(text, header=False, username="testuser", year=2023):
    lines = text.split("\n")
    start = len(header_lines(username, year)) if header else 0
    return lines[start:start + 7]


# ── Glyphs ──────────────────────────────────────────────────────────


class TestGetBlock:
    @pytest.mark.parametrize("level,role,expected", [
        (HeightLevel.SKY, None, " "),
        (HeightLevel.LOW, StackRole.FOUNDATION, "░"),
        (HeightLevel.MEDIUM, StackRole.FOUNDATION, "▒"),
        (HeightLevel.HIGH, StackRole.FOUNDATION, "▓"),
        (HeightLevel.LOW, StackRole.MIDDLE, "░"),
        (HeightLevel.MEDIUM, StackRole.MIDDLE, "▒"),
        (HeightLevel.HIGH, StackRole.MIDDLE, "▓"),
        (HeightLevel.LOW, StackRole.TOP, "╻"),
        (HeightLevel.MEDIUM, StackRole.TOP, "┃"),
        (HeightLevel.HIGH, StackRole.TOP, "╽"),
    ])
    def test_lookup(self, level, role, expected):
        assert get_block(level, role) == expected

    def test_sky_with_role_is_empty(self):
        assert get_block(HeightLevel.SKY, StackRole.TOP) == EMPTY_BLOCK


class TestStackWeek:
    def test_contributing_days_first(self):
        week = [
            ContributionDay(date(2023, 1, 1), 0),
            ContributionDay(date(2023, 1, 2), 3),
            ContributionDay(date(2023, 1, 3), 0),
            ContributionDay(date(2023, 1, 4), 1),
        ]
        stacked = stack_week(week)
        assert [d.count for d in stacked] == [3, 1, 0, 0]
        assert [d.date.day for d in stacked] == [2, 4, 1, 3]


# ── Rendering ───────────────────────────────────────────────────────


class TestGenerateAscii:
    def test_empty_grid_rejected(self):
        with pytest.raises(ValidationError, match="empty contribution grid"):
            generate_ascii([], "testuser", 2023)

    def test_overlong_week_rejected(self, make_grid, today):
        with pytest.raises(ValidationError):
            generate_ascii(make_grid(1, days=8), "testuser", 2023, today=today)

    def test_valid_grid(self, make_grid, today):
        art = generate_ascii(make_grid(3, 7), "testuser", 2023,
                             include_header=False, include_footer=False, today=today)
        assert art.split("\n") == [
            "   ",
            " ┃╽",
            " ▒▓",
            " ░▒",
            " ░▒",
            " ░░",
            " ░░",
        ]

    def test_with_header(self, make_grid, today):
        art = generate_ascii(make_grid(3, 7), "testuser", 2023, include_header=True, today=today)
        assert HEADER_TEMPLATE in art
        assert "testuser 2023" in art

    def test_without_header(self, make_grid, today):
        art = generate_ascii(make_grid(3, 7), "testuser", 2023, include_header=False, today=today)
        assert "testuser" not in art
        assert "2023" not in art
        assert HEADER_TEMPLATE.split("\n")[1] not in art

    def test_footer(self, make_grid, today):
        with_footer = generate_ascii(make_grid(2), "u", 2023, include_footer=True, today=today)
        without = generate_ascii(make_grid(2), "u", 2023, include_footer=False, today=today)
        assert with_footer.endswith(FOOTER_LEGEND)
        assert "Legend:" not in without

    @pytest.mark.parametrize("include_header", [True, False])
    def test_zero_contributions_all_sky(self, make_grid, today, include_header):
        art = generate_ascii(make_grid(3, 7, count=lambda w, d: 0), "testuser", 2023,
                             include_header=include_header, include_footer=False, today=today)
        rows = grid_rows(art, header=include_header)
        assert len(rows) == 7
        for row in rows:
            assert row == "   "

    def test_one_column_per_week(self, make_grid, today):
        art = generate_ascii(make_grid(53), "u", 2023,
                             include_header=False, include_footer=False, today=today)
        rows = art.split("\n")
        assert len(rows) == 7
        assert all(len(row) == 53 for row in rows)

    def test_lone_day_is_foundation_at_bottom(self, make_grid, today):
        grid = make_grid(1, count=lambda w, d: 4 if d == 3 else 0)
        art = generate_ascii(grid, "u", 2023, include_header=False, include_footer=False, today=today)
        assert art.split("\n") == [" "] * 6 + ["▓"]

    def test_short_week_padded_with_sky(self, make_grid, today):
        grid = make_grid(1, days=3, count=lambda w, d: 5 if d == 1 else 0)
        art = generate_ascii(grid, "u", 2023, include_header=False, include_footer=False, today=today)
        assert art.split("\n") == [" "] * 6 + ["▓"]

    def test_future_days(self, make_grid):
        grid = make_grid(1, count=lambda w, d: 1)
        art = generate_ascii(grid, "u", 2023, include_header=False, include_footer=False,
                             today=date(2023, 1, 3))
        assert art.split("\n") == [FUTURE_BLOCK] * 4 + ["▓"] * 3

    def test_future_zero_day_shows_future(self, make_grid):
        grid = make_grid(1, count=lambda w, d: 0)
        art = generate_ascii(grid, "u", 2023, include_header=False, include_footer=False,
                             today=date(2022, 12, 31))
        assert art.split("\n") == [FUTURE_BLOCK] * 7

    def test_deterministic(self, make_grid, today):
        grid = make_grid(10, count=lambda w, d: (w * 7 + d) % 5)
        assert generate_ascii(grid, "u", 2023, today=today) == generate_ascii(grid, "u", 2023, today=today)


class TestStripPreamble:
    def test_drops_header(self, make_grid, today):
        art = generate_ascii(make_grid(3), "testuser", 2023, include_footer=False, today=today)
        stripped = strip_preamble(art)
        assert "testuser" not in stripped
        assert stripped.split("\n") == ["   ", " ┃╽", " ▒▓", " ░▒", " ░▒", " ░░", " ░░"]

    def test_headerless_grid_unchanged(self, make_grid, today):
        # sky and spire rows sit above the first body glyph
        grid = make_grid(3, count=lambda w, d: 1 if d < 2 else 0)
        art = generate_ascii(grid, "u", 2023, include_header=False, include_footer=False, today=today)
        assert strip_preamble(art) == art
        assert len(art.split("\n")) == 7

    def test_future_rows_kept(self, make_grid):
        grid = make_grid(3, count=lambda w, d: 1)
        bare = generate_ascii(grid, "u", 2023, include_header=False, include_footer=False,
                              today=date(2023, 1, 9))
        framed = generate_ascii(grid, "u", 2023, include_header=True, include_footer=False,
                                today=date(2023, 1, 9))
        assert strip_preamble(bare).split("\n")[0] == "╽.."
        assert strip_preamble(framed) == bare

    def test_no_blocks_returns_input(self):
        assert strip_preamble("nothing\nhere") == "nothing\nhere"
