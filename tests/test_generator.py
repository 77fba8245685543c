"""Tests for the mesh assembler."""

import numpy as np
import pytest

from skyline.config import DEFAULT_LAYOUT, ModelLayout
from skyline.errors import ValidationError
from skyline.generator import (
    create_base,
    create_contribution_geometry,
    day_row,
    generate_range_mesh,
    generate_stl,
    generate_stl_range,
    generate_year_mesh,
    tower_height,
)
from skyline.models import HeightLevel
from skyline.stl import read_stl_binary


# ── Layout ──────────────────────────────────────────────────────────


class TestLayout:
    def test_default_dimensions(self):
        assert DEFAULT_LAYOUT.base_width == pytest.approx(140.0)
        assert DEFAULT_LAYOUT.base_depth == pytest.approx(22.5)
        assert DEFAULT_LAYOUT.year_pitch == pytest.approx(24.5)

    @pytest.mark.parametrize("level,height", [
        (HeightLevel.SKY, 0.0),
        (HeightLevel.LOW, 25.0 / 3),
        (HeightLevel.MEDIUM, 50.0 / 3),
        (HeightLevel.HIGH, 25.0),
    ])
    def test_tower_height(self, level, height):
        assert tower_height(level) == pytest.approx(height)

    def test_day_row_sunday_first(self, make_grid):
        week = make_grid(1)[0]
        assert [day_row(day) for day in week] == list(range(7))


# ── Base and towers ─────────────────────────────────────────────────


class TestBaseAndTowers:
    def test_base(self):
        base = create_base()
        assert len(base) == 12
        lo, hi = base.bounds
        np.testing.assert_allclose(lo, [0, 0, -10])
        np.testing.assert_allclose(hi, [140, 22.5, 0])

    def test_one_tower_per_contributing_day(self, make_grid):
        mesh = create_contribution_geometry(make_grid(3))
        assert len(mesh) == 12 * 12

    def test_all_zero_grid_has_no_towers(self, make_grid):
        assert len(create_contribution_geometry(make_grid(4, count=lambda w, d: 0))) == 0

    def test_tower_placement(self, make_grid):
        grid = make_grid(3, count=lambda w, d: 5 if (w, d) == (2, 3) else 0)
        lo, hi = create_contribution_geometry(grid).bounds
        np.testing.assert_allclose(lo, [7.5, 10.0, 0.0])
        np.testing.assert_allclose(hi, [10.0, 12.5, 25.0])

    def test_empty_grid_rejected(self):
        with pytest.raises(ValidationError):
            create_contribution_geometry([])

    def test_too_many_weeks_rejected(self, make_grid):
        with pytest.raises(ValidationError):
            create_contribution_geometry(make_grid(DEFAULT_LAYOUT.grid_weeks + 1))

    def test_custom_layout(self, make_grid):
        layout = ModelLayout(cell_size=5.0, max_tower_height=10.0)
        grid = make_grid(1, count=lambda w, d: 1 if d == 0 else 0)
        lo, hi = create_contribution_geometry(grid, layout).bounds
        np.testing.assert_allclose(lo, [2.5, 2.5, 0])
        np.testing.assert_allclose(hi, [7.5, 7.5, 10])


# ── Whole models ────────────────────────────────────────────────────


class TestYearMesh:
    def test_bounds(self, make_grid, assets):
        mesh = generate_year_mesh(make_grid(3), "testuser", 2023, assets=assets)
        lo, hi = mesh.bounds
        assert lo[0] >= 0 and hi[0] <= 140 + 1e-9
        assert lo[1] == pytest.approx(-1.0)  # labels protrude from the front face
        assert hi[1] == pytest.approx(22.5)
        assert lo[2] == pytest.approx(-10.0)
        assert hi[2] == pytest.approx(25.0)

    def test_multiple_of_twelve(self, make_grid, assets):
        mesh = generate_year_mesh(make_grid(5), "testuser", 2023, assets=assets)
        assert len(mesh) % 12 == 0
        assert len(mesh) > 12 + 5 * 12


class TestRangeMesh:
    def test_years_laid_out_along_y(self, make_grid, assets):
        grids = [make_grid(3), make_grid(2)]
        single = [
            generate_year_mesh(grids[0], "u", 2022, assets=assets),
            generate_year_mesh(grids[1], "u", 2023, assets=assets),
        ]
        mesh = generate_range_mesh(grids, "u", 2022, assets=assets)

        assert len(mesh) == len(single[0]) + len(single[1])
        second = mesh.vertices[len(single[0]):]
        np.testing.assert_allclose(second, single[1].vertices + [0, DEFAULT_LAYOUT.year_pitch, 0])

    def test_no_overlap_between_years(self, make_grid, assets):
        mesh = generate_range_mesh([make_grid(2), make_grid(2)], "u", 2022, assets=assets)
        _, hi = mesh.bounds
        assert hi[1] == pytest.approx(DEFAULT_LAYOUT.year_pitch + DEFAULT_LAYOUT.base_depth)
        # second year's labels start after the first base ends
        assert DEFAULT_LAYOUT.year_pitch - 1.0 > DEFAULT_LAYOUT.base_depth

    def test_empty_range_rejected(self, assets):
        with pytest.raises(ValidationError):
            generate_range_mesh([], "u", 2022, assets=assets)


class TestGenerateStl:
    def test_single_year(self, make_grid, assets, tmp_path):
        path = generate_stl(make_grid(3), tmp_path / "out.stl", "testuser", 2023, assets=assets)
        header, normals, _ = read_stl_binary(path)
        assert header.rstrip(b"\0") == b"skyline testuser 2023"
        expected = generate_year_mesh(make_grid(3), "testuser", 2023, assets=assets)
        assert len(normals) == len(expected)

    def test_range(self, make_grid, assets, tmp_path):
        path = generate_stl_range([make_grid(2), make_grid(2)], tmp_path / "out.stl",
                                  "testuser", 2022, 2023, assets=assets)
        header, _, _ = read_stl_binary(path)
        assert header.rstrip(b"\0") == b"skyline testuser 2022-2023"

    def test_range_grid_count_mismatch(self, make_grid, assets, tmp_path):
        with pytest.raises(ValidationError):
            generate_stl_range([make_grid(2)], tmp_path / "out.stl", "u", 2022, 2023, assets=assets)
        assert not (tmp_path / "out.stl").exists()
