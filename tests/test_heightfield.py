"""Tests for height field generation: land growth, lakes and smoothing."""

import logging
import random
from collections import deque

import numpy as np
import pytest

from island_sim.simulation.heightfield import (
    LAKE,
    LAND,
    SEA,
    Band,
    HeightField,
)


def _connected_land(field: HeightField) -> set[tuple[int, int]]:
    """Land cells reachable from the center through N/S/E/W steps."""
    start = field.center
    seen = {start}
    queue = deque([start])
    while queue:
        x, z = queue.popleft()
        for nx, nz in field.neighbors4(x, z):
            if (nx, nz) not in seen and field.cells[nx, nz] == LAND:
                seen.add((nx, nz))
                queue.append((nx, nz))
    return seen


def _island(width: int, height: int, land: int, seed: int) -> HeightField:
    field = HeightField(width, height, SEA)
    field.grow_land(land, random.Random(seed))
    return field


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestInit:
    @pytest.mark.parametrize("width,height", [(1, 1), (3, 4), (7, 2)])
    def test_every_cell_has_default(self, width, height):
        field = HeightField(width, height, LAND)
        assert field.cells.shape == (width, height)
        assert np.all(field.cells == LAND)

    def test_defaults_to_sea(self):
        field = HeightField(4, 4)
        assert field.count(SEA) == 16

    @pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-1, 3)])
    def test_empty_grid_rejected(self, width, height):
        with pytest.raises(ValueError):
            HeightField(width, height)

    def test_copy_is_independent(self):
        field = HeightField(3, 3, SEA)
        clone = field.copy()
        clone.cells[1, 1] = LAND
        assert field.cells[1, 1] == SEA
        assert clone != field

    def test_equality_compares_cells(self):
        assert HeightField(3, 3, LAND) == HeightField(3, 3, LAND)
        assert HeightField(3, 3, LAND) != HeightField(3, 4, LAND)


    def test_from_cells_wraps_array(self):
        cells = np.full((4, 2), LAKE)
        field = HeightField.from_cells(cells)
        assert field.cells is cells
        assert (field.width, field.height) == (4, 2)

    def test_from_cells_rejects_empty(self):
        with pytest.raises(ValueError):
            HeightField.from_cells(np.zeros((0, 3)))

class TestQueries:
    def test_in_bounds(self):
        field = HeightField(4, 3)
        assert field.in_bounds(0, 0)
        assert field.in_bounds(3, 2)
        assert not field.in_bounds(4, 0)
        assert not field.in_bounds(0, 3)
        assert not field.in_bounds(-1, 1)

    def test_height_at_truncates_to_cell(self):
        field = HeightField(3, 3, SEA)
        field.cells[1, 2] = 0.75
        assert field.height_at(1.6, 2.3) == 0.75

    def test_is_passable_uses_threshold(self):
        field = HeightField(3, 3, LAKE)
        field.cells[0, 0] = LAND
        assert field.is_passable(0, 0)
        assert not field.is_passable(1, 1)
        assert field.is_passable(1, 1, threshold=LAKE)
        assert not field.is_passable(5, 5)

    def test_band_at(self):
        field = HeightField(3, 1, SEA)
        field.cells[1, 0] = 0.1
        field.cells[2, 0] = 1.2
        assert field.band_at(0, 0) == Band.SEA
        assert field.band_at(1, 0) == Band.LAKE
        assert field.band_at(2, 0) == Band.LAND

    def test_neighbors_clip_to_grid(self):
        field = HeightField(3, 3)
        assert sorted(field.neighbors4(0, 0)) == [(0, 1), (1, 0)]
        assert len(list(field.neighbors8(0, 0))) == 3
        assert len(list(field.neighbors8(1, 1))) == 8


# ---------------------------------------------------------------------------
# Land growth
# ---------------------------------------------------------------------------

class TestGrowLand:
    def test_single_cell_is_center(self):
        field = _island(5, 5, 1, seed=0)
        assert field.count(LAND) == 1
        assert field.cells[2, 2] == LAND

    def test_nine_cells_all_connected(self):
        field = _island(5, 5, 9, seed=3)
        assert field.count(LAND) == 9
        assert len(_connected_land(field)) == 9

    @pytest.mark.parametrize("seed", range(5))
    def test_exact_count_and_connected(self, seed):
        field = _island(30, 20, 150, seed)
        assert field.count(LAND) == 150
        assert len(_connected_land(field)) == 150
        assert field.count(SEA) == 30 * 20 - 150

    def test_almost_full_grid(self):
        field = _island(4, 4, 15, seed=1)
        assert field.count(LAND) == 15
        assert field.count(SEA) == 1

    def test_same_seed_same_island(self):
        assert _island(25, 25, 120, seed=42) == _island(25, 25, 120, seed=42)

    def test_different_seeds_differ(self):
        assert _island(25, 25, 120, seed=1) != _island(25, 25, 120, seed=2)


# ---------------------------------------------------------------------------
# Lakes
# ---------------------------------------------------------------------------

class TestGrowLakes:
    def test_exact_total_on_all_land(self):
        field = HeightField(5, 5, LAND)
        field.grow_lakes(5, random.Random(0))
        assert field.count(LAKE) == 5

    def test_total_clamped_to_minimum(self):
        field = HeightField(6, 6, LAND)
        field.grow_lakes(1, random.Random(0), min_lake_size=4)
        assert field.count(LAKE) == 5

    @pytest.mark.parametrize("seed", range(5))
    def test_lakes_never_touch_sea(self, seed):
        rng = random.Random(seed)
        field = HeightField(40, 40, SEA)
        field.grow_land(600, rng)
        field.grow_lakes(30, rng)

        assert field.count(LAKE) == 30
        for x, z in zip(*np.nonzero(field.cells == LAKE)):
            for nx, nz in field.neighbors8(int(x), int(z)):
                assert field.cells[nx, nz] != SEA

    def test_lakes_only_replace_land(self):
        rng = random.Random(9)
        field = HeightField(40, 40, SEA)
        field.grow_land(600, rng)
        field.grow_lakes(25, rng)
        assert field.count(LAND) + field.count(LAKE) == 600
        assert field.count(SEA) == 1600 - 600

    def test_returns_number_of_lakes(self):
        field = HeightField(10, 10, LAND)
        lakes = field.grow_lakes(12, random.Random(4))
        assert lakes >= 1
        assert field.count(LAKE) == 12

    def test_thin_island_stops_without_lakes(self, caplog):
        field = HeightField(7, 7, SEA)
        field.cells[1:6, 3] = LAND

        with caplog.at_level(logging.WARNING, logger="island_sim"):
            lakes = field.grow_lakes(5, random.Random(0))

        assert lakes == 0
        assert field.count(LAKE) == 0
        assert field.count(LAND) == 5
        assert "No inland cell left" in caplog.text

    def test_keeps_lakes_carved_before_running_out(self):
        # A 3x3 block has a single inland cell
        field = HeightField(7, 7, SEA)
        field.cells[2:5, 2:5] = LAND
        lakes = field.grow_lakes(5, random.Random(3))
        assert lakes == 1
        assert field.cells[3, 3] == LAKE
        assert field.count(LAKE) == 1


# ---------------------------------------------------------------------------
# Smoothing
# ---------------------------------------------------------------------------

class TestSmooth:
    def test_changes_non_uniform_map(self):
        field = HeightField(3, 3, LAKE)
        field.cells[1, 1] = LAND
        assert field.smooth() != field

    def test_keeps_dimensions(self):
        field = HeightField(7, 4, SEA)
        smoothed = field.smooth()
        assert (smoothed.width, smoothed.height) == (7, 4)
        assert smoothed.cells.shape == (7, 4)

    def test_does_not_mutate_input(self):
        field = HeightField(3, 3, LAKE)
        field.cells[1, 1] = LAND
        before = field.cells.copy()
        field.smooth()
        assert np.array_equal(field.cells, before)

    def test_result_owns_new_array(self):
        field = HeightField(3, 3, LAND)
        smoothed = field.smooth()
        assert smoothed.cells is not field.cells
        assert not np.shares_memory(smoothed.cells, field.cells)

    def test_kernel_weights(self):
        field = HeightField(3, 3, LAKE)
        field.cells[1, 1] = LAND
        smoothed = field.smooth()
        assert smoothed.cells[1, 1] == pytest.approx(1 / 3)
        assert smoothed.cells[0, 0] == pytest.approx(1 / 9)
        assert smoothed.cells[2, 1] == pytest.approx(1 / 9)

    def test_border_cells_sum_fewer_terms(self):
        smoothed = HeightField(3, 3, LAND).smooth()
        assert smoothed.cells[1, 1] == pytest.approx(1 / 3 + 8 / 9)
        assert smoothed.cells[1, 0] == pytest.approx(1 / 3 + 5 / 9)
        assert smoothed.cells[0, 0] == pytest.approx(1 / 3 + 3 / 9)

    def test_sea_far_from_land_gets_deeper(self):
        smoothed = HeightField(5, 5, SEA).smooth()
        assert smoothed.cells[2, 2] == pytest.approx(-(1 / 3 + 8 / 9))
