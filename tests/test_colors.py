"""Tests for terrain and entity colors."""

from island_sim.renderer import colors
from island_sim.simulation import Band, EntityType


class TestLerpColor:
    def test_endpoints(self):
        assert colors.lerp_color((0, 0, 0), (100, 200, 50), 0.0) == (0, 0, 0)
        assert colors.lerp_color((0, 0, 0), (100, 200, 50), 1.0) == (100, 200, 50)

    def test_clamps_out_of_range(self):
        assert colors.lerp_color((10, 10, 10), (20, 20, 20), -3.0) == (10, 10, 10)
        assert colors.lerp_color((10, 10, 10), (20, 20, 20), 4.0) == (20, 20, 20)


class TestCellColor:
    def test_shore_below_threshold(self):
        assert colors.get_cell_color(Band.LAND, 0.8, 1.0) == colors.SHORE

    def test_grass_above_threshold(self):
        assert colors.get_cell_color(Band.LAND, 1.0, 1.0) == colors.GRASS_LOW
        assert colors.get_cell_color(Band.LAND, 11 / 9, 1.0) == colors.GRASS_HIGH

    def test_water_bands_use_their_palettes(self):
        assert colors.get_cell_color(Band.SEA, -1.2, 1.0) == colors.SEA_DEEP
        assert colors.get_cell_color(Band.LAKE, 0.5, 1.0) == colors.LAKE_SHALLOW

    def test_every_entity_type_has_a_color(self):
        for entity_type in EntityType:
            assert colors.get_entity_color(entity_type) == colors.ENTITY_COLORS[entity_type]
