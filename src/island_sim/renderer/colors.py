"""Color definitions for the renderer."""

from ..simulation.entity import EntityType
from ..simulation.heightfield import Band

# Background
BG_DARK = (28, 28, 32)
BG_SIDEBAR = (38, 38, 45)

# Terrain bands
SEA_DEEP = (18, 52, 110)
SEA_SHALLOW = (40, 96, 170)
LAKE_DEEP = (35, 110, 160)
LAKE_SHALLOW = (70, 150, 200)
SHORE = (194, 178, 128)
GRASS_LOW = (86, 140, 64)
GRASS_HIGH = (52, 104, 44)

# Entities
PLANT_1 = (34, 180, 76)
PLANT_2 = (150, 200, 60)
ANIMAL_1 = (230, 140, 60)
ANIMAL_2 = (220, 80, 90)
WALKING_OUTLINE = (250, 250, 250)

ENTITY_COLORS = {
    EntityType.PLANT_1: PLANT_1,
    EntityType.PLANT_2: PLANT_2,
    EntityType.ANIMAL_1: ANIMAL_1,
    EntityType.ANIMAL_2: ANIMAL_2,
}

# UI
TEXT_PRIMARY = (240, 240, 245)
TEXT_SECONDARY = (160, 160, 170)
DIVIDER = (60, 60, 70)


def lerp_color(
    color1: tuple[int, int, int],
    color2: tuple[int, int, int],
    t: float,
) -> tuple[int, int, int]:
    """Linearly interpolate between two colors."""
    t = max(0.0, min(1.0, t))
    return (
        int(color1[0] + (color2[0] - color1[0]) * t),
        int(color1[1] + (color2[1] - color1[1]) * t),
        int(color1[2] + (color2[2] - color1[2]) * t),
    )


def get_cell_color(band: Band, height: float, land_threshold: float) -> tuple[int, int, int]:
    """
    Get the color of one terrain cell.

    Args:
        band: Band the cell's elevation is closest to
        height: Smoothed elevation of the cell
        land_threshold: Elevation from which animals may walk

    Returns:
        RGB color tuple
    """
    if band == Band.SEA:
        # Smoothed sea runs from about -1.2 offshore up to the coast
        return lerp_color(SEA_DEEP, SEA_SHALLOW, height + 1.2)
    if band == Band.LAKE:
        return lerp_color(LAKE_DEEP, LAKE_SHALLOW, height + 0.5)
    if height < land_threshold:
        # Dry enough to draw as land but not walkable
        return SHORE
    # Interior peaks at 11/9 once fully surrounded by land
    return lerp_color(GRASS_LOW, GRASS_HIGH, (height - land_threshold) / (2.0 / 9.0))


def get_entity_color(entity_type: EntityType) -> tuple[int, int, int]:
    return ENTITY_COLORS[entity_type]
