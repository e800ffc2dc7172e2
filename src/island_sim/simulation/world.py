"""World simulation - owns the island terrain, plants and animals."""

from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Iterator

from ..config import EntityConfig, WorldConfig
from .entity import Entity, EntityType
from .heightfield import LAKE, LAND, SEA, HeightField
from .spatial import PlantIndex

logger = logging.getLogger(__name__)


@dataclass
class WorldStats:
    """Statistics about the current world state."""

    tick: int = 0
    plants: int = 0
    animals: int = 0
    animals_walking: int = 0
    animals_idle: int = 0
    # Cell counts recorded before smoothing blurs the bands
    land_cells: int = 0
    lake_cells: int = 0
    lakes: int = 0
    failed_placements: int = 0


class StatsHistory:
    """Tracks per-tick statistics for charting."""

    def __init__(self, max_length: int = 300):
        self.max_length = max_length
        self.walking: deque[int] = deque(maxlen=max_length)
        self.idle: deque[int] = deque(maxlen=max_length)

    def record(self, stats: WorldStats) -> None:
        self.walking.append(stats.animals_walking)
        self.idle.append(stats.animals_idle)


class World:
    """
    The island and everything living on it.

    Manages:
    - Terrain generation (land growth, lake carving, smoothing)
    - Placement of plants into the plant tree and animals into a flat list
    - Ticking every animal against a start-of-tick snapshot of its peers
    """

    def __init__(
        self,
        world_config: WorldConfig,
        entity_config: EntityConfig,
        rng: random.Random | None = None,
    ):
        """
        Initialize the world.

        Args:
            world_config: Terrain and placement parameters
            entity_config: Spawn counts and movement parameters
            rng: Random source; built from the configured seed when omitted.
                An injected source has no known seed, so ``seed`` is None.
        """
        self.config = world_config
        self.entity_config = entity_config
        self.width = world_config.width
        self.height = world_config.height

        # Seeded random number generator for reproducibility
        self.seed: int | None
        if rng is not None:
            self.seed = None
            self.rng = rng
        else:
            if world_config.seed is not None:
                self.seed = world_config.seed
            else:
                self.seed = random.randint(0, 2**31 - 1)
            self.rng = random.Random(self.seed)

        self.terrain = HeightField(self.width, self.height, SEA)
        self.plants = PlantIndex()
        self.animals: list[Entity] = []

        self.stats = WorldStats()
        self.stats_history = StatsHistory()

    # -- generation --

    def generate_terrain(self) -> HeightField:
        """Grow the island, carve its lakes and smooth the result."""
        raw = HeightField(self.width, self.height, SEA)
        raw.grow_land(self.config.land_size, self.rng)
        if self.config.lake_size > 0:
            self.stats.lakes = raw.grow_lakes(self.config.lake_size, self.rng)

        self.stats.land_cells = raw.count(LAND)
        self.stats.lake_cells = raw.count(LAKE)
        self.terrain = raw.smooth()

        logger.info(
            "Generated %dx%d island: %d land cells, %d lake cells in %d lakes",
            self.width,
            self.height,
            self.stats.land_cells,
            self.stats.lake_cells,
            self.stats.lakes,
        )
        return self.terrain

    # -- placement --

    def fix_position(self, entity: Entity) -> None:
        """Set the entity's elevation from the terrain under it."""
        x, z = entity.cell
        if entity.x >= 0 and entity.z >= 0 and self.terrain.in_bounds(x, z):
            entity.y = self.terrain.height_at(x, z)

    def add_entity(self, entity: Entity) -> None:
        """Place an entity: plants into the tree, animals into the list."""
        self.fix_position(entity)
        if entity.is_plant:
            self.plants.insert(entity)
        else:
            self.animals.append(entity)

    def is_occupied(self, x: float, z: float) -> bool:
        """Check if a plant or animal stands at exactly (x, z)."""
        if self.plants.collides_at(x, z):
            return True
        return any(a.x == x and a.z == z for a in self.animals)

    def _find_free_cell(self) -> tuple[int, int] | None:
        threshold = self.config.land_threshold
        for _ in range(self.config.placement_attempts):
            x = self.rng.randrange(self.width)
            z = self.rng.randrange(self.height)
            if self.terrain.is_passable(x, z, threshold) and not self.is_occupied(x, z):
                return (x, z)
        return None

    def create_entities(self, count: int, entity_type: EntityType) -> list[Entity]:
        """
        Scatter ``count`` entities of one type onto free dry land.

        An entity that finds no free cell within the attempt budget is
        skipped with a warning.

        Returns the entities actually placed.
        """
        placed: list[Entity] = []
        for _ in range(count):
            cell = self._find_free_cell()
            if cell is None:
                self.stats.failed_placements += 1
                logger.warning(
                    "No free land for %s after %d attempts",
                    entity_type.name,
                    self.config.placement_attempts,
                )
                continue

            entity = Entity(x=float(cell[0]), y=0.0, z=float(cell[1]), type=entity_type)
            if entity_type.is_plant:
                entity.rotation = self.rng.uniform(0.0, 360.0)
            self.add_entity(entity)
            placed.append(entity)

        logger.debug("Placed %d/%d %s", len(placed), count, entity_type.name)
        return placed

    def populate(self) -> None:
        """Spawn the configured number of each entity type."""
        counts = (
            (EntityType.PLANT_1, self.entity_config.plants_1),
            (EntityType.PLANT_2, self.entity_config.plants_2),
            (EntityType.ANIMAL_1, self.entity_config.animals_1),
            (EntityType.ANIMAL_2, self.entity_config.animals_2),
        )
        for entity_type, count in counts:
            self.create_entities(count, entity_type)

    def initialize(self) -> None:
        """Generate the terrain and spawn the starting population."""
        self.generate_terrain()
        self.populate()
        self._update_stats()
        self.stats_history.record(self.stats)

        logger.info(
            "World ready (seed %s): %d plants, %d animals, plant tree depth %d",
            "injected" if self.seed is None else self.seed,
            self.stats.plants,
            self.stats.animals,
            self.plants.depth(),
        )

    # -- ticking --

    def advance_animals(self) -> None:
        """
        Run one mode transition for every animal.

        Peer positions are copied once up front so every animal decides
        against where the others stood when the tick began.
        """
        snapshot = [(a.x, a.z) for a in self.animals]
        for animal in self.animals:
            animal.change_mode(
                self.terrain,
                self.plants,
                snapshot,
                self.rng,
                self.entity_config.walk_speed,
                self.config.land_threshold,
            )

    def step(self) -> None:
        """Advance the simulation by one tick."""
        self.stats.tick += 1
        self.advance_animals()
        self._update_stats()
        self.stats_history.record(self.stats)

        logger.debug(
            "Tick %d: %d walking, %d idle",
            self.stats.tick,
            self.stats.animals_walking,
            self.stats.animals_idle,
        )

    def _update_stats(self) -> None:
        self.stats.plants = len(self.plants)
        self.stats.animals = len(self.animals)
        self.stats.animals_walking = sum(1 for a in self.animals if a.is_walking)
        self.stats.animals_idle = self.stats.animals - self.stats.animals_walking

    # -- read access --

    def entities(self) -> Iterator[Entity]:
        """Every entity: plants in tree order, then animals."""
        yield from self.plants
        yield from self.animals
