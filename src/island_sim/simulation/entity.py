"""Entities - plants and animals living on the island."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Sequence

from .heightfield import LAND

if TYPE_CHECKING:
    from .heightfield import HeightField
    from .spatial import PlantIndex

# Default threshold below which a cell is sea or lake for walking purposes
LAND_THRESHOLD = LAND

# Candidate steps from the current cell; rotation is 45 degrees per index
NEIGHBOR_STEPS = (
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (-1, -1),
    (0, -1),
    (1, -1),
)
DEGREES_PER_STEP = 45.0


class EntityType(Enum):
    """Kinds of entity that can be placed."""

    ANIMAL_1 = auto()
    ANIMAL_2 = auto()
    PLANT_1 = auto()
    PLANT_2 = auto()

    @property
    def is_plant(self) -> bool:
        return self in (EntityType.PLANT_1, EntityType.PLANT_2)

    @property
    def is_animal(self) -> bool:
        return not self.is_plant


class ModeKind(Enum):
    """Behavior states of an animal."""

    IDLE = auto()
    WALKING = auto()


@dataclass(frozen=True)
class EntityMode:
    """Current mode; ``target`` is set only while walking."""

    kind: ModeKind = ModeKind.IDLE
    target: tuple[float, float] | None = None

    @classmethod
    def idle(cls) -> EntityMode:
        return cls(ModeKind.IDLE)

    @classmethod
    def walking_to(cls, x: float, z: float) -> EntityMode:
        return cls(ModeKind.WALKING, (float(x), float(z)))

    @property
    def is_idle(self) -> bool:
        return self.kind == ModeKind.IDLE


IDLE = EntityMode.idle()


def step_toward(current: float, target: float, speed: float) -> float:
    """Move one coordinate toward ``target`` by at most ``speed``."""
    delta = target - current
    if abs(delta) <= speed:
        return target
    return current + speed if delta > 0 else current - speed


@dataclass
class Entity:
    """
    A plant or animal on the island.

    ``y`` mirrors the terrain elevation under the entity and is refreshed
    from the height field whenever the entity is placed or moves; the grid
    position is ``(x, z)``. Plants never leave the idle mode. Animals cycle
    idle -> walking -> idle through ``change_mode``, one call per tick.
    """

    x: float
    y: float
    z: float
    type: EntityType
    rotation: float = 0.0
    mode: EntityMode = IDLE

    # Unique identifier
    _id_counter: int = field(default=0, repr=False, init=False)
    id: int = field(default=-1, init=False)

    def __post_init__(self) -> None:
        Entity._id_counter += 1
        self.id = Entity._id_counter

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return self.id == other.id

    @property
    def position(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @property
    def cell(self) -> tuple[int, int]:
        """Integer grid cell the entity stands in."""
        return (int(self.x), int(self.z))

    @property
    def is_plant(self) -> bool:
        return self.type.is_plant

    @property
    def is_walking(self) -> bool:
        return not self.mode.is_idle

    def valid_moves(
        self,
        terrain: HeightField,
        plants: PlantIndex,
        peers: Sequence[tuple[float, float]],
        threshold: float = LAND_THRESHOLD,
    ) -> list[int]:
        """
        Indices into ``NEIGHBOR_STEPS`` of the cells this entity may step to.

        A cell is valid when it lies on the grid, is high enough to be dry
        land, and no plant or animal stands on it. ``peers`` holds the
        ``(x, z)`` of every animal as of the start of the tick.
        """
        cx, cz = self.cell
        valid = []
        for index, (dx, dz) in enumerate(NEIGHBOR_STEPS):
            x, z = cx + dx, cz + dz
            if not terrain.is_passable(x, z, threshold):
                continue
            if plants.collides_at(x, z):
                continue
            if any(px == x and pz == z for px, pz in peers):
                continue
            valid.append(index)
        return valid

    def change_mode(
        self,
        terrain: HeightField,
        plants: PlantIndex,
        peers: Sequence[tuple[float, float]],
        rng: random.Random,
        speed: float,
        threshold: float = LAND_THRESHOLD,
    ) -> None:
        """Advance this entity by one tick."""
        if self.is_plant:
            return

        if self.mode.is_idle:
            self._choose_target(terrain, plants, peers, rng, threshold)
        else:
            self._walk(terrain, speed)

    def _choose_target(
        self,
        terrain: HeightField,
        plants: PlantIndex,
        peers: Sequence[tuple[float, float]],
        rng: random.Random,
        threshold: float,
    ) -> None:
        moves = self.valid_moves(terrain, plants, peers, threshold)
        if not moves:
            return

        index = rng.choice(moves)
        dx, dz = NEIGHBOR_STEPS[index]
        cx, cz = self.cell
        self.mode = EntityMode.walking_to(cx + dx, cz + dz)
        self.rotation = index * DEGREES_PER_STEP

    def _walk(self, terrain: HeightField, speed: float) -> None:
        target_x, target_z = self.mode.target
        if self.x == target_x and self.z == target_z:
            self.mode = IDLE
            return

        # Axes move independently, so diagonal steps cover more ground
        self.x = step_toward(self.x, target_x, speed)
        self.z = step_toward(self.z, target_z, speed)
        if terrain.in_bounds(int(self.x), int(self.z)):
            self.y = terrain.height_at(self.x, self.z)
