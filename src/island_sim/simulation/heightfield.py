"""Height grid for the island - land growth, lake carving and smoothing."""

from __future__ import annotations

import logging
import random
from enum import Enum, auto
from typing import Iterator

import numpy as np

from ..config import MIN_LAKE_SIZE

logger = logging.getLogger(__name__)

SEA = -1.0
LAKE = 0.0
LAND = 1.0

# Smoothing kernel weights
NEIGHBOR_WEIGHT = 1.0 / 9.0
CENTER_WEIGHT = 1.0 / 3.0

OFFSETS_4 = ((0, -1), (-1, 0), (1, 0), (0, 1))
OFFSETS_8 = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0), (1, 0),
    (-1, 1), (0, 1), (1, 1),
)


class Band(Enum):
    """Semantic classification of an elevation value."""

    SEA = auto()
    LAKE = auto()
    LAND = auto()


class HeightField:
    """
    A fixed-size grid of elevations indexed ``[x, z]``.

    Cells start at a single value (usually SEA) and are reshaped by
    ``grow_land`` and ``grow_lakes``. ``smooth`` produces the final,
    continuous terrain as a new field. Every random decision is drawn from
    the ``random.Random`` passed in, so a seeded generator gives a
    reproducible island.
    """

    def __init__(self, width: int, height: int, default: float = SEA):
        """
        Create a grid with every cell set to ``default``.

        Args:
            width: Number of cells along x
            height: Number of cells along z
            default: Initial elevation of every cell
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"height field must be non-empty, got {width}x{height}")
        self._width = width
        self._height = height
        self.cells = np.full((width, height), default, dtype=np.float64)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def center(self) -> tuple[int, int]:
        """The cell land growth starts from."""
        return (self._width // 2, self._height // 2)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeightField):
            return NotImplemented
        return self.cells.shape == other.cells.shape and bool(np.array_equal(self.cells, other.cells))

    def __repr__(self) -> str:
        return f"HeightField({self._width}x{self._height})"

    @classmethod
    def from_cells(cls, cells: np.ndarray) -> HeightField:
        """Wrap an existing ``(width, height)`` array without copying it."""
        width, height = cells.shape
        if width <= 0 or height <= 0:
            raise ValueError(f"height field must be non-empty, got {width}x{height}")
        field = cls.__new__(cls)
        field._width = width
        field._height = height
        field.cells = cells
        return field

    def copy(self) -> HeightField:
        return HeightField.from_cells(self.cells.copy())

    # -- queries --

    def in_bounds(self, x: int, z: int) -> bool:
        return 0 <= x < self._width and 0 <= z < self._height

    def height_at(self, x: float, z: float) -> float:
        """Elevation of the cell containing (x, z). Caller keeps it in bounds."""
        return float(self.cells[int(x), int(z)])

    def is_passable(self, x: int, z: int, threshold: float = LAND) -> bool:
        """Check if an animal may stand on the cell."""
        return self.in_bounds(x, z) and self.cells[x, z] >= threshold

    def band_at(self, x: int, z: int) -> Band:
        """Classify a cell by the band its elevation is closest to."""
        value = self.cells[x, z]
        if value < (SEA + LAKE) / 2:
            return Band.SEA
        if value < (LAKE + LAND) / 2:
            return Band.LAKE
        return Band.LAND

    def count(self, value: float) -> int:
        """Number of cells exactly equal to ``value``."""
        return int(np.count_nonzero(self.cells == value))

    def neighbors4(self, x: int, z: int) -> Iterator[tuple[int, int]]:
        """In-bounds N/S/E/W neighbors."""
        for dx, dz in OFFSETS_4:
            if self.in_bounds(x + dx, z + dz):
                yield (x + dx, z + dz)

    def neighbors8(self, x: int, z: int) -> Iterator[tuple[int, int]]:
        """In-bounds neighbors including diagonals."""
        for dx, dz in OFFSETS_8:
            if self.in_bounds(x + dx, z + dz):
                yield (x + dx, z + dz)

    # -- land --

    def grow_land(self, target_count: int, rng: random.Random) -> None:
        """
        Grow a connected island from the center cell.

        Random cells are drawn until one is found that is not land but
        touches land on a N/S/E/W side; that cell becomes land. Repeats until
        ``target_count`` land cells exist.

        ``target_count`` must stay below ``width * height`` or this never
        returns.
        """
        cx, cz = self.center
        self.cells[cx, cz] = LAND
        land_count = self.count(LAND)

        while land_count < target_count:
            x = rng.randrange(self._width)
            z = rng.randrange(self._height)
            if self._can_become_land(x, z):
                self.cells[x, z] = LAND
                land_count += 1

        logger.debug("Grew %d land cells on %r", land_count, self)

    def _can_become_land(self, x: int, z: int) -> bool:
        if self.cells[x, z] == LAND:
            return False
        return any(self.cells[nx, nz] == LAND for nx, nz in self.neighbors4(x, z))

    # -- lakes --

    def grow_lakes(
        self,
        total_lake_cells: int,
        rng: random.Random,
        min_lake_size: int = MIN_LAKE_SIZE,
    ) -> int:
        """
        Carve lakes into the land until ``total_lake_cells`` cells are lake.

        The total is raised to at least ``min_lake_size + 1``. Each lake
        starts from a random land cell with no sea around it and spreads
        through a frontier of candidate cells picked at random. A cell only
        becomes lake while none of its eight neighbors is sea, so lakes
        never merge into the ocean.

        An island too thin to hold the budget keeps the lakes carved so far:
        once no land cell is clear of the sea, carving stops with a warning.

        Returns:
            The number of separate lakes seeded
        """
        total = max(total_lake_cells, min_lake_size + 1)
        carved = 0
        lakes = 0

        while carved < total:
            remaining = total - carved
            lake_target = max(1, rng.randint(min(min_lake_size, remaining), remaining))
            seed = self._random_lake_seed(rng)
            if seed is None:
                logger.warning(
                    "No inland cell left for a lake: carved %d of %d lake cells", carved, total
                )
                break
            size = self._grow_lake(seed, lake_target, rng)
            carved += size
            lakes += 1
            logger.debug("Lake %d at %s: %d/%d cells", lakes, seed, size, lake_target)

        return lakes

    def _is_lake_candidate(self, x: int, z: int) -> bool:
        if not self.in_bounds(x, z) or self.cells[x, z] != LAND:
            return False
        return all(self.cells[nx, nz] != SEA for nx, nz in self.neighbors8(x, z))

    def _lake_candidates(self) -> np.ndarray:
        """Mask of land cells with no sea among their eight neighbors."""
        w, h = self._width, self._height
        # Cells past the border are not sea
        sea = np.pad(self.cells == SEA, 1, mode="constant", constant_values=False)
        near_sea = np.zeros((w, h), dtype=bool)
        for dx, dz in OFFSETS_8:
            near_sea |= sea[1 + dx:1 + dx + w, 1 + dz:1 + dz + h]
        return (self.cells == LAND) & ~near_sea

    def _random_lake_seed(self, rng: random.Random) -> tuple[int, int] | None:
        xs, zs = np.nonzero(self._lake_candidates())
        if len(xs) == 0:
            return None
        i = rng.randrange(len(xs))
        return (int(xs[i]), int(zs[i]))

    def _grow_lake(self, seed: tuple[int, int], target: int, rng: random.Random) -> int:
        x, z = seed
        self.cells[x, z] = LAKE
        size = 1
        frontier = list(self.neighbors8(x, z))

        while size < target and frontier:
            # Swap a random candidate to the end so pop() stays O(1)
            i = rng.randrange(len(frontier))
            frontier[i], frontier[-1] = frontier[-1], frontier[i]
            cx, cz = frontier.pop()

            if not self._is_lake_candidate(cx, cz):
                continue

            self.cells[cx, cz] = LAKE
            size += 1
            frontier.extend(self.neighbors8(cx, cz))

        return size

    # -- smoothing --

    def smooth(self) -> HeightField:
        """
        Return a blurred copy of the field.

        Each cell becomes a third of itself plus a ninth of each of its eight
        neighbors. Neighbors outside the grid contribute nothing, so border
        cells sum fewer terms. The weights add up to more than one, which
        raises the island interior above LAND.
        """
        w, h = self._width, self._height
        padded = np.pad(self.cells, 1, mode="constant", constant_values=0.0)

        neighbor_sum = np.zeros_like(self.cells)
        for dx, dz in OFFSETS_8:
            neighbor_sum += padded[1 + dx:1 + dx + w, 1 + dz:1 + dz + h]

        neighbor_sum *= NEIGHBOR_WEIGHT
        neighbor_sum += self.cells * CENTER_WEIGHT
        return HeightField.from_cells(neighbor_sum)
