"""Centralized configuration for the simulation."""

from dataclasses import dataclass

# Lakes smaller than this are only carved when the remaining budget is smaller
MIN_LAKE_SIZE = 4


@dataclass
class WorldConfig:
    """Configuration for terrain generation and placement."""

    width: int = 120
    height: int = 120
    # Number of LAND cells grown from the island center
    land_size: int = 1500
    # Total LAKE cells carved into the land (0 = no lakes)
    lake_size: int = 40
    # Random seed for reproducibility (None = random seed)
    seed: int | None = None
    # Minimum elevation an animal may stand on
    land_threshold: float = 1.0
    # Rejection-sampling tries per entity before giving up on placement
    placement_attempts: int = 200

    def __post_init__(self) -> None:
        """Reject settings that would make generation loop forever."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid must be non-empty, got {self.width}x{self.height}")
        if not 0 < self.land_size < self.width * self.height:
            raise ValueError(
                f"land_size must be in (0, {self.width * self.height}), got {self.land_size}"
            )
        if self.lake_size < 0:
            raise ValueError(f"lake_size must be non-negative, got {self.lake_size}")
        # Lake carving raises any non-zero budget to MIN_LAKE_SIZE + 1 cells
        if self.lake_size and max(self.lake_size, MIN_LAKE_SIZE + 1) >= self.land_size:
            raise ValueError(
                f"lakes need fewer cells than land_size ({self.land_size}) and at least "
                f"{MIN_LAKE_SIZE + 1} once enabled, got lake_size={self.lake_size}"
            )
        if self.placement_attempts <= 0:
            raise ValueError("placement_attempts must be positive")


@dataclass
class EntityConfig:
    """Spawn counts and movement parameters."""

    animals_1: int = 2
    animals_2: int = 2
    plants_1: int = 10
    plants_2: int = 10

    # Distance covered per tick on each axis
    walk_speed: float = 0.25
    # Wall-clock time between ticks in the windowed runner
    tick_interval_ms: int = 1500

    def __post_init__(self) -> None:
        """Validate counts and speed."""
        counts = (self.animals_1, self.animals_2, self.plants_1, self.plants_2)
        if any(count < 0 for count in counts):
            raise ValueError(f"spawn counts must be non-negative, got {counts}")
        if self.walk_speed <= 0:
            raise ValueError(f"walk_speed must be positive, got {self.walk_speed}")
        if self.tick_interval_ms <= 0:
            raise ValueError(f"tick_interval_ms must be positive, got {self.tick_interval_ms}")


@dataclass
class RendererConfig:
    """Configuration for the Pygame renderer."""

    window_width: int = 1000
    window_height: int = 720
    sidebar_width: int = 280
    target_fps: int = 60
    animal_radius: int = 4
    plant_radius: int = 3


@dataclass
class LoggingConfig:
    """Configuration for log output."""

    level: str = "INFO"


@dataclass
class Config:
    """Main configuration container."""

    world: WorldConfig
    entities: EntityConfig
    renderer: RendererConfig
    logging: LoggingConfig

    @classmethod
    def default(cls) -> "Config":
        """Create default configuration."""
        return cls(
            world=WorldConfig(),
            entities=EntityConfig(),
            renderer=RendererConfig(),
            logging=LoggingConfig(),
        )
