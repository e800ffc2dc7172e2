"""Main entry point for the island simulation."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace

from .config import Config
from .log import setup_logging
from .simulation import World

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Procedural island with wandering animals")
    parser.add_argument("--seed", type=int, default=None, help="random seed (default: random)")
    parser.add_argument("--width", type=int, default=None, help="grid width in cells")
    parser.add_argument("--height", type=int, default=None, help="grid height in cells")
    parser.add_argument("--land", type=int, default=None, help="number of land cells")
    parser.add_argument("--lakes", type=int, default=None, help="total lake cells (0 = none)")
    parser.add_argument("--headless", action="store_true", help="run without a window")
    parser.add_argument("--ticks", type=int, default=100, help="ticks to run when headless")
    parser.add_argument(
        "--log-level", type=str, default=None, choices=["DEBUG", "INFO", "WARNING"]
    )
    return parser


def config_from_args(args: argparse.Namespace) -> Config:
    """Apply command line overrides on top of the default configuration."""
    config = Config.default()

    overrides = {
        "seed": args.seed,
        "width": args.width,
        "height": args.height,
        "land_size": args.land,
        "lake_size": args.lakes,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if overrides:
        config.world = replace(config.world, **overrides)
    if args.log_level:
        config.logging = replace(config.logging, level=args.log_level)

    return config


def run_headless(world: World, ticks: int) -> None:
    """Step the world ``ticks`` times, logging a summary as it goes."""
    report_every = max(1, ticks // 10)
    for _ in range(ticks):
        world.step()
        if world.stats.tick % report_every == 0:
            logger.info(
                "Tick %d: %d/%d animals walking",
                world.stats.tick,
                world.stats.animals_walking,
                world.stats.animals,
            )
    for animal in world.animals:
        logger.info(
            "%s #%d at (%.2f, %.2f) facing %.0f",
            animal.type.name,
            animal.id,
            animal.x,
            animal.z,
            animal.rotation,
        )


def run_window(world: World, config: Config) -> None:
    from .renderer import PygameRenderer

    renderer = PygameRenderer(config.renderer, config.entities.tick_interval_ms)
    renderer.set_world(world)

    print("Controls:")
    print("  - Click 'Run' or press SPACE to start the simulation")
    print("  - Click 'Step' or press RIGHT when paused to advance one tick")
    print("  - ESC to quit")
    print()

    running = True
    while running:
        running = renderer.handle_events()

        for _ in range(renderer.ticks_due(renderer.tick())):
            world.step()

        renderer.render(world)

    renderer.cleanup()
    print("Simulation ended.")


def main(argv: list[str] | None = None) -> None:
    """Run the island simulation."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = config_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    setup_logging(config.logging.level)

    world = World(config.world, config.entities)
    world.initialize()

    if args.headless:
        run_headless(world, args.ticks)
    else:
        run_window(world, config)


if __name__ == "__main__":
    main()
