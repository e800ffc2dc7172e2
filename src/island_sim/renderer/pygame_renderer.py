"""Pygame-CE renderer for a top-down view of the island."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import pygame

from ..config import RendererConfig
from . import colors
from .ui import UI_COLORS, Button, SimulationMode, Sparkline, SpeedSelector

if TYPE_CHECKING:
    from ..simulation.entity import Entity
    from ..simulation.world import World

SIDEBAR_TOP = 46
DIVIDER_GAP = 8
CHART_HEIGHT = 32
CHART_GAP = 4


class PygameRenderer:
    """
    Pygame-based renderer for the island simulation.

    Renders:
    - The smoothed height field, one colored block per cell
    - Plants and animals as markers, animals with a facing line
    - Sidebar with tick controls, counts and charts of walking and idle animals

    Terrain is read-only once generated, so it is drawn to an off-screen
    surface once and blitted every frame.
    """

    def __init__(self, config: RendererConfig, tick_interval_ms: int):
        """
        Initialize the renderer.

        Args:
            config: Renderer configuration
            tick_interval_ms: Wall-clock time between ticks at 1x speed
        """
        self.config = config
        self.tick_interval_ms = tick_interval_ms
        self.sidebar_width = config.sidebar_width
        self.view_width = config.window_width - config.sidebar_width
        self.view_height = config.window_height

        pygame.init()
        pygame.display.set_caption("Island")

        self.screen = pygame.display.set_mode((config.window_width, config.window_height))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 20)
        self.font_header = pygame.font.Font(None, 24)

        self._world_surface = pygame.Surface((self.view_width, self.view_height))
        self._sidebar_surface = pygame.Surface((self.sidebar_width, self.view_height))
        self._terrain_surface: pygame.Surface | None = None

        # World -> screen scale, set once the world is known
        self.scale_x = 1.0
        self.scale_y = 1.0

        self.mode = SimulationMode.PAUSED
        self.speed_multiplier = 1.0
        self._elapsed_ms = 0.0
        self._pending_steps = 0

        self._init_ui()

    def _init_ui(self) -> None:
        padding = 15
        btn_width = 70
        self.btn_run = Button(
            pygame.Rect(padding, 10, btn_width, 26), "Run",
            on_click=lambda: self.set_mode(SimulationMode.RUNNING),
        )
        self.btn_pause = Button(
            pygame.Rect(padding + btn_width + 4, 10, btn_width, 26), "Pause",
            on_click=lambda: self.set_mode(SimulationMode.PAUSED), active=True,
        )
        self.btn_step = Button(
            pygame.Rect(padding + (btn_width + 4) * 2, 10, btn_width, 26), "Step",
            on_click=self._on_step_click,
        )
        self.buttons = [self.btn_run, self.btn_pause, self.btn_step]

        chart_y, speed_y = self._sidebar_layout()
        chart_width = self.sidebar_width - padding * 2
        self.chart_walking = Sparkline(pygame.Rect(padding, chart_y, chart_width, CHART_HEIGHT))
        self.chart_idle = Sparkline(
            pygame.Rect(padding, chart_y + CHART_HEIGHT + CHART_GAP, chart_width, CHART_HEIGHT),
            UI_COLORS.chart_idle,
        )
        self.speed_selector = SpeedSelector(padding, speed_y, on_change=self._on_speed_change)

    def _line_height(self, font: pygame.font.Font) -> int:
        return font.get_height() + 4

    def _sidebar_layout(self) -> tuple[int, int]:
        """Y of the charts and of the speed selector, matching ``_render_sidebar``."""
        line = self._line_height(self.font)
        header = self._line_height(self.font_header)
        y = SIDEBAR_TOP + 2 * line + DIVIDER_GAP
        y += header + 3 * line + DIVIDER_GAP
        y += header + 2 * line
        chart_y = y
        y += 2 * CHART_HEIGHT + CHART_GAP + 8 + DIVIDER_GAP
        return chart_y, y + header

    def set_world(self, world: World) -> None:
        """Bind a freshly initialized world and pre-render its terrain."""
        self.scale_x = self.view_width / world.width
        self.scale_y = self.view_height / world.height
        self._terrain_surface = self._draw_terrain(world)

    def set_mode(self, mode: SimulationMode) -> None:
        self.mode = mode
        self.btn_run.active = mode == SimulationMode.RUNNING
        self.btn_pause.active = mode == SimulationMode.PAUSED
        self._elapsed_ms = 0.0

    def _on_speed_change(self, speed: float) -> None:
        self.speed_multiplier = speed

    def _on_step_click(self) -> None:
        if self.mode == SimulationMode.PAUSED:
            self._pending_steps += 1

    def handle_events(self) -> bool:
        """
        Handle Pygame events.

        Returns:
            False if the window should close, True otherwise.
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return False
                if event.key == pygame.K_SPACE:
                    self.set_mode(
                        SimulationMode.PAUSED
                        if self.mode == SimulationMode.RUNNING
                        else SimulationMode.RUNNING
                    )
                elif event.key == pygame.K_RIGHT:
                    self._on_step_click()

            if any(btn.handle_event(event) for btn in self.buttons):
                continue
            self.speed_selector.handle_event(event)

        return True

    def ticks_due(self, elapsed_ms: float) -> int:
        """Number of simulation ticks to run for this frame."""
        if self.mode == SimulationMode.PAUSED:
            steps, self._pending_steps = self._pending_steps, 0
            return steps

        self._elapsed_ms += elapsed_ms * self.speed_multiplier
        steps = int(self._elapsed_ms // self.tick_interval_ms)
        self._elapsed_ms -= steps * self.tick_interval_ms
        return steps

    # -- drawing --

    def _cell_rect(self, x: int, z: int) -> pygame.Rect:
        left = int(x * self.scale_x)
        top = int(z * self.scale_y)
        return pygame.Rect(
            left,
            top,
            int((x + 1) * self.scale_x) - left or 1,
            int((z + 1) * self.scale_y) - top or 1,
        )

    def _draw_terrain(self, world: World) -> pygame.Surface:
        surface = pygame.Surface((self.view_width, self.view_height))
        terrain = world.terrain
        threshold = world.config.land_threshold
        for x in range(terrain.width):
            for z in range(terrain.height):
                color = colors.get_cell_color(
                    terrain.band_at(x, z), terrain.height_at(x, z), threshold
                )
                surface.fill(color, self._cell_rect(x, z))
        return surface

    def _to_screen(self, entity: Entity) -> tuple[int, int]:
        # Markers sit at the center of the cell the entity is in
        return (
            int((entity.x + 0.5) * self.scale_x),
            int((entity.z + 0.5) * self.scale_y),
        )

    def _draw_plant(self, plant: Entity) -> None:
        center = self._to_screen(plant)
        radius = self.config.plant_radius
        pygame.draw.circle(self._world_surface, colors.get_entity_color(plant.type), center, radius)

    def _draw_animal(self, animal: Entity) -> None:
        center = self._to_screen(animal)
        radius = self.config.animal_radius
        color = colors.get_entity_color(animal.type)
        pygame.draw.circle(self._world_surface, color, center, radius)
        if animal.is_walking:
            pygame.draw.circle(self._world_surface, colors.WALKING_OUTLINE, center, radius, 1)

        heading = math.radians(animal.rotation)
        tip = (
            center[0] + int(math.cos(heading) * (radius + 4)),
            center[1] + int(math.sin(heading) * (radius + 4)),
        )
        pygame.draw.line(self._world_surface, color, center, tip, 2)

    def render(self, world: World) -> None:
        """Render the current state of the world."""
        self.screen.fill(colors.BG_DARK)

        if self._terrain_surface is None:
            self.set_world(world)
        self._world_surface.blit(self._terrain_surface, (0, 0))

        world.plants.for_each(self._draw_plant)
        for animal in world.animals:
            self._draw_animal(animal)

        self._render_sidebar(world)

        self.screen.blit(self._world_surface, (self.sidebar_width, 0))
        self.screen.blit(self._sidebar_surface, (0, 0))
        pygame.display.flip()

    def _text(self, text: str, y: int, color=colors.TEXT_SECONDARY, font=None) -> int:
        font = font or self.font
        self._sidebar_surface.blit(font.render(text, True, color), (12, y))
        return y + self._line_height(font)

    def _divider(self, y: int) -> int:
        pygame.draw.line(
            self._sidebar_surface, colors.DIVIDER, (12, y), (self.sidebar_width - 12, y)
        )
        return y + DIVIDER_GAP

    def _render_sidebar(self, world: World) -> None:
        self._sidebar_surface.fill(colors.BG_SIDEBAR)
        pygame.draw.line(
            self._sidebar_surface,
            colors.DIVIDER,
            (self.sidebar_width - 1, 0),
            (self.sidebar_width - 1, self.view_height),
            2,
        )

        for btn in self.buttons:
            btn.render(self._sidebar_surface, self.font)
        y = SIDEBAR_TOP

        stats = world.stats
        y = self._text(f"Tick: {stats.tick:,}   FPS: {self.clock.get_fps():.0f}", y)
        y = self._text(f"Seed: {'injected' if world.seed is None else world.seed}", y)
        y = self._divider(y)

        y = self._text("ISLAND", y, UI_COLORS.accent, self.font_header)
        y = self._text(f"Grid: {world.width} x {world.height}", y, colors.TEXT_PRIMARY)
        y = self._text(f"Land cells: {stats.land_cells}", y, colors.TEXT_PRIMARY)
        y = self._text(f"Lake cells: {stats.lake_cells} ({stats.lakes} lakes)", y, colors.TEXT_PRIMARY)
        y = self._divider(y)

        y = self._text("LIFE", y, UI_COLORS.accent, self.font_header)
        y = self._text(f"Plants: {stats.plants}", y, colors.TEXT_PRIMARY)
        y = self._text(
            f"Animals: {stats.animals} ({stats.animals_walking} walking)", y, colors.TEXT_PRIMARY
        )
        history = world.stats_history
        top = max(1, stats.animals)
        self.chart_walking.render(self._sidebar_surface, list(history.walking), max_val=top)
        self.chart_idle.render(self._sidebar_surface, list(history.idle), max_val=top)
        y = self.chart_idle.rect.bottom + 8
        y = self._divider(y)

        y = self._text("SPEED", y, UI_COLORS.accent, self.font_header)
        self.speed_selector.render(self._sidebar_surface, self.font)
        y += 34
        y = self._divider(y)

        for hint in ("SPACE pause/resume", "RIGHT step", "ESC quit"):
            y = self._text(hint, y)

    def tick(self) -> float:
        """
        Advance the renderer clock.

        Returns:
            Milliseconds elapsed since the previous frame.
        """
        return float(self.clock.tick(self.config.target_fps))

    def cleanup(self) -> None:
        pygame.quit()
