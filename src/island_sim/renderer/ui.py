"""Sidebar widgets for the island renderer."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable

import pygame


class SimulationMode(Enum):
    """Whether ticks advance on their own."""

    RUNNING = auto()
    PAUSED = auto()


@dataclass
class UIColors:
    """Color scheme for sidebar widgets."""

    bg: tuple[int, int, int] = (30, 32, 40)
    bg_hover: tuple[int, int, int] = (45, 48, 58)
    bg_pressed: tuple[int, int, int] = (55, 58, 70)
    accent: tuple[int, int, int] = (100, 180, 255)
    accent_dim: tuple[int, int, int] = (60, 100, 140)
    text: tuple[int, int, int] = (220, 225, 235)
    chart_walking: tuple[int, int, int] = (255, 170, 80)
    chart_idle: tuple[int, int, int] = (120, 200, 140)
    chart_bg: tuple[int, int, int] = (25, 27, 35)


UI_COLORS = UIColors()


class Sparkline:
    """A small line chart of recent values."""

    def __init__(self, rect: pygame.Rect, color: tuple[int, int, int] = UI_COLORS.chart_walking):
        self.rect = rect
        self.color = color

    def render(
        self,
        surface: pygame.Surface,
        data: Sequence[float],
        min_val: float = 0.0,
        max_val: float | None = None,
    ) -> None:
        pygame.draw.rect(surface, UI_COLORS.chart_bg, self.rect, border_radius=3)
        if len(data) < 2:
            return

        top = max(data) if max_val is None else max_val
        span = top - min_val if top > min_val else 1.0
        inner = self.rect.inflate(-4, -4)

        points = [
            (
                inner.x + i * inner.width // (len(data) - 1),
                inner.y + int((1 - (value - min_val) / span) * inner.height),
            )
            for i, value in enumerate(data)
        ]
        pygame.draw.lines(surface, self.color, False, points, 2)


class Button:
    """A clickable, optionally toggling, button."""

    def __init__(
        self,
        rect: pygame.Rect,
        text: str,
        on_click: Callable[[], None] | None = None,
        active: bool = False,
    ):
        self.rect = rect
        self.text = text
        self.on_click = on_click
        self.active = active
        self.hovered = False
        self.pressed = False

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Returns True if the event was consumed."""
        if event.type == pygame.MOUSEMOTION:
            self.hovered = self.rect.collidepoint(event.pos)
            return False

        if getattr(event, "button", None) != 1:
            return False

        if event.type == pygame.MOUSEBUTTONDOWN and self.rect.collidepoint(event.pos):
            self.pressed = True
            return True

        if event.type == pygame.MOUSEBUTTONUP and self.pressed:
            self.pressed = False
            if self.rect.collidepoint(event.pos):
                if self.on_click:
                    self.on_click()
                return True
        return False

    def render(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        if self.active:
            bg_color = UI_COLORS.accent
        elif self.pressed:
            bg_color = UI_COLORS.bg_pressed
        elif self.hovered:
            bg_color = UI_COLORS.bg_hover
        else:
            bg_color = UI_COLORS.bg

        pygame.draw.rect(surface, bg_color, self.rect, border_radius=4)
        border = UI_COLORS.accent if self.active else UI_COLORS.accent_dim
        pygame.draw.rect(surface, border, self.rect, width=1, border_radius=4)

        label = font.render(self.text, True, UI_COLORS.bg if self.active else UI_COLORS.text)
        surface.blit(label, label.get_rect(center=self.rect.center))


class SpeedSelector:
    """Row of buttons choosing how fast ticks fire."""

    SPEEDS = (0.5, 1.0, 2.0, 5.0, 10.0)

    def __init__(
        self,
        x: int,
        y: int,
        button_width: int = 44,
        button_height: int = 24,
        on_change: Callable[[float], None] | None = None,
    ):
        self.on_change = on_change
        self.speed = 1.0
        self.buttons = [
            Button(
                pygame.Rect(x + i * (button_width + 4), y, button_width, button_height),
                f"{speed:g}x",
                on_click=lambda s=speed: self.set_speed(s),
                active=speed == self.speed,
            )
            for i, speed in enumerate(self.SPEEDS)
        ]

    def set_speed(self, speed: float) -> None:
        self.speed = speed
        for btn, value in zip(self.buttons, self.SPEEDS):
            btn.active = value == speed
        if self.on_change:
            self.on_change(speed)

    def handle_event(self, event: pygame.event.Event) -> bool:
        return any(btn.handle_event(event) for btn in self.buttons)

    def render(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        for btn in self.buttons:
            btn.render(surface, font)
