# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""pygame drawing backend for the on-screen host."""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

import pygame
import pygame.freetype

from ..geometry import Point
from ..styles import Color, OPAQUE, PaintStyle
from .base import DrawingSurface

logger = logging.getLogger(__name__)


class PygameSurface(DrawingSurface):
    """Draws onto a pygame.Surface (usually the display surface)."""

    def __init__(self, surface: pygame.Surface, font_path: Optional[str] = None):
        """Initialize the backend.

        Args:
            surface: Target surface.
            font_path: TrueType font file, or None for pygame's default font.
        """
        if not pygame.freetype.get_init():
            pygame.freetype.init()
        self._surface = surface
        self._font_path = font_path
        self._font_cache: dict = {}

    @property
    def surface(self) -> pygame.Surface:
        return self._surface

    def set_surface(self, surface: pygame.Surface) -> None:
        """Retarget after the display surface was recreated (e.g. on resize)."""
        self._surface = surface

    @property
    def size(self) -> Tuple[int, int]:
        return self._surface.get_size()

    def get_font(self, size: int) -> pygame.freetype.Font:
        """Get a cached font whose render position is the baseline origin."""
        size = max(1, int(size))
        if size not in self._font_cache:
            font = pygame.freetype.Font(self._font_path, size)
            font.origin = True
            self._font_cache[size] = font
        return self._font_cache[size]

    def _overlay(self, points: Sequence[Point], width: int, style: PaintStyle) -> Optional[Tuple[pygame.Surface, pygame.Rect]]:
        """Transparent layer covering ``points`` for a translucent paint, or None when opaque."""
        if style.alpha >= OPAQUE:
            return None
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        pad = width + 1
        rect = pygame.Rect(
            int(min(xs)) - pad,
            int(min(ys)) - pad,
            int(max(xs) - min(xs)) + 2 * pad + 1,
            int(max(ys) - min(ys)) + 2 * pad + 1,
        ).clip(self._surface.get_rect())
        if rect.width == 0 or rect.height == 0:
            return None
        return pygame.Surface(rect.size, pygame.SRCALPHA), rect

    def fill_solid(self, color: Color) -> None:
        self._surface.fill(color)

    def draw_line(self, p1: Point, p2: Point, style: PaintStyle) -> None:
        width = max(1, int(round(style.stroke_width)))
        overlay = self._overlay((p1, p2), width, style)
        if overlay is not None:
            target, rect = overlay
            p1 = (p1[0] - rect.x, p1[1] - rect.y)
            p2 = (p2[0] - rect.x, p2[1] - rect.y)
        else:
            target, rect = self._surface, None
        if style.antialias and width == 1:
            pygame.draw.aaline(target, style.rgba, p1, p2)
        else:
            pygame.draw.line(target, style.rgba, p1, p2, width)
        if rect is not None:
            self._surface.blit(target, rect.topleft)

    def draw_path(self, points: Sequence[Point], style: PaintStyle) -> None:
        points = list(points)
        overlay = self._overlay(points, 1, style)
        if overlay is not None:
            target, rect = overlay
            points = [(x - rect.x, y - rect.y) for x, y in points]
        else:
            target, rect = self._surface, None
        pygame.draw.polygon(target, style.rgba, points)
        if style.antialias:
            pygame.draw.aalines(target, style.rgba, True, points)
        if rect is not None:
            self._surface.blit(target, rect.topleft)

    def draw_text(self, text: str, x: float, y: float, style: PaintStyle) -> None:
        if not text:
            return
        font = self.get_font(style.font_size)
        font.antialiased = style.antialias
        font.render_to(self._surface, (int(round(x)), int(round(y))), text, fgcolor=style.rgba)

    def text_bounds(self, text: str, style: PaintStyle) -> Tuple[float, float, float, float]:
        if not text:
            return (0.0, 0.0, 0.0, 0.0)
        rect = self.get_font(style.font_size).get_rect(text)
        # freetype reports rect.y as the distance from the baseline up to the top
        return (float(rect.x), float(-rect.y), float(rect.x + rect.width), float(rect.height - rect.y))
