# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Base class for drawing surface backends."""

from abc import ABC, abstractmethod
from typing import Sequence, Tuple

from ..geometry import Point
from ..styles import Color, PaintStyle


class DrawingSurface(ABC):
    """Abstract 2D drawing surface.

    The renderer only calls these primitives; each backend owns its pixel
    buffer and font handling. Text positions are the left end of the
    baseline.
    """

    @property
    @abstractmethod
    def size(self) -> Tuple[int, int]:
        """Surface (width, height) in pixels."""

    @abstractmethod
    def fill_solid(self, color: Color) -> None:
        """Fill the whole surface with an opaque color."""

    @abstractmethod
    def draw_line(self, p1: Point, p2: Point, style: PaintStyle) -> None:
        """Draw a straight line."""

    @abstractmethod
    def draw_path(self, points: Sequence[Point], style: PaintStyle) -> None:
        """Fill a closed path given as its vertices (last point repeats the first)."""

    @abstractmethod
    def draw_text(self, text: str, x: float, y: float, style: PaintStyle) -> None:
        """Draw text with its baseline starting at (x, y)."""

    @abstractmethod
    def text_bounds(self, text: str, style: PaintStyle) -> Tuple[float, float, float, float]:
        """Tight glyph bounds (left, top, right, bottom) relative to the baseline origin."""
