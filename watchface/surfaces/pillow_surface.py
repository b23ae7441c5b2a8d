# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Pillow drawing backend for headless frame snapshots."""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

from ..geometry import Point
from ..styles import Color, PaintStyle
from .base import DrawingSurface

logger = logging.getLogger(__name__)


class PillowSurface(DrawingSurface):
    """Draws onto an RGB PIL image.

    The drawing context runs in RGBA mode so translucent paints blend with
    what is already on the image.
    """

    def __init__(self, width: int, height: int, font_path: Optional[str] = None):
        self._image = Image.new("RGB", (width, height), (0, 0, 0))
        self._draw = ImageDraw.Draw(self._image, "RGBA")
        self._font_path = font_path
        self._font_cache: dict = {}

    @property
    def image(self) -> Image.Image:
        return self._image

    @property
    def size(self) -> Tuple[int, int]:
        return self._image.size

    def get_font(self, size: int) -> ImageFont.FreeTypeFont:
        """Get a cached TrueType font (Pillow's bundled font when no path is set)."""
        size = max(1, int(size))
        if size not in self._font_cache:
            if self._font_path:
                self._font_cache[size] = ImageFont.truetype(self._font_path, size)
            else:
                self._font_cache[size] = ImageFont.load_default(size=size)
        return self._font_cache[size]

    def fill_solid(self, color: Color) -> None:
        self._draw.rectangle((0, 0, self._image.width, self._image.height), fill=tuple(color))

    def draw_line(self, p1: Point, p2: Point, style: PaintStyle) -> None:
        width = max(1, int(round(style.stroke_width)))
        self._draw.line([p1, p2], fill=style.rgba, width=width)

    def draw_path(self, points: Sequence[Point], style: PaintStyle) -> None:
        self._draw.polygon(list(points), fill=style.rgba)

    def draw_text(self, text: str, x: float, y: float, style: PaintStyle) -> None:
        if not text:
            return
        # "1" renders glyphs without anti-aliasing
        self._draw.fontmode = "L" if style.antialias else "1"
        self._draw.text((x, y), text, font=self.get_font(style.font_size), fill=style.rgba, anchor="ls")

    def text_bounds(self, text: str, style: PaintStyle) -> Tuple[float, float, float, float]:
        if not text:
            return (0.0, 0.0, 0.0, 0.0)
        left, top, right, bottom = self._draw.textbbox(
            (0, 0), text, font=self.get_font(style.font_size), anchor="ls"
        )
        return (float(left), float(top), float(right), float(bottom))

    def save(self, path: str) -> str:
        self._image.save(path)
        logger.info(f"Saved frame to {path}")
        return path
