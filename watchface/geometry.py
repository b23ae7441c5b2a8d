# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Resolution-independent geometry helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .styles import PaintStyle
    from .surfaces.base import DrawingSurface

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


@dataclass(frozen=True)
class SurfaceDimensions:
    """Size of the drawing surface in device pixels."""
    width: int
    height: int


@dataclass(frozen=True)
class Polygon:
    """A closed polygon in pixel coordinates."""
    vertices: Tuple[Point, ...]

    @property
    def path(self) -> List[Point]:
        """Vertices in drawing order, ending back on the first vertex."""
        return list(self.vertices) + [self.vertices[0]]

    def segments(self) -> Iterator[Tuple[Point, Point]]:
        """Yield each edge, including the closing edge back to vertex 0."""
        path = self.path
        for i in range(len(self.vertices)):
            yield path[i], path[i + 1]


def to_pixels(fraction: float, dimension: float) -> float:
    """Convert a fraction of a dimension to pixels. No clamping is applied."""
    return fraction * dimension


def build_polygon(points: Sequence[float], width: float, height: float) -> Optional[Polygon]:
    """Build a closed polygon from a flat list of normalized coordinates.

    Args:
        points: Flat sequence ``x0, y0, x1, y1, ...`` of fractions in [0, 1].
        width: Surface width in pixels.
        height: Surface height in pixels.

    Returns:
        Polygon with one vertex per coordinate pair, or None when the list is
        too short (fewer than 4 values) or has an odd length.
    """
    if len(points) < 4:
        logger.debug(f"Skipping shape with {len(points)} values (need at least 4)")
        return None
    if len(points) % 2 != 0:
        logger.debug(f"Skipping shape with odd value count {len(points)}")
        return None

    vertices = tuple(
        (to_pixels(points[i], width), to_pixels(points[i + 1], height))
        for i in range(0, len(points), 2)
    )
    return Polygon(vertices=vertices)


def measure_text_height(surface: DrawingSurface, text: str, style: PaintStyle) -> float:
    """Height of the tight glyph bounding box of ``text`` at the style's font size."""
    left, top, right, bottom = surface.text_bounds(text, style)
    return bottom - top
