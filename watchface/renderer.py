# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Frame renderer orchestrator."""

from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

from .clock import Moment
from .geometry import SurfaceDimensions, build_polygon, measure_text_height
from .layout import LayoutEngine
from .styles import BLACK, DisplayMode, PaintStyle, ResolvedStyles, StyleResolver

if TYPE_CHECKING:
    from .surfaces.base import DrawingSurface
    from .theme import ThemeProvider

logger = logging.getLogger(__name__)

DEFAULT_LINE_SPACING = 15


class FrameRenderer:
    """Draws one complete watch face frame.

    Each call is independent: the frame depends only on the moment, the
    display mode and the surface size.

    - Ambient with low-bit or burn-in protection: solid black only.
    - Ambient (full-bit): black background and the text rows, no decoration.
    - Interactive: themed background, diagonal line pattern, the three
      background shapes, then the text rows.
    """

    def __init__(
        self,
        theme: ThemeProvider,
        layout_engine: Optional[LayoutEngine] = None,
        style_resolver: Optional[StyleResolver] = None,
    ):
        self._theme = theme
        self._layout = layout_engine or LayoutEngine()
        self._styles = style_resolver or StyleResolver(theme)
        spacing = theme.background_line_spacing
        if not spacing or spacing <= 0:
            logger.warning(
                f"Invalid background line spacing {spacing!r}, using {DEFAULT_LINE_SPACING}px"
            )
            spacing = DEFAULT_LINE_SPACING
        self._line_spacing = spacing

    @property
    def layout_engine(self) -> LayoutEngine:
        return self._layout

    def render(
        self,
        surface: DrawingSurface,
        moment: Moment,
        mode: DisplayMode,
        dimensions: Optional[SurfaceDimensions] = None,
    ) -> None:
        """Render a frame onto ``surface``.

        Args:
            surface: Drawing surface to draw on.
            moment: Time to show.
            mode: Current display mode flags.
            dimensions: Layout size; defaults to the surface's own size.
        """
        if dimensions is None:
            width, height = surface.size
            dimensions = SurfaceDimensions(width=width, height=height)

        if mode.restricted_ambient:
            surface.fill_solid(BLACK)
            return

        styles = self._styles.resolve(mode)

        if mode.ambient:
            surface.fill_solid(BLACK)
        else:
            surface.fill_solid(styles.background.color)
            self._draw_background_lines(surface, dimensions, styles.background_lines)
            self._draw_background_shapes(surface, dimensions, styles.background_shapes)

        self._draw_text(surface, moment, mode, dimensions, styles)

    def _draw_background_lines(
        self,
        surface: DrawingSurface,
        dimensions: SurfaceDimensions,
        style: PaintStyle,
    ) -> None:
        """Diagonal bands from (0, y) to (width, y + spacing) every ``spacing`` pixels."""
        spacing = self._line_spacing
        y = 0
        while y < dimensions.height:
            surface.draw_line((0, y), (dimensions.width, y + spacing), style)
            y += spacing

    def _draw_background_shapes(
        self,
        surface: DrawingSurface,
        dimensions: SurfaceDimensions,
        style: PaintStyle,
    ) -> None:
        for index, points in enumerate(self._theme.shapes):
            polygon = build_polygon(points, dimensions.width, dimensions.height)
            if polygon is None:
                logger.debug(f"Background shape {index} skipped")
                continue
            surface.draw_path(polygon.path, style)

    def _draw_text(
        self,
        surface: DrawingSurface,
        moment: Moment,
        mode: DisplayMode,
        dimensions: SurfaceDimensions,
        styles: ResolvedStyles,
    ) -> None:
        def measure(text: str, font_size: int) -> float:
            return measure_text_height(surface, text, styles.text.with_font_size(font_size))

        blocks = self._layout.layout(moment, dimensions, mode.ambient, measure)
        for block in blocks:
            if not block.text:
                continue
            surface.draw_text(block.text, block.x, block.y, styles.text.with_font_size(block.font_size))
