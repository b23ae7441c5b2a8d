# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Display state and the paint parameters derived from it."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .theme import ThemeProvider


Color = Tuple[int, int, int]

BLACK: Color = (0, 0, 0)

OPAQUE = 255
# Reduced contrast for hand-like strokes while muted
MUTED_HOUR_ALPHA = 100
MUTED_MINUTE_ALPHA = 100
MUTED_SECOND_ALPHA = 80

HOUR_STROKE_WIDTH = 5.0
MINUTE_STROKE_WIDTH = 3.0
SECOND_TICK_STROKE_WIDTH = 2.0
PATTERN_STROKE_WIDTH = 1.0


@dataclass
class DisplayMode:
    """Device display state, updated by host lifecycle notifications."""
    ambient: bool = False
    low_bit_ambient: bool = False
    burn_in_protection: bool = False
    muted: bool = False
    visible: bool = False

    @property
    def restricted_ambient(self) -> bool:
        """Ambient on hardware that needs the bare black frame."""
        return self.ambient and (self.low_bit_ambient or self.burn_in_protection)


@dataclass(frozen=True)
class PaintStyle:
    """Resolved drawing parameters for one element."""
    color: Color
    alpha: int = OPAQUE
    stroke_width: float = 0.0
    antialias: bool = True
    font_size: int = 0

    @property
    def rgba(self) -> Tuple[int, int, int, int]:
        return (*self.color, self.alpha)

    def with_font_size(self, font_size: int) -> PaintStyle:
        return replace(self, font_size=font_size)


@dataclass(frozen=True)
class ResolvedStyles:
    """Paints for every drawable element of one frame."""
    background: PaintStyle
    text: PaintStyle
    background_lines: PaintStyle
    background_shapes: PaintStyle
    hour_stroke: PaintStyle
    minute_stroke: PaintStyle
    second_stroke: PaintStyle
    draw_decoration: bool


class StyleResolver:
    """Maps a DisplayMode to concrete paint parameters.

    Ambient frames get a black background, no decoration and the ambient text
    color; low-bit and burn-in ambient additionally drop anti-aliasing.
    Interactive frames use the theme palette, and mute mode lowers the alpha
    of hand-like strokes (hour/minute 100, second 80). Mute has no effect
    while ambient.
    """

    def __init__(self, theme: ThemeProvider):
        self._theme = theme

    def resolve(self, mode: DisplayMode) -> ResolvedStyles:
        antialias = not mode.restricted_ambient
        dimmed = mode.muted and not mode.ambient

        hour_alpha = MUTED_HOUR_ALPHA if dimmed else OPAQUE
        minute_alpha = MUTED_MINUTE_ALPHA if dimmed else OPAQUE
        second_alpha = MUTED_SECOND_ALPHA if dimmed else OPAQUE

        if mode.ambient:
            background = PaintStyle(color=BLACK, antialias=antialias)
            text_color = self._theme.color('ambient_text')
        else:
            background = PaintStyle(color=self._theme.color('background'))
            text_color = self._theme.color('text')

        lines_color = self._theme.color('background_lines')
        shapes_color = self._theme.color('background_shapes')

        return ResolvedStyles(
            background=background,
            text=PaintStyle(color=text_color, antialias=antialias),
            background_lines=PaintStyle(
                color=lines_color,
                alpha=second_alpha,
                stroke_width=PATTERN_STROKE_WIDTH,
                antialias=antialias,
            ),
            background_shapes=PaintStyle(
                color=shapes_color,
                alpha=hour_alpha,
                antialias=antialias,
            ),
            hour_stroke=PaintStyle(
                color=text_color,
                alpha=hour_alpha,
                stroke_width=HOUR_STROKE_WIDTH,
                antialias=antialias,
            ),
            minute_stroke=PaintStyle(
                color=text_color,
                alpha=minute_alpha,
                stroke_width=MINUTE_STROKE_WIDTH,
                antialias=antialias,
            ),
            second_stroke=PaintStyle(
                color=text_color,
                alpha=second_alpha,
                stroke_width=SECOND_TICK_STROKE_WIDTH,
                antialias=antialias,
            ),
            draw_decoration=not mode.ambient,
        )
