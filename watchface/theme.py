# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Theme colors, font and background shapes."""

from __future__ import annotations

import logging
import os
from typing import Dict, List, Optional, Tuple

from PIL import ImageColor

from .config import SHAPE_NAMES, ThemeConfig

logger = logging.getLogger(__name__)

COLOR_TOKENS = ['background', 'background_lines', 'background_shapes', 'text', 'ambient_text']


class ThemeError(Exception):
    """A theme resource is missing or unusable. Fatal at startup."""


def parse_color(value) -> Tuple[int, int, int]:
    """Parse a color given as a CSS string (``"#RRGGBB"``, ``"red"``) or an [R, G, B] list."""
    if isinstance(value, (list, tuple)):
        if len(value) < 3 or not all(isinstance(c, int) and 0 <= c <= 255 for c in value[:3]):
            raise ValueError(f"Invalid RGB color: {value!r}")
        return (value[0], value[1], value[2])
    rgb = ImageColor.getrgb(str(value))
    return (rgb[0], rgb[1], rgb[2])


class ThemeProvider:
    """Resolves named color tokens and supplies shapes and the text font.

    All resources are resolved once at construction so that a broken theme
    fails at startup rather than in the middle of a frame.
    """

    def __init__(self, theme_config: ThemeConfig):
        self._config = theme_config
        self._colors: Dict[str, Tuple[int, int, int]] = {}

        for token in COLOR_TOKENS:
            raw = getattr(theme_config, token, None)
            if raw is None:
                raise ThemeError(f"Theme color '{token}' is not defined")
            try:
                self._colors[token] = parse_color(raw)
            except ValueError as e:
                raise ThemeError(f"Theme color '{token}' is invalid: {e}") from e

        if theme_config.font_path and not os.path.isfile(theme_config.font_path):
            raise ThemeError(f"Theme font not found: {theme_config.font_path}")

        self._shapes: Tuple[Tuple[float, ...], ...] = tuple(
            tuple(float(v) for v in theme_config.shapes.get(name) or [])
            for name in SHAPE_NAMES
        )

        logger.info(
            f"Theme loaded: font={theme_config.font_path or 'built-in'}, "
            f"shapes={[len(s) // 2 for s in self._shapes]} vertices"
        )

    def color(self, token: str) -> Tuple[int, int, int]:
        """Get the RGB value for a color token."""
        try:
            return self._colors[token]
        except KeyError:
            raise ThemeError(f"Unknown theme color token: {token}") from None

    @property
    def shapes(self) -> Tuple[Tuple[float, ...], ...]:
        """Background shapes in drawing order: day of week, time, date."""
        return self._shapes

    @property
    def font_path(self) -> Optional[str]:
        return self._config.font_path

    @property
    def background_line_spacing(self) -> int:
        return self._config.background_line_spacing

    @staticmethod
    def available_tokens() -> List[str]:
        return list(COLOR_TOKENS)
