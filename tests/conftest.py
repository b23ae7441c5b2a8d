# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Pytest configuration and shared fixtures for WatchFace tests.
"""

import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from watchface.surfaces.base import DrawingSurface


class RecordingSurface(DrawingSurface):
    """Drawing surface that records every call instead of drawing.

    Text height is faked as 70% of the font size so layouts are predictable.
    """

    TEXT_HEIGHT_RATIO = 0.7

    def __init__(self, width=400, height=400):
        self._size = (width, height)
        self.calls = []

    @property
    def size(self):
        return self._size

    def fill_solid(self, color):
        self.calls.append(("fill_solid", tuple(color)))

    def draw_line(self, p1, p2, style):
        self.calls.append(("draw_line", p1, p2, style))

    def draw_path(self, points, style):
        self.calls.append(("draw_path", list(points), style))

    def draw_text(self, text, x, y, style):
        self.calls.append(("draw_text", text, x, y, style))

    def text_bounds(self, text, style):
        height = style.font_size * self.TEXT_HEIGHT_RATIO
        return (0.0, -height, len(text) * style.font_size * 0.5, 0.0)

    def calls_named(self, name):
        return [call for call in self.calls if call[0] == name]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config_dict():
    """Return a minimal valid config dictionary."""
    return {
        "display": {
            "width": 320,
            "height": 320,
            "fullscreen": False,
            "fps": 30
        },
        "layout": {
            "day_of_week": {"center": 0.165, "height": 0.17, "x": 0.325},
            "time": {"center": 0.37, "height": 0.18, "x": 0.175},
            "date": {"center": 0.57, "height": 0.16, "x": 0.175}
        },
        "theme": {
            "background": "#1E1F24",
            "background_lines": "#26282E",
            "background_shapes": "#C6461B",
            "text": "#FFFFFF",
            "ambient_text": "#A0A0A0",
            "background_line_spacing": 15
        },
        "scheduler": {
            "update_interval_ms": 1000
        },
        "logging": {
            "level": "INFO"
        }
    }


@pytest.fixture
def sample_config_yaml(temp_dir, sample_config_dict):
    """Create a temporary config.yaml file."""
    import yaml
    config_path = temp_dir / "config.yaml"
    with open(config_path, 'w') as f:
        yaml.dump(sample_config_dict, f)
    return config_path


@pytest.fixture
def theme_config():
    """Default theme configuration."""
    from watchface.config import ThemeConfig
    return ThemeConfig()


@pytest.fixture
def theme(theme_config):
    """Theme provider built from the default theme."""
    from watchface.theme import ThemeProvider
    return ThemeProvider(theme_config)


@pytest.fixture
def surface():
    """A 400x400 recording surface."""
    return RecordingSurface(400, 400)


@pytest.fixture
def surface_factory():
    """Build recording surfaces of any size."""
    return RecordingSurface


@pytest.fixture
def sunday_moment():
    """Sunday 7 January 2024, 00:05:09."""
    from watchface.clock import Moment
    return Moment.from_datetime(datetime(2024, 1, 7, 0, 5, 9))
