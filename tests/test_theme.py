# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Tests for theme color parsing and resource resolution.
"""

import pytest

from watchface.config import ThemeConfig
from watchface.theme import ThemeError, ThemeProvider, parse_color


class TestParseColor:
    """Test color value parsing."""

    def test_hex(self):
        assert parse_color("#C6461B") == (198, 70, 27)

    def test_named(self):
        assert parse_color("white") == (255, 255, 255)

    def test_rgb_list(self):
        assert parse_color([10, 20, 30]) == (10, 20, 30)

    @pytest.mark.parametrize("value", [[1, 2], [0, 0, 300], "#12", "nope"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_color(value)


class TestThemeProvider:
    """Test theme resolution."""

    def test_default_tokens(self, theme):
        assert theme.color('background') == (0x1E, 0x1F, 0x24)
        assert theme.color('background_lines') == (0x26, 0x28, 0x2E)
        assert theme.color('ambient_text') == (0xA0, 0xA0, 0xA0)

    def test_unknown_token(self, theme):
        with pytest.raises(ThemeError):
            theme.color('accent')

    def test_invalid_color_fails_at_startup(self):
        with pytest.raises(ThemeError, match="background_shapes"):
            ThemeProvider(ThemeConfig(background_shapes="#ZZZZZZ"))

    def test_missing_color_fails_at_startup(self):
        with pytest.raises(ThemeError, match="not defined"):
            ThemeProvider(ThemeConfig(text=None))

    def test_missing_font_fails_at_startup(self, temp_dir):
        with pytest.raises(ThemeError, match="font"):
            ThemeProvider(ThemeConfig(font_path=str(temp_dir / "missing.ttf")))

    def test_existing_font_path(self, temp_dir):
        font = temp_dir / "face.ttf"
        font.write_bytes(b"")

        assert ThemeProvider(ThemeConfig(font_path=str(font))).font_path == str(font)

    def test_shapes_in_drawing_order(self):
        shapes = {
            'date': [0.0, 0.0, 1.0, 1.0],
            'day_of_week': [0.1, 0.1, 0.2, 0.2],
            'time': [0.3, 0.3, 0.4, 0.4],
        }
        theme = ThemeProvider(ThemeConfig(shapes=shapes))

        assert theme.shapes == (
            (0.1, 0.1, 0.2, 0.2),
            (0.3, 0.3, 0.4, 0.4),
            (0.0, 0.0, 1.0, 1.0),
        )

    def test_missing_shape_is_empty(self):
        theme = ThemeProvider(ThemeConfig(shapes={'time': [0.1, 0.1, 0.2, 0.2]}))
        assert theme.shapes[0] == ()
        assert theme.shapes[2] == ()

    def test_available_tokens(self):
        assert 'text' in ThemeProvider.available_tokens()
