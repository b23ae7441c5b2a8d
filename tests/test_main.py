# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Tests for the headless snapshot entry point.
"""

from datetime import datetime
from unittest.mock import MagicMock

import pytest
import yaml
from PIL import Image

from watchface.main import render_snapshot


class TestRenderSnapshot:
    """Test single-frame rendering to a file."""

    def test_writes_image(self, sample_config_yaml, temp_dir):
        out = temp_dir / "frame.png"
        code = render_snapshot(str(sample_config_yaml), str(out), at=datetime(2024, 1, 7, 0, 5, 9))

        assert code == 0
        with Image.open(out) as image:
            assert image.size == (320, 320)

    def test_low_bit_ambient_is_black(self, sample_config_yaml, temp_dir):
        out = temp_dir / "ambient.png"
        render_snapshot(str(sample_config_yaml), str(out), ambient=True, low_bit=True)

        with Image.open(out) as image:
            assert image.convert("RGB").getextrema() == ((0, 0), (0, 0), (0, 0))

    def test_broken_theme_fails(self, temp_dir, sample_config_dict):
        sample_config_dict["theme"]["font_path"] = str(temp_dir / "missing.ttf")
        config_path = temp_dir / "config.yaml"
        with open(config_path, 'w') as f:
            yaml.dump(sample_config_dict, f)

        code = render_snapshot(str(config_path), str(temp_dir / "out.png"))

        assert code == 1
        assert not (temp_dir / "out.png").exists()

    def test_invalid_interval_fails(self, temp_dir, sample_config_dict):
        """A non-positive redraw interval is a startup failure, not a crash."""
        sample_config_dict["scheduler"]["update_interval_ms"] = 0
        config_path = temp_dir / "config.yaml"
        with open(config_path, 'w') as f:
            yaml.dump(sample_config_dict, f)

        code = render_snapshot(str(config_path), str(temp_dir / "out.png"))

        assert code == 1
        assert not (temp_dir / "out.png").exists()


class TestWatchFaceApp:
    """Test host startup failures."""

    def test_invalid_interval_stops_startup(self, monkeypatch):
        pytest.importorskip("pygame")
        monkeypatch.setattr("watchface.main.signal.signal", MagicMock())
        from watchface.config import WatchFaceConfig
        from watchface.main import WatchFaceApp

        app = WatchFaceApp()
        app.config = WatchFaceConfig()
        app.config.scheduler.update_interval_ms = -5

        assert app._init_display() is False
        assert app.engine is None
