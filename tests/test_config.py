# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Tests for configuration loading and validation.
"""

import pytest
import yaml


def _write(path, data):
    with open(path, 'w') as f:
        yaml.dump(data, f)
    return path


class TestConfigValidation:
    """Test config validation logic."""

    def test_valid_config_passes(self, sample_config_yaml):
        """Valid config should load without errors."""
        from watchface.config import load_config, validate_config

        config = load_config(str(sample_config_yaml))
        errors = validate_config(config)

        assert len(errors) == 0, f"Unexpected errors: {errors}"

    def test_defaults_are_valid(self):
        from watchface.config import WatchFaceConfig, validate_config
        assert validate_config(WatchFaceConfig()) == []

    def test_layout_out_of_range(self, temp_dir, sample_config_dict):
        """Layout fractions outside [0, 1] should produce error."""
        from watchface.config import load_config, validate_config

        sample_config_dict["layout"]["time"]["center"] = 1.4
        config = load_config(str(_write(temp_dir / "config.yaml", sample_config_dict)))
        errors = validate_config(config)

        assert any("Layout time.center" in e for e in errors)

    def test_non_positive_display(self, temp_dir, sample_config_dict):
        from watchface.config import load_config, validate_config

        sample_config_dict["display"]["width"] = 0
        sample_config_dict["display"]["fps"] = -1
        config = load_config(str(_write(temp_dir / "config.yaml", sample_config_dict)))
        errors = validate_config(config)

        assert any("width and height" in e for e in errors)
        assert any("fps" in e for e in errors)

    def test_malformed_shape_reported(self, temp_dir, sample_config_dict):
        """Odd-length shapes are reported; they are skipped at draw time."""
        from watchface.config import load_config, validate_config

        sample_config_dict["theme"]["shapes"] = {"date": [0.1, 0.2, 0.3]}
        config = load_config(str(_write(temp_dir / "config.yaml", sample_config_dict)))
        errors = validate_config(config)

        assert any("'date'" in e for e in errors)

    def test_missing_shape_reported(self):
        from watchface.config import WatchFaceConfig, validate_config

        config = WatchFaceConfig()
        del config.theme.shapes['time']

        assert any("'time' is missing" in e for e in validate_config(config))

    def test_invalid_interval(self):
        from watchface.config import WatchFaceConfig, validate_config

        config = WatchFaceConfig()
        config.scheduler.update_interval_ms = 0

        assert any("update_interval_ms" in e for e in validate_config(config))

    def test_invalid_log_level(self):
        from watchface.config import WatchFaceConfig, validate_config

        config = WatchFaceConfig()
        config.logging.level = "LOUD"

        assert any("Logging level" in e for e in validate_config(config))


class TestConfigLoading:
    """Test config file loading and defaults."""

    def test_loaded_values(self, sample_config_yaml):
        from watchface.config import load_config

        config = load_config(str(sample_config_yaml))

        assert config.display.width == 320
        assert config.layout.day_of_week.x == pytest.approx(0.325)
        assert config.theme.background == "#1E1F24"
        assert config.config_path == str(sample_config_yaml)

    def test_missing_file_uses_defaults(self, temp_dir):
        from watchface.config import load_config

        config = load_config(str(temp_dir / "missing.yaml"))

        assert config.config_path is None
        assert config.display.width == 400
        assert config.scheduler.update_interval_ms == 1000

    def test_empty_file_uses_defaults(self, temp_dir):
        from watchface.config import load_config

        path = temp_dir / "config.yaml"
        path.write_text("")
        config = load_config(str(path))

        assert config.layout.time.height == pytest.approx(0.18)

    def test_partial_row_keeps_defaults(self, temp_dir):
        """Overriding one attribute of a row keeps the row's other defaults."""
        from watchface.config import load_config

        path = _write(temp_dir / "config.yaml", {"layout": {"date": {"x": 0.2}}})
        config = load_config(str(path))

        assert config.layout.date.x == pytest.approx(0.2)
        assert config.layout.date.center == pytest.approx(0.57)
        assert config.layout.date.height == pytest.approx(0.16)
        assert config.layout.time.center == pytest.approx(0.37)

    def test_partial_shapes_keep_defaults(self, temp_dir):
        from watchface.config import _default_shapes, load_config

        custom = [0.0, 0.0, 1.0, 0.0, 1.0, 1.0]
        path = _write(temp_dir / "config.yaml", {"theme": {"shapes": {"time": custom}}})
        config = load_config(str(path))

        assert config.theme.shapes['time'] == custom
        assert config.theme.shapes['date'] == _default_shapes()['date']

    def test_non_mapping_section_uses_defaults(self, temp_dir):
        """A scalar where a section is expected falls back to that section's defaults."""
        from watchface.config import load_config

        path = _write(temp_dir / "config.yaml", {
            "theme": "dark",
            "layout": {"time": 0.5, "date": {"x": 0.3}},
            "display": {"width": 240},
        })
        config = load_config(str(path))

        assert config.theme.background == "#1E1F24"
        assert config.layout.time.center == pytest.approx(0.37)
        assert config.layout.date.x == pytest.approx(0.3)
        assert config.display.width == 240

    def test_non_mapping_shapes_use_defaults(self, temp_dir):
        from watchface.config import _default_shapes, load_config

        path = _write(temp_dir / "config.yaml", {"theme": {"shapes": "none", "text": "#EEEEEE"}})
        config = load_config(str(path))

        assert config.theme.shapes == _default_shapes()
        assert config.theme.text == "#EEEEEE"

    def test_non_mapping_file_uses_defaults(self, temp_dir):
        from watchface.config import load_config

        path = temp_dir / "config.yaml"
        path.write_text("- just\n- a list\n")
        config = load_config(str(path))

        assert config.display.width == 400

    def test_unknown_keys_ignored(self, temp_dir):
        from watchface.config import load_config

        path = _write(temp_dir / "config.yaml", {"display": {"width": 200, "color_depth": 8}})
        config = load_config(str(path))

        assert config.display.width == 200
        assert not hasattr(config.display, "color_depth")


class TestConfigSaving:
    """Test config serialization."""

    def test_save_and_reload(self, temp_dir, sample_config_yaml):
        from watchface.config import load_config, save_config

        config = load_config(str(sample_config_yaml))
        config.theme.text = "#EEEEEE"
        config.layout.time.x = 0.2

        out = save_config(config, str(temp_dir / "nested" / "saved.yaml"))
        reloaded = load_config(out)

        assert reloaded.theme.text == "#EEEEEE"
        assert reloaded.layout.time.x == pytest.approx(0.2)
        assert reloaded.display.width == 320

    def test_config_path_not_persisted(self, sample_config_yaml):
        from watchface.config import config_to_dict, load_config

        data = config_to_dict(load_config(str(sample_config_yaml)))

        assert 'config_path' not in data
        assert set(data) == {'display', 'layout', 'theme', 'scheduler', 'logging'}
        assert data['layout']['time'] == {'center': 0.37, 'height': 0.18, 'x': 0.175}
