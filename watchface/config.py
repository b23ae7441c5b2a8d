"""
Configuration management for WatchFace.
Handles loading, validation, and defaults for all settings.
"""

import os
import yaml
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field, replace
import logging

logger = logging.getLogger(__name__)

# Default paths
DEFAULT_CONFIG_PATHS = [
    "/etc/watchface/config.yaml",
    os.path.expanduser("~/.config/watchface/config.yaml"),
    "./config.yaml",
]

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

# Order matters: shapes are drawn in this order
SHAPE_NAMES = ['day_of_week', 'time', 'date']


def _default_shapes() -> Dict[str, List[float]]:
    # Slanted bands behind each text row, as (x, y) fractions of the surface
    return {
        'day_of_week': [0.28, 0.075, 0.78, 0.075, 0.74, 0.255, 0.24, 0.255],
        'time': [0.12, 0.275, 0.92, 0.275, 0.88, 0.465, 0.08, 0.465],
        'date': [0.12, 0.485, 0.88, 0.485, 0.84, 0.655, 0.08, 0.655],
    }


@dataclass
class DisplayConfig:
    """Host window settings."""
    width: int = 400
    height: int = 400
    fullscreen: bool = False
    fps: int = 30


@dataclass
class RowConfig:
    """Placement of one text row, as fractions of the surface size."""
    center: float = 0.5
    height: float = 0.1
    x: float = 0.0


@dataclass
class LayoutConfig:
    """Layout percentages for the three text rows."""
    day_of_week: RowConfig = field(default_factory=lambda: RowConfig(
        center=0.165, height=0.17, x=0.325
    ))
    time: RowConfig = field(default_factory=lambda: RowConfig(
        center=0.37, height=0.18, x=0.175
    ))
    date: RowConfig = field(default_factory=lambda: RowConfig(
        center=0.57, height=0.16, x=0.175
    ))


@dataclass
class ThemeConfig:
    """Colors, font and background shapes."""
    background: str = "#1E1F24"
    background_lines: str = "#26282E"
    background_shapes: str = "#C6461B"
    text: str = "#FFFFFF"
    ambient_text: str = "#A0A0A0"
    # None uses the backend's built-in font
    font_path: Optional[str] = None
    background_line_spacing: int = 15
    shapes: Dict[str, List[float]] = field(default_factory=_default_shapes)


@dataclass
class SchedulerConfig:
    """Interactive redraw settings."""
    update_interval_ms: int = 1000


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    log_dir: Optional[str] = None


@dataclass
class WatchFaceConfig:
    """Main configuration class."""
    display: DisplayConfig = field(default_factory=DisplayConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    theme: ThemeConfig = field(default_factory=ThemeConfig)
    scheduler: SchedulerConfig = field(default_factory=SchedulerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Runtime state (not persisted)
    config_path: Optional[str] = None


def _dict_to_dataclass(data: Dict[str, Any], cls: type, defaults: Any = None) -> Any:
    """Convert a dictionary to a dataclass instance, handling nested dataclasses.

    Missing keys keep the values of ``defaults`` (or of ``cls()``), so a
    partial nested section only overrides what it names.
    """
    if defaults is None:
        defaults = cls()
    if not data:
        return defaults
    if not isinstance(data, dict):
        logger.warning(f"Config section for {cls.__name__} is not a mapping (got {data!r}), using defaults")
        return defaults

    kwargs = {}

    for key, value in data.items():
        if key not in cls.__dataclass_fields__:
            logger.debug(f"Ignoring unknown config key: {cls.__name__}.{key}")
            continue

        default_value = getattr(defaults, key)

        # Handle nested dataclasses
        if hasattr(default_value, '__dataclass_fields__'):
            kwargs[key] = _dict_to_dataclass(value, type(default_value), default_value)
        # Partial shape overrides keep the remaining default shapes
        elif key == 'shapes':
            if not isinstance(value, dict):
                logger.warning(f"Config key {cls.__name__}.shapes is not a mapping (got {value!r}), using defaults")
                continue
            shapes = dict(default_value)
            shapes.update({k: list(v or []) for k, v in value.items()})
            kwargs[key] = shapes
        else:
            kwargs[key] = value

    return replace(defaults, **kwargs)


def load_config(config_path: Optional[str] = None) -> WatchFaceConfig:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to config file. If None, searches default locations.

    Returns:
        WatchFaceConfig instance with loaded or default values.
    """
    # Find config file
    if config_path:
        paths_to_try = [config_path]
    else:
        paths_to_try = DEFAULT_CONFIG_PATHS

    config_data = {}
    found_path = None

    for path in paths_to_try:
        expanded_path = os.path.expanduser(path)
        if os.path.exists(expanded_path):
            try:
                with open(expanded_path, 'r') as f:
                    config_data = yaml.safe_load(f) or {}
                if not isinstance(config_data, dict):
                    logger.warning(f"Config file {expanded_path} is not a mapping, using defaults")
                    config_data = {}
                found_path = expanded_path
                logger.info(f"Loaded config from {expanded_path}")
                break
            except Exception as e:
                logger.warning(f"Failed to load config from {expanded_path}: {e}")

    if not found_path:
        logger.info("No config file found, using defaults")

    config = WatchFaceConfig(
        display=_dict_to_dataclass(config_data.get('display'), DisplayConfig),
        layout=_dict_to_dataclass(config_data.get('layout'), LayoutConfig),
        theme=_dict_to_dataclass(config_data.get('theme'), ThemeConfig),
        scheduler=_dict_to_dataclass(config_data.get('scheduler'), SchedulerConfig),
        logging=_dict_to_dataclass(config_data.get('logging'), LoggingConfig),
        config_path=found_path,
    )

    if config.theme.font_path:
        config.theme.font_path = os.path.expanduser(config.theme.font_path)

    return config


def save_config(config: WatchFaceConfig, config_path: Optional[str] = None) -> str:
    """
    Save configuration to a YAML file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.

    Returns:
        Path where config was saved.
    """
    if config_path is None:
        config_path = config.config_path or DEFAULT_CONFIG_PATHS[1]

    config_path = os.path.expanduser(config_path)

    # Ensure directory exists
    directory = os.path.dirname(config_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    data = config_to_dict(config)

    with open(config_path, 'w') as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    logger.info(f"Saved config to {config_path}")
    return config_path


def config_to_dict(config: WatchFaceConfig) -> Dict[str, Any]:
    """Convert config to dictionary for serialization."""
    def dataclass_to_dict(obj: Any) -> Any:
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                if field_name == 'config_path':
                    continue  # Skip runtime state
                value = getattr(obj, field_name)
                result[field_name] = dataclass_to_dict(value)
            return result
        elif isinstance(obj, list):
            return [dataclass_to_dict(item) for item in obj]
        elif isinstance(obj, dict):
            return {k: dataclass_to_dict(v) for k, v in obj.items()}
        else:
            return obj

    return dataclass_to_dict(config)


def validate_config(config: WatchFaceConfig) -> List[str]:
    """
    Validate configuration and return list of errors.

    Returns:
        List of error messages. Empty if valid.
    """
    errors = []

    # Check display settings
    if config.display.width <= 0 or config.display.height <= 0:
        errors.append("Display width and height must be positive")

    if config.display.fps <= 0:
        errors.append("Display fps must be positive")

    # Check layout percentages
    for row_name in ('day_of_week', 'time', 'date'):
        row = getattr(config.layout, row_name)
        for attr in ('center', 'height', 'x'):
            value = getattr(row, attr)
            if not (0.0 <= value <= 1.0):
                errors.append(f"Layout {row_name}.{attr} must be between 0 and 1 (got {value})")

    # Check theme settings
    if config.theme.background_line_spacing <= 0:
        errors.append("Theme background_line_spacing must be positive")

    for name in SHAPE_NAMES:
        if name not in config.theme.shapes:
            errors.append(f"Theme shape '{name}' is missing")

    for name, points in config.theme.shapes.items():
        if len(points) < 4 or len(points) % 2 != 0:
            errors.append(
                f"Theme shape '{name}' needs an even number of at least 4 values "
                f"(got {len(points)}); it will not be drawn"
            )

    # Check scheduler settings
    if config.scheduler.update_interval_ms <= 0:
        errors.append("Scheduler update_interval_ms must be positive")

    # Check logging settings
    if str(config.logging.level).upper() not in VALID_LOG_LEVELS:
        errors.append(f"Logging level must be one of: {VALID_LOG_LEVELS}")

    return errors
