#!/usr/bin/env python3
# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
WatchFace - Main Application.
Hosts the watch face engine in a pygame window, or renders a single frame
to an image file.
"""

import argparse
import logging
import os
import signal
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

# Initialize logging early
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)
logger = logging.getLogger(__name__)

TAP_TYPE_TAP = 2
TIMEZONE_POLL_INTERVAL_S = 1.0


def setup_file_logging(log_dir: str) -> None:
    """Set up file logging in addition to console."""
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_path / 'watchface.log')
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    ))
    logging.getLogger().addHandler(file_handler)


def _load_config(config_path: Optional[str]):
    """Load and validate configuration; problems are logged, not fatal."""
    from .config import load_config, validate_config

    config = load_config(config_path)
    for error in validate_config(config):
        logger.warning(f"Config warning: {error}")
    logger.info(f"Configuration loaded from: {config.config_path or 'defaults'}")
    return config


class WatchFaceApp:
    """pygame host: translates window events into engine lifecycle calls."""

    def __init__(self, config_path: Optional[str] = None, verbose: bool = False):
        """
        Initialize the application.

        Args:
            config_path: Path to configuration file.
            verbose: Keep DEBUG logging regardless of the configured level.
        """
        self.config_path = config_path
        self.verbose = verbose
        self.config = None
        self.engine = None
        self.surface = None
        self.timezone = None

        self._screen = None
        self._running = False
        self._last_minute: Optional[int] = None
        self._last_tz_poll = 0.0

        # Set up signal handlers
        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

    def _signal_handler(self, signum, frame):
        """Handle shutdown signals."""
        logger.info(f"Received signal {signum}, initiating shutdown...")
        self.stop()

    def _init_display(self) -> bool:
        """Open the window and create the engine."""
        import pygame

        from .clock import TimezoneWatcher
        from .engine import WatchFaceEngine
        from .surfaces.pygame_surface import PygameSurface
        from .theme import ThemeError

        try:
            self.timezone = TimezoneWatcher()
            self.engine = WatchFaceEngine.from_config(self.config, timezone_source=self.timezone)
        except (ThemeError, ValueError) as e:
            logger.error(f"Cannot start watch face: {e}")
            return False

        pygame.init()
        pygame.display.set_caption("WatchFace")
        display_cfg = self.config.display
        flags = pygame.FULLSCREEN if display_cfg.fullscreen else pygame.RESIZABLE
        self._screen = pygame.display.set_mode((display_cfg.width, display_cfg.height), flags)
        self.surface = PygameSurface(self._screen, font_path=self.config.theme.font_path)

        width, height = self._screen.get_size()
        self.engine.on_create()
        self.engine.on_properties_changed(low_bit_ambient=False, burn_in_protection=False)
        self.engine.on_surface_size_changed(width, height)
        self.engine.on_visibility_changed(True)
        logger.info(f"Display initialized: {width}x{height}")
        return True

    def run(self) -> int:
        """
        Run the main application loop.

        Returns:
            Exit code (0 for success).
        """
        logger.info("Starting WatchFace...")

        try:
            self.config = _load_config(self.config_path)
        except Exception as e:
            logger.error(f"Failed to load configuration: {e}")
            return 1

        if not self.verbose:
            logging.getLogger().setLevel(self.config.logging.level.upper())

        log_dir = os.environ.get('WATCHFACE_LOG_DIR', self.config.logging.log_dir)
        if log_dir:
            try:
                setup_file_logging(log_dir)
            except Exception as e:
                logger.warning(f"Could not set up file logging: {e}")

        if not self._init_display():
            return 1

        self._running = True
        logger.info("WatchFace started successfully")

        try:
            self._main_loop()
        except Exception as e:
            logger.error(f"Main loop error: {e}")
            return 1
        finally:
            self._cleanup()

        return 0

    def _main_loop(self) -> None:
        """Main application loop."""
        import pygame

        frame_clock = pygame.time.Clock()

        while self._running:
            for event in pygame.event.get():
                self._handle_event(event)

            self._poll_timezone()
            self._check_minute_tick()
            self.engine.poll()

            if self.engine.consume_invalidation():
                self.engine.draw(self.surface)
                pygame.display.flip()

            frame_clock.tick(self.config.display.fps)

    def _handle_event(self, event) -> None:
        """Map a pygame event to an engine notification."""
        import pygame

        engine = self.engine
        mode = engine.mode

        if event.type == pygame.QUIT:
            self.stop()
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.stop()
            elif event.key == pygame.K_a:
                engine.on_ambient_mode_changed(not mode.ambient)
            elif event.key == pygame.K_m:
                engine.on_interruption_filter_changed(not mode.muted)
            elif event.key == pygame.K_l:
                engine.on_properties_changed(not mode.low_bit_ambient, mode.burn_in_protection)
                engine.invalidate()
            elif event.key == pygame.K_b:
                engine.on_properties_changed(mode.low_bit_ambient, not mode.burn_in_protection)
                engine.invalidate()
        elif event.type == pygame.MOUSEBUTTONDOWN:
            x, y = event.pos
            engine.on_tap(TAP_TYPE_TAP, x, y, pygame.time.get_ticks())
        elif event.type == pygame.VIDEORESIZE:
            self._screen = pygame.display.get_surface()
            self.surface.set_surface(self._screen)
            engine.on_surface_size_changed(*self._screen.get_size())
        elif event.type in (pygame.WINDOWHIDDEN, pygame.WINDOWMINIMIZED):
            engine.on_visibility_changed(False)
        elif event.type in (pygame.WINDOWSHOWN, pygame.WINDOWRESTORED):
            engine.on_visibility_changed(True)

    def _poll_timezone(self) -> None:
        now = time.monotonic()
        if now - self._last_tz_poll >= TIMEZONE_POLL_INTERVAL_S:
            self._last_tz_poll = now
            self.timezone.poll()

    def _check_minute_tick(self) -> None:
        """Deliver the once-a-minute time tick the platform sends in ambient mode."""
        minute = datetime.now().minute
        if self._last_minute is not None and minute != self._last_minute:
            self.engine.on_time_tick()
        self._last_minute = minute

    def stop(self) -> None:
        """Stop the application."""
        logger.info("Stopping WatchFace...")
        self._running = False

    def _cleanup(self) -> None:
        """Clean up resources."""
        logger.info("Cleaning up...")

        if self.engine:
            self.engine.on_destroy()

        try:
            import pygame
            pygame.quit()
        except Exception as e:
            logger.error(f"Error shutting down pygame: {e}")

        logger.info("WatchFace stopped")


def render_snapshot(
    config_path: Optional[str],
    output_path: str,
    at: Optional[datetime] = None,
    ambient: bool = False,
    low_bit: bool = False,
    burn_in: bool = False,
    muted: bool = False,
) -> int:
    """Render one frame headlessly with Pillow and save it.

    Returns:
        Exit code (0 for success).
    """
    from .clock import FixedClock, SystemClock
    from .engine import WatchFaceEngine
    from .surfaces.pillow_surface import PillowSurface
    from .theme import ThemeError

    config = _load_config(config_path)
    clock = FixedClock(at) if at else SystemClock()

    try:
        engine = WatchFaceEngine.from_config(config, clock=clock)
    except (ThemeError, ValueError) as e:
        logger.error(f"Cannot render watch face: {e}")
        return 1

    width, height = config.display.width, config.display.height
    surface = PillowSurface(width, height, font_path=config.theme.font_path)

    engine.on_create()
    engine.on_properties_changed(low_bit_ambient=low_bit, burn_in_protection=burn_in)
    engine.on_surface_size_changed(width, height)
    engine.on_ambient_mode_changed(ambient)
    engine.on_interruption_filter_changed(muted)
    engine.draw(surface)
    engine.on_destroy()

    surface.save(output_path)
    return 0


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="WatchFace - Sport Digital Watch Face",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '-c', '--config',
        help='Path to configuration file'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    parser.add_argument(
        '--version',
        action='store_true',
        help='Show version and exit'
    )

    parser.add_argument(
        '--snapshot',
        metavar='PATH',
        help='Render a single frame to an image file and exit'
    )

    parser.add_argument(
        '--at',
        type=datetime.fromisoformat,
        help='Fixed time for --snapshot (ISO 8601, e.g. 2024-01-01T09:05:09)'
    )

    parser.add_argument('--ambient', action='store_true', help='Snapshot in ambient mode')
    parser.add_argument('--low-bit', action='store_true', help='Snapshot with low-bit ambient')
    parser.add_argument('--burn-in', action='store_true', help='Snapshot with burn-in protection')
    parser.add_argument('--muted', action='store_true', help='Snapshot in mute mode')

    args = parser.parse_args()

    if args.version:
        from . import __version__
        print(f"WatchFace {__version__}")
        return 0

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.snapshot:
        return render_snapshot(
            args.config,
            args.snapshot,
            at=args.at,
            ambient=args.ambient,
            low_bit=args.low_bit,
            burn_in=args.burn_in,
            muted=args.muted,
        )

    app = WatchFaceApp(config_path=args.config, verbose=args.verbose)
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
