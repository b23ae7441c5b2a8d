# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Watch face engine.
Holds the display state and reacts to host lifecycle notifications by
updating that state, invalidating the frame and re-evaluating the redraw timer.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, TYPE_CHECKING

from .clock import SystemClock, TimezoneWatcher, now_ms
from .geometry import SurfaceDimensions
from .layout import LayoutConstants, LayoutEngine
from .renderer import FrameRenderer
from .scheduler import INTERACTIVE_UPDATE_RATE_MS, RedrawScheduler
from .styles import DisplayMode, StyleResolver
from .theme import ThemeProvider

if TYPE_CHECKING:
    from .config import WatchFaceConfig
    from .surfaces.base import DrawingSurface

logger = logging.getLogger(__name__)


class WatchFaceEngine:
    """
    Core watch face state plus its lifecycle transitions.

    All calls are expected on the host's single UI thread. The engine never
    draws on its own: it marks the frame invalid and the host calls draw().
    """

    def __init__(
        self,
        theme: ThemeProvider,
        clock=None,
        timezone_source: Optional[TimezoneWatcher] = None,
        layout_constants: LayoutConstants = LayoutConstants(),
        update_interval_ms: int = INTERACTIVE_UPDATE_RATE_MS,
        time_fn: Callable[[], int] = now_ms,
        on_invalidate: Optional[Callable[[], None]] = None,
    ):
        """
        Initialize the engine.

        Args:
            theme: Resolved theme (colors, shapes, font).
            clock: Object with now() -> Moment and refresh_timezone().
            timezone_source: Timezone change notifier, subscribed while visible.
            layout_constants: Text row placement.
            update_interval_ms: Interactive redraw interval.
            time_fn: Wall-clock milliseconds, used for timer alignment.
            on_invalidate: Optional hook called whenever a redraw is requested.
        """
        self.theme = theme
        self.clock = clock or SystemClock()
        self.timezone_source = timezone_source
        self.mode = DisplayMode()
        self.dimensions: Optional[SurfaceDimensions] = None

        self._time_fn = time_fn
        self._on_invalidate = on_invalidate
        self._invalid = True
        self._timezone_registered = False
        self._destroyed = False

        self.renderer = FrameRenderer(
            theme,
            layout_engine=LayoutEngine(layout_constants),
            style_resolver=StyleResolver(theme),
        )
        self.scheduler = RedrawScheduler(
            self.mode,
            on_redraw=self.invalidate,
            interval_ms=update_interval_ms,
        )

    @classmethod
    def from_config(cls, config: WatchFaceConfig, **kwargs) -> WatchFaceEngine:
        """Build an engine from configuration. Raises ThemeError on a broken theme."""
        return cls(
            ThemeProvider(config.theme),
            layout_constants=LayoutConstants.from_config(config.layout),
            update_interval_ms=config.scheduler.update_interval_ms,
            **kwargs,
        )

    # Invalidation

    def invalidate(self) -> None:
        """Request a redraw on the next host frame."""
        self._invalid = True
        if self._on_invalidate:
            self._on_invalidate()

    @property
    def needs_redraw(self) -> bool:
        return self._invalid

    def consume_invalidation(self) -> bool:
        """Return whether a redraw was requested, clearing the request."""
        invalid = self._invalid
        self._invalid = False
        return invalid

    # Host lifecycle

    def on_create(self) -> None:
        logger.info("Watch face created")
        self.invalidate()

    def on_destroy(self) -> None:
        self.scheduler.shutdown()
        self._unregister_timezone_receiver()
        self._destroyed = True
        logger.info("Watch face destroyed")

    def on_surface_size_changed(self, width: int, height: int) -> None:
        self.dimensions = SurfaceDimensions(width=width, height=height)
        logger.debug(f"Surface size changed: {width}x{height}")
        self.invalidate()

    def on_properties_changed(self, low_bit_ambient: bool, burn_in_protection: bool) -> None:
        self.mode.low_bit_ambient = low_bit_ambient
        self.mode.burn_in_protection = burn_in_protection
        logger.info(f"Properties changed: low_bit_ambient={low_bit_ambient}, burn_in_protection={burn_in_protection}")

    def on_ambient_mode_changed(self, ambient: bool) -> None:
        self.mode.ambient = ambient
        logger.info(f"Ambient mode: {'on' if ambient else 'off'}")
        self.invalidate()
        self._update_timer()

    def on_interruption_filter_changed(self, muted: bool) -> None:
        if self.mode.muted != muted:
            self.mode.muted = muted
            logger.info(f"Mute mode: {'on' if muted else 'off'}")
            self.invalidate()

    def on_visibility_changed(self, visible: bool) -> None:
        self.mode.visible = visible
        if visible:
            self._register_timezone_receiver()
            # The zone may have changed while hidden
            self.clock.refresh_timezone()
            self.invalidate()
        else:
            self._unregister_timezone_receiver()
        logger.debug(f"Visibility changed: {visible}")
        self._update_timer()

    def on_time_tick(self) -> None:
        """Once-a-minute host tick (the only update source in ambient mode)."""
        self.invalidate()

    def on_tap(self, tap_type: int, x: int, y: int, event_time: int) -> None:
        logger.debug(f"Tap type={tap_type} at ({x}, {y}) t={event_time}")
        self.invalidate()

    def on_timezone_changed(self) -> None:
        self.clock.refresh_timezone()
        self.invalidate()

    # Drawing and timing

    def draw(self, surface: DrawingSurface) -> None:
        """Render the current time onto ``surface``."""
        moment = self.clock.now()
        self.renderer.render(surface, moment, self.mode, self.dimensions)
        self._invalid = False

    def poll(self, now_ms: Optional[int] = None) -> bool:
        """Fire the redraw timer if due. Returns True if it fired."""
        if now_ms is None:
            now_ms = self._time_fn()
        return self.scheduler.poll(now_ms)

    def _update_timer(self) -> None:
        if self._destroyed:
            return
        self.scheduler.update_timer(self._time_fn())

    def _register_timezone_receiver(self) -> None:
        if self._destroyed or self._timezone_registered or self.timezone_source is None:
            return
        self.timezone_source.subscribe(self.on_timezone_changed)
        self._timezone_registered = True

    def _unregister_timezone_receiver(self) -> None:
        if not self._timezone_registered or self.timezone_source is None:
            return
        self.timezone_source.unsubscribe(self.on_timezone_changed)
        self._timezone_registered = False
