# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Redraw scheduler for WatchFace.
Keeps a single cancelable tick that redraws the face once per second while
it is visible and interactive.
"""

import logging
from typing import Callable, Optional

from .styles import DisplayMode

logger = logging.getLogger(__name__)

INTERACTIVE_UPDATE_RATE_MS = 1000


def delay_to_next_tick(now_ms: int, interval_ms: int = INTERACTIVE_UPDATE_RATE_MS) -> int:
    """Milliseconds until the next multiple of ``interval_ms``.

    >>> delay_to_next_tick(1500, 1000)
    500
    """
    return interval_ms - (now_ms % interval_ms)


class RedrawScheduler:
    """
    Periodic redraw timer driven by the host loop.

    At most one tick is pending at a time. The host calls poll() with the
    current time; a due tick requests a redraw and, while the timer should
    keep running, schedules the next tick on the next interval boundary.
    """

    def __init__(
        self,
        mode: DisplayMode,
        on_redraw: Callable[[], None],
        interval_ms: int = INTERACTIVE_UPDATE_RATE_MS,
    ):
        """
        Initialize the scheduler.

        Args:
            mode: Display state shared with the engine (read only here).
            on_redraw: Called whenever a tick fires.
            interval_ms: Redraw interval in milliseconds.
        """
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self._mode = mode
        self._on_redraw = on_redraw
        self.interval_ms = interval_ms
        self._due_ms: Optional[int] = None
        self._shut_down = False

    def should_run(self) -> bool:
        """The timer only runs while visible and not in ambient mode."""
        return self._mode.visible and not self._mode.ambient

    @property
    def pending(self) -> bool:
        return self._due_ms is not None

    @property
    def due_ms(self) -> Optional[int]:
        """Deadline of the pending tick, or None."""
        return self._due_ms

    def schedule(self, at_ms: int) -> None:
        """Replace any pending tick with one due at ``at_ms``."""
        if self._shut_down:
            return
        self._due_ms = at_ms

    def cancel(self) -> None:
        """Drop the pending tick, if any. Safe to call repeatedly."""
        self._due_ms = None

    def update_timer(self, now_ms: int) -> None:
        """Re-evaluate after a visibility or ambient change.

        Cancels the pending tick and, if the timer should run, schedules an
        immediate one; the cadence re-aligns to interval boundaries from the
        following tick.
        """
        self.cancel()
        if self.should_run():
            self.schedule(now_ms)
            logger.debug("Redraw timer started")
        else:
            logger.debug("Redraw timer stopped")

    def handle_tick(self, now_ms: int) -> None:
        """Redraw, then schedule the next tick on the next interval boundary."""
        self._due_ms = None
        self._on_redraw()
        if self.should_run():
            self.schedule(now_ms + delay_to_next_tick(now_ms, self.interval_ms))

    def poll(self, now_ms: int) -> bool:
        """Fire the pending tick if it is due.

        Returns:
            True if a tick fired.
        """
        if self._due_ms is None or now_ms < self._due_ms:
            return False
        self.handle_tick(now_ms)
        return True

    def time_until_due(self, now_ms: int) -> Optional[int]:
        """Milliseconds until the pending tick (0 if overdue), or None."""
        if self._due_ms is None:
            return None
        return max(0, self._due_ms - now_ms)

    def shutdown(self) -> None:
        """Cancel unconditionally and refuse further scheduling."""
        self.cancel()
        self._shut_down = True
        logger.debug("Redraw scheduler shut down")
