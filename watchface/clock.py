# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Wall clock, time decomposition and timezone change detection."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Moment:
    """The current time, decomposed for display.

    ``day_of_week`` uses Python's numbering (0 = Monday, 6 = Sunday) and
    ``month`` is zero-based (0 = January).
    """
    day_of_week: int
    hour: int
    minute: int
    second: int
    month: int
    day: int
    year: int

    @classmethod
    def from_datetime(cls, dt: datetime) -> Moment:
        return cls(
            day_of_week=dt.weekday(),
            hour=dt.hour,
            minute=dt.minute,
            second=dt.second,
            month=dt.month - 1,
            day=dt.day,
            year=dt.year,
        )


def now_ms() -> int:
    """Wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


class SystemClock:
    """Local wall clock."""

    def now(self) -> Moment:
        return Moment.from_datetime(datetime.now())

    def refresh_timezone(self) -> None:
        """Re-read the system timezone (TZ / zoneinfo) for subsequent reads."""
        if hasattr(time, 'tzset'):
            time.tzset()
        logger.info(f"Timezone refreshed: {time.tzname[time.localtime().tm_isdst > 0]}")


class FixedClock:
    """Clock frozen at a given datetime, for snapshots and tests."""

    def __init__(self, dt: datetime):
        self._dt = dt

    def now(self) -> Moment:
        return Moment.from_datetime(self._dt)

    def set(self, dt: datetime) -> None:
        self._dt = dt

    def refresh_timezone(self) -> None:
        pass


def _current_zone() -> Tuple[Optional[str], Optional[float]]:
    local = datetime.now().astimezone()
    offset = local.utcoffset()
    return local.tzname(), offset.total_seconds() if offset is not None else None


class TimezoneWatcher:
    """Emits a notification when the system timezone changes.

    The host polls this from its loop; subscribers are called synchronously
    on the polling thread.
    """

    def __init__(self, zone_fn: Callable[[], Tuple[Optional[str], Optional[float]]] = _current_zone):
        self._zone_fn = zone_fn
        self._subscribers: List[Callable[[], None]] = []
        self._last_zone = zone_fn()

    def subscribe(self, callback: Callable[[], None]) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[], None]) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    @property
    def has_subscribers(self) -> bool:
        return bool(self._subscribers)

    def poll(self) -> bool:
        """Check for a timezone change and notify subscribers.

        Returns:
            True if the zone changed since the last poll.
        """
        if hasattr(time, 'tzset'):
            time.tzset()
        zone = self._zone_fn()
        if zone == self._last_zone:
            return False

        logger.info(f"Timezone changed: {self._last_zone[0]} -> {zone[0]}")
        self._last_zone = zone
        for callback in list(self._subscribers):
            callback()
        return True
