# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Text formatting and percentage-based placement of the three text rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List

from .clock import Moment
from .config import LayoutConfig, RowConfig
from .geometry import SurfaceDimensions, to_pixels

# Keyed by datetime.weekday() (0 = Monday)
DAY_TOKENS = {
    0: "MON",
    1: "TUE",
    2: "WED",
    3: "THU",
    4: "FRI",
    5: "SAT",
    6: "SUN",
}


def day_of_week_token(day_of_week: int) -> str:
    """Three-letter day token, or an empty string for an unknown day."""
    return DAY_TOKENS.get(day_of_week, "")


def format_time(hour: int, minute: int, second: int, ambient: bool) -> str:
    """12-hour time without a leading zero; seconds only when interactive.

    >>> format_time(0, 5, 9, ambient=False)
    '12:05:09'
    >>> format_time(0, 5, 9, ambient=True)
    '12:05'
    """
    hour = hour % 12 or 12
    if ambient:
        return f"{hour}:{minute:02d}"
    return f"{hour}:{minute:02d}:{second:02d}"


def format_date(month: int, day: int, year: int) -> str:
    """``month-day-year`` with the zero-based month shown as-is (0 = January)."""
    return f"{month}-{day}-{year}"


@dataclass(frozen=True)
class RowLayout:
    """Placement of one text row as fractions of the surface size."""
    center: float
    height: float
    x: float

    @classmethod
    def from_config(cls, row: RowConfig) -> RowLayout:
        return cls(center=row.center, height=row.height, x=row.x)


@dataclass(frozen=True)
class LayoutConstants:
    """Immutable layout percentages for the day-of-week, time and date rows."""
    day_of_week: RowLayout = RowLayout(center=0.165, height=0.17, x=0.325)
    time: RowLayout = RowLayout(center=0.37, height=0.18, x=0.175)
    date: RowLayout = RowLayout(center=0.57, height=0.16, x=0.175)

    @classmethod
    def from_config(cls, layout: LayoutConfig) -> LayoutConstants:
        return cls(
            day_of_week=RowLayout.from_config(layout.day_of_week),
            time=RowLayout.from_config(layout.time),
            date=RowLayout.from_config(layout.date),
        )


@dataclass(frozen=True)
class TextBlock:
    """A string and where to draw it; ``y`` is the text baseline."""
    text: str
    x: float
    y: float
    font_size: int


# (text, font_size) -> tight glyph height in pixels
TextMeasure = Callable[[str, int], float]


class LayoutEngine:
    """Computes text positions and font sizes from the surface dimensions."""

    def __init__(self, constants: LayoutConstants = LayoutConstants()):
        self.constants = constants

    def layout(
        self,
        moment: Moment,
        dimensions: SurfaceDimensions,
        ambient: bool,
        measure: TextMeasure,
    ) -> List[TextBlock]:
        """Lay out the day-of-week, time and date rows, in that order.

        Args:
            moment: Time to display.
            dimensions: Surface size in pixels.
            ambient: Whether seconds are omitted from the time.
            measure: Returns the tight glyph height of a string at a font size.
        """
        rows = [
            (self.constants.day_of_week, day_of_week_token(moment.day_of_week)),
            (self.constants.time, format_time(moment.hour, moment.minute, moment.second, ambient)),
            (self.constants.date, format_date(moment.month, moment.day, moment.year)),
        ]
        return [self.place(row, text, dimensions, measure) for row, text in rows]

    @staticmethod
    def place(
        row: RowLayout,
        text: str,
        dimensions: SurfaceDimensions,
        measure: TextMeasure,
    ) -> TextBlock:
        """Place one row so the glyphs' visual center sits on ``row.center``."""
        font_size = int(round(to_pixels(row.height, dimensions.height)))
        text_height = measure(text, font_size) if text else 0.0
        y = to_pixels(row.center, dimensions.height) + text_height * 0.5
        x = to_pixels(row.x, dimensions.width)
        return TextBlock(text=text, x=x, y=y, font_size=font_size)
