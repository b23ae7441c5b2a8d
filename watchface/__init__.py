# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
# WatchFace - Sport Digital Watch Face
"""
WatchFace renders a sport-style digital watch face (day of week, time, date)
with resolution-independent layout and separate interactive/ambient styling.
"""

__version__ = "1.0.0"
__author__ = "WatchFace"
