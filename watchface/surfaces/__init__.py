# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Drawing surface backends."""

from .base import DrawingSurface
from .pillow_surface import PillowSurface

__all__ = [
    'DrawingSurface',
    'PillowSurface',
]
