"""Pattern library and clipped placement."""

from .library import (
    ACORN, BEACON, BLINKER, BLOCK, GLIDER, GOSPER_GLIDER_GUN, LIBRARY, LWSS,
    PULSAR, TOAD, Pattern, get_pattern, place_at_center, place_pattern,
)

__all__ = [
    'ACORN',
    'BEACON',
    'BLINKER',
    'BLOCK',
    'GLIDER',
    'GOSPER_GLIDER_GUN',
    'LIBRARY',
    'LWSS',
    'PULSAR',
    'TOAD',
    'Pattern',
    'get_pattern',
    'place_at_center',
    'place_pattern',
]
