"""
Shared utilities: easing curves and constants
"""

from .constants import *
from .easing import ease_out_cubic, get_easing, linear

__all__ = [
    'ease_out_cubic',
    'get_easing',
    'linear',
    'DEFAULT_START_COLOR',
    'DEFAULT_INTERACTION_COLOR',
    'FADE_DURATION_MS',
    'FLASH_DURATION_MS',
    'ICON_OPACITY',
    'RING_OPACITY',
    'CURSOR_KEY',
    'BUTTON_PRIMARY',
    'BUTTON_SECONDARY',
    'CLICK_LISTENER_EVENTS',
    'RENDER_ORDER_ON_TOP',
    'RENDER_ORDER_DEFAULT',
    'TICK_INTERVAL_MS',
]
