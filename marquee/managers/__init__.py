"""
Marquee Managers - Animation state.
"""
from .scroll import SmoothScroller, ScrollGroup

__all__ = ['SmoothScroller', 'ScrollGroup']
