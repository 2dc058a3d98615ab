"""
Marquee UI - Rendering and visual components.
"""
from .helpers import (
    draw_aa_circle,
    draw_aa_rounded_rect,
    fit_text,
    wrap_text,
)
from .image_cache import ImageCache
from .renderer import Renderer
from .context import RenderContext

__all__ = [
    'draw_aa_circle',
    'draw_aa_rounded_rect',
    'fit_text',
    'wrap_text',
    'ImageCache',
    'Renderer',
    'RenderContext',
]
