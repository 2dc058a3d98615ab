"""
Marquee Screens - Per-screen data state and actions.
"""
from .base import Screen
from .home import HomeScreen
from .browse import BrowseScreen, ROWS
from .details import DetailsScreen
from .player import PlayerScreen, build_embed_html

__all__ = [
    'Screen',
    'HomeScreen',
    'BrowseScreen',
    'ROWS',
    'DetailsScreen',
    'PlayerScreen',
    'build_embed_html',
]
