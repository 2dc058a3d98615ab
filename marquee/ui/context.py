"""
Render Context - Bundles all state needed for rendering.
"""
from dataclasses import dataclass
from typing import Union

from ..models import NavigationState
from ..managers import ScrollGroup
from ..screens import HomeScreen, BrowseScreen, DetailsScreen, PlayerScreen


@dataclass
class RenderContext:
    """All state needed to render a frame."""
    state: NavigationState
    screen: Union[HomeScreen, BrowseScreen, DetailsScreen, PlayerScreen]
    scroll: ScrollGroup
    tab_bar_visible: bool
    pressed_action: tuple = ()
