"""
Navigation Controller - Single source of truth for the visible screen.

Screens:
- Home / Browse: top-level tabs, switched via the tab bar
- Details: one movie, entered from Home, Browse or a similar title
- Player: trailer for the movie shown on Details

Back edges are fixed: Player -> Details and Details -> Browse.
"""
import logging
from dataclasses import replace
from typing import Callable, List, Union

from ..models import (
    NavigationState, DetailsParams, PlayerParams,
    HOME, BROWSE, DETAILS, PLAYER, SCREENS, TAB_SCREENS,
)

logger = logging.getLogger(__name__)

Payload = Union[DetailsParams, PlayerParams, None]
Listener = Callable[[NavigationState], None]

# Payload type each screen requires (None = takes no payload)
_PAYLOAD_TYPES = {
    HOME: None,
    BROWSE: None,
    DETAILS: DetailsParams,
    PLAYER: PlayerParams,
}

_BACK_EDGES = {
    PLAYER: DETAILS,
    DETAILS: BROWSE,
}


class NavigationController:
    """Owns the current screen and the parameter bag it needs."""

    def __init__(self, initial: str = HOME):
        if initial not in SCREENS:
            raise ValueError(f'Unknown screen: {initial!r}')
        self._state = NavigationState(screen=initial)
        self._listeners: List[Listener] = []

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def current_screen(self) -> str:
        return self._state.screen

    @property
    def params(self) -> dict:
        """Copy of the parameter bag."""
        return {
            'item_id': self._state.item_id,
            'media_key': self._state.media_key,
            'title': self._state.title,
        }

    @property
    def tab_bar_visible(self) -> bool:
        return self._state.screen in TAB_SCREENS

    def subscribe(self, listener: Listener):
        """Register a callback invoked with the new state after each change."""
        self._listeners.append(listener)

    def transition(self, target: str, payload: Payload = None):
        """Go to target, overwriting every parameter the payload carries."""
        if target not in SCREENS:
            raise ValueError(f'Unknown screen: {target!r}')

        expected = _PAYLOAD_TYPES[target]
        if expected is None:
            if payload is not None:
                raise ValueError(f'{target} takes no parameters, got {payload!r}')
        elif not isinstance(payload, expected):
            raise ValueError(f'{target} requires {expected.__name__}, got {payload!r}')

        state = self._state
        if isinstance(payload, DetailsParams):
            if payload.item_id is None:
                raise ValueError('Details requires an item id')
            state = replace(state, item_id=payload.item_id)
        elif isinstance(payload, PlayerParams):
            if not payload.media_key:
                raise ValueError('Player requires a media key')
            state = replace(state, media_key=payload.media_key, title=payload.title)

        self._set(replace(state, screen=target))

    def back(self) -> bool:
        """Follow the fixed back edge from the current screen.

        Leaves the parameter bag untouched. Returns False when the current
        screen has no back edge (Home, Browse).
        """
        target = _BACK_EDGES.get(self._state.screen)
        if target is None:
            return False
        self._set(replace(self._state, screen=target))
        return True

    def select_tab(self, screen: str):
        """Switch between the Home and Browse tabs."""
        if screen not in TAB_SCREENS:
            raise ValueError(f'{screen!r} is not a tab')
        if not self.tab_bar_visible:
            raise ValueError(f'Tab bar is hidden on {self._state.screen}')
        if screen == self._state.screen:
            return
        self._set(replace(self._state, screen=screen))

    def _set(self, state: NavigationState):
        previous = self._state
        self._state = state
        logger.info(f'Navigate: {previous.screen} -> {state.screen} '
                    f'(item_id={state.item_id}, media_key={state.media_key})')
        for listener in list(self._listeners):
            listener(state)
