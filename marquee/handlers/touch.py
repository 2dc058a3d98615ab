"""
Touch Handler - Tap vs. drag detection for scrolling and buttons.
"""
import time
import logging
from typing import Tuple, Optional

from ..config import DRAG_THRESHOLD

logger = logging.getLogger(__name__)


class TouchHandler:
    """Tracks one press. Moving past DRAG_THRESHOLD turns it into a drag.

    Drags are locked to the axis they started on, so a row can scroll
    sideways while the page scrolls vertically.
    """

    def __init__(self):
        self.start_x = 0
        self.start_y = 0
        self.last_x = 0
        self.last_y = 0
        self.start_time = 0
        self.pressed = False
        self.axis: Optional[str] = None  # 'x' or 'y' once dragging

    @property
    def dragging(self) -> bool:
        return self.pressed and self.axis is not None

    def on_down(self, pos: Tuple[int, int]):
        """Called on touch/mouse down."""
        self.start_x, self.start_y = pos
        self.last_x, self.last_y = pos
        self.start_time = time.time()
        self.pressed = True
        self.axis = None
        logger.debug(f'Touch down at ({pos[0]}, {pos[1]})')

    def on_move(self, pos: Tuple[int, int]) -> Tuple[int, int]:
        """Called on touch/mouse move. Returns (dx, dy) since the last move along the drag axis."""
        if not self.pressed:
            return (0, 0)

        if self.axis is None:
            total_dx = pos[0] - self.start_x
            total_dy = pos[1] - self.start_y
            if max(abs(total_dx), abs(total_dy)) <= DRAG_THRESHOLD:
                return (0, 0)
            self.axis = 'x' if abs(total_dx) > abs(total_dy) else 'y'
            logger.debug(f'Drag started along {self.axis}')

        dx = pos[0] - self.last_x
        dy = pos[1] - self.last_y
        self.last_x, self.last_y = pos
        if self.axis == 'x':
            return (dx, 0)
        return (0, dy)

    def on_up(self, pos: Tuple[int, int]) -> Optional[str]:
        """
        Called on touch/mouse up.

        Returns:
            'tap' if the press never became a drag, 'drag' if it did,
            None if there was no press.
        """
        if not self.pressed:
            return None

        self.pressed = False
        was_drag = self.axis is not None
        self.axis = None
        dt = (time.time() - self.start_time) * 1000  # ms
        if was_drag:
            logger.debug(f'Touch up: drag ended, dt={dt:.0f}ms')
            return 'drag'
        logger.debug(f'Touch up: tap at ({pos[0]}, {pos[1]}), dt={dt:.0f}ms')
        return 'tap'
