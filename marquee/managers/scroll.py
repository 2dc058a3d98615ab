"""
Scroll - Smooth scrolling for screen content and horizontal rows.
"""
import math
from typing import Dict


class SmoothScroller:
    """Content follows the finger, then eases to a clamped target."""

    SNAP_THRESHOLD = 0.5  # Pixels

    def __init__(self, decay_rate: float = 12.0):
        self.decay_rate = decay_rate
        self.offset = 0.0
        self.target = 0.0
        self.max_offset = 0.0
        self.settled = True

    def set_extent(self, content_size: float, viewport_size: float):
        """Update the scrollable range after content changes."""
        self.max_offset = max(0.0, content_size - viewport_size)
        self.target = self._clamp(self.target)
        if self.offset > self.max_offset:
            self.settled = False

    def drag(self, delta: float):
        """Move content with the finger (delta in pixels, positive = content moves down/right)."""
        self.offset = self._clamp(self.offset - delta)
        self.target = self.offset
        self.settled = True

    def scroll_by(self, amount: float):
        """Animate by amount (mouse wheel, keys)."""
        self.target = self._clamp(self.target + amount)
        self.settled = False

    def reset(self):
        self.offset = 0.0
        self.target = 0.0
        self.settled = True

    def update(self, dt: float) -> bool:
        """Advance the animation. Returns True if the offset changed."""
        if self.settled:
            return False

        # Frame-rate independent exponential decay
        diff = self.target - self.offset
        self.offset += diff * (1 - math.exp(-self.decay_rate * dt))

        if abs(diff) < self.SNAP_THRESHOLD:
            self.offset = self.target
            self.settled = True
        return True

    def _clamp(self, value: float) -> float:
        return max(0.0, min(value, self.max_offset))


class ScrollGroup:
    """One vertical scroller for the page plus one horizontal scroller per row."""

    def __init__(self, decay_rate: float = 12.0):
        self.decay_rate = decay_rate
        self.page = SmoothScroller(decay_rate)
        self.rows: Dict[str, SmoothScroller] = {}

    def row(self, key: str) -> SmoothScroller:
        if key not in self.rows:
            self.rows[key] = SmoothScroller(self.decay_rate)
        return self.rows[key]

    def reset(self):
        self.page.reset()
        self.rows.clear()

    def update(self, dt: float) -> bool:
        changed = self.page.update(dt)
        for scroller in self.rows.values():
            changed = scroller.update(dt) or changed
        return changed

    @property
    def settled(self) -> bool:
        return self.page.settled and all(s.settled for s in self.rows.values())
