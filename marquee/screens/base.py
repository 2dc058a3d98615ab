"""
Screen base - Mount/unmount lifecycle and guarded background loading.
"""
import logging
import threading

from ..utils import run_async

logger = logging.getLogger(__name__)


class Screen:
    """
    A screen's data state.

    mount() starts load() on a background thread. Results are written through
    _apply(), which drops them if the screen was unmounted (or remounted)
    since the load started.
    """

    name = 'Screen'

    def __init__(self, client):
        self.client = client
        self.loading = False
        self.mounted = False
        self._generation = 0
        self._lock = threading.Lock()

    def mount(self):
        """Show the screen and start fetching its data."""
        with self._lock:
            self._generation += 1
            self.mounted = True
            self.loading = True
            generation = self._generation
        logger.debug(f'{self.name} mounted (generation {generation})')
        run_async(self.load, generation)

    def unmount(self):
        """Hide the screen. Any load still in flight is discarded when it lands."""
        with self._lock:
            self._generation += 1
            self.mounted = False
        logger.debug(f'{self.name} unmounted')

    @property
    def generation(self) -> int:
        return self._generation

    def load(self, generation=None):
        """Fetch this screen's data synchronously and apply it."""
        raise NotImplementedError

    def _apply(self, generation, **state) -> bool:
        """Write state unless the screen moved on. Returns True if written.

        generation=None applies unconditionally (direct synchronous loads).
        """
        with self._lock:
            if generation is not None and (generation != self._generation or not self.mounted):
                logger.debug(f'{self.name}: discarding stale load (generation {generation})')
                return False
            for key, value in state.items():
                setattr(self, key, value)
            self.loading = False
            return True
