"""
Marquee Utilities - Shared helper functions.
"""
import threading
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Any

logger = logging.getLogger(__name__)


def run_async(fn, *args):
    """Fire-and-forget async execution in daemon thread.

    Wraps function to catch and log exceptions.
    """
    def wrapper():
        try:
            fn(*args)
        except Exception as e:
            logger.warning(f'Async task {fn.__name__} failed: {e}', exc_info=True)

    threading.Thread(target=wrapper, daemon=True).start()


def fetch_all(*calls: Callable[[], Any]) -> List[Any]:
    """Run calls concurrently and return their results in order.

    All-or-nothing: waits for every call, then re-raises the first
    failure (in call order) if any call raised.
    """
    if not calls:
        return []

    with ThreadPoolExecutor(max_workers=len(calls)) as pool:
        futures = [pool.submit(call) for call in calls]
        # Leaving the block joins every worker, so nothing is left in flight
    return [future.result() for future in futures]
