"""
Image Cache - Downloads and caches poster and backdrop images.
"""
import time
import logging
import threading
from typing import Optional, Dict, Tuple
from io import BytesIO

import pygame
import requests
from PIL import Image, ImageDraw, ImageOps

from .helpers import draw_aa_rounded_rect
from ..config import COLORS, IMAGE_CACHE_MAX_SIZE, REQUEST_TIMEOUT

logger = logging.getLogger(__name__)

Size = Tuple[int, int]


def apply_rounded_corners_pil(img: Image.Image, radius: int) -> Image.Image:
    """Apply rounded corners to a PIL image with transparency."""
    w, h = img.size
    mask = Image.new('L', (w, h), 0)
    draw = ImageDraw.Draw(mask)
    draw.rounded_rectangle([(0, 0), (w - 1, h - 1)], radius=radius, fill=255)
    result = Image.new('RGBA', (w, h), (0, 0, 0, 0))
    result.paste(img, (0, 0), mask)
    return result


def prepare_image(data: bytes, size: Size, radius: int = 8) -> Image.Image:
    """Decode image bytes and crop-to-fill the requested size."""
    img = Image.open(BytesIO(data)).convert('RGBA')
    img = ImageOps.fit(img, size, Image.Resampling.LANCZOS)
    if radius:
        img = apply_rounded_corners_pil(img, radius)
    return img


class ImageCache:
    """Downloads images in the background and serves placeholders until ready."""

    def __init__(self, max_size: int = IMAGE_CACHE_MAX_SIZE):
        self.max_size = max_size
        self.cache: Dict[str, pygame.Surface] = {}
        self._access_times: Dict[str, float] = {}  # Track last access for LRU eviction
        self.loading: set = set()
        self.failed: set = set()
        self._loading_lock = threading.Lock()
        self.session = requests.Session()

    def get_placeholder(self, size: Size, radius: int = 8) -> pygame.Surface:
        """Get a placeholder surface for missing images."""
        cache_key = f'_placeholder_{size[0]}x{size[1]}_{radius}'
        if cache_key not in self.cache:
            placeholder = pygame.Surface(size, pygame.SRCALPHA)
            draw_aa_rounded_rect(placeholder, COLORS['placeholder'], (0, 0, size[0], size[1]), radius)
            self.cache[cache_key] = placeholder
        return self.cache[cache_key]

    def get(self, url: Optional[str], size: Size, radius: int = 8) -> pygame.Surface:
        """Get an image surface, downloading it in the background if needed."""
        if not url:
            return self.get_placeholder(size, radius)

        cache_key = f'{url}_{size[0]}x{size[1]}_{radius}'
        if cache_key in self.cache:
            self._access_times[cache_key] = time.time()
            return self.cache[cache_key]

        self._evict_if_needed()

        with self._loading_lock:
            if cache_key not in self.loading and cache_key not in self.failed:
                self.loading.add(cache_key)
                thread = threading.Thread(
                    target=self._download,
                    args=(url, size, radius, cache_key),
                    daemon=True
                )
                thread.start()

        return self.get_placeholder(size, radius)

    def _evict_if_needed(self):
        """Evict least recently used cache entries if cache is too large."""
        if len(self.cache) <= self.max_size:
            return

        # Snapshot first: download threads insert while we scan
        evictable = [
            (key, self._access_times.get(key, 0))
            for key in list(self.cache)
            if not key.startswith('_')  # Keep placeholders
        ]
        evictable.sort(key=lambda x: x[1])

        keys_to_remove = [key for key, _ in evictable[:max(1, self.max_size // 10)]]
        for key in keys_to_remove:
            self.cache.pop(key, None)
            self._access_times.pop(key, None)

        logger.debug(f'Evicted {len(keys_to_remove)} LRU cached images')

    def _download(self, url: str, size: Size, radius: int, cache_key: str):
        """Download image from URL in background."""
        try:
            resp = self.session.get(url, timeout=REQUEST_TIMEOUT)
            resp.raise_for_status()
            img = prepare_image(resp.content, size, radius)
            surface = pygame.image.frombytes(img.tobytes(), img.size, 'RGBA')
            self.cache[cache_key] = surface
            self._access_times[cache_key] = time.time()
        except requests.RequestException as e:
            logger.warning(f'Error downloading image {url}: {e}')
            with self._loading_lock:
                self.failed.add(cache_key)
        except (OSError, ValueError) as e:
            logger.warning(f'Error decoding image {url}: {e}')
            with self._loading_lock:
                self.failed.add(cache_key)
        finally:
            with self._loading_lock:
                self.loading.discard(cache_key)
