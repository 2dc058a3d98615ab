"""
Player Screen - Hosts the trailer in a single embedded iframe.

pygame cannot render web content, so the embed document is written to
PLAYER_DIR and opened in the system browser.
"""
import logging
import webbrowser
from html import escape
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from ..config import PLAYER_DIR, VIDEO_EMBED_URL, VIDEO_WATCH_URL
from ..utils import run_async

logger = logging.getLogger(__name__)

EMBED_TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style>
      * {{ margin: 0; padding: 0; }}
      body {{ background: #000; overflow: hidden; }}
      .container {{
        width: 100vw;
        height: 100vh;
        display: flex;
        align-items: center;
        justify-content: center;
      }}
      iframe {{
        width: 100%;
        height: 100%;
        border: none;
      }}
    </style>
  </head>
  <body>
    <div class="container">
      <iframe
        src="{src}"
        allow="accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; picture-in-picture"
        allowfullscreen>
      </iframe>
    </div>
  </body>
</html>
"""


def embed_url(media_key: str) -> str:
    return VIDEO_EMBED_URL.format(key=quote(media_key, safe=''))


def build_embed_html(media_key: str, title: str = '') -> str:
    """Full-viewport document with one iframe pointed at the video host."""
    return EMBED_TEMPLATE.format(
        title=escape(title or 'Trailer'),
        src=escape(embed_url(media_key)),
    )


class PlayerScreen:
    """Trailer player for one media key. Makes no catalog requests."""

    name = 'Player'

    def __init__(self, media_key: str, title: str = '', player_dir: Path = PLAYER_DIR,
                 opener=webbrowser.open):
        self.media_key = media_key
        self.title = title
        self.player_dir = player_dir
        self._opener = opener
        self.loading = False
        self.mounted = False
        self.document_path: Optional[Path] = None

    @property
    def watch_url(self) -> str:
        return VIDEO_WATCH_URL.format(key=quote(self.media_key, safe=''))

    def mount(self):
        """Open the trailer on a background thread; the browser may block."""
        self.mounted = True
        run_async(self.open)

    def unmount(self):
        self.mounted = False

    def write_document(self) -> Path:
        """Write the embed document and return its path."""
        self.player_dir.mkdir(parents=True, exist_ok=True)
        path = self.player_dir / 'player.html'
        path.write_text(build_embed_html(self.media_key, self.title), encoding='utf-8')
        self.document_path = path
        return path

    def open(self) -> bool:
        """Show the trailer in the browser. Returns False if it could not be opened."""
        try:
            path = self.write_document()
        except OSError as e:
            logger.error(f'Cannot write player document: {e}', exc_info=True)
            return False

        logger.info(f'Playing trailer {self.media_key} ({self.title})')
        opened = self._opener(path.as_uri())
        if not opened:
            logger.warning(f'No browser available, trailer at {self.watch_url}')
        return bool(opened)
