"""
Tests for the trailer player document and browser hand-off.
"""
import threading
from unittest.mock import MagicMock

from marquee.screens import PlayerScreen, build_embed_html
from marquee.screens.player import embed_url


class TestEmbedDocument:
    """Tests for the generated iframe page."""

    def test_embed_url(self):
        url = embed_url('qtRKdVHc-cE')
        assert url.startswith('https://www.youtube.com/embed/qtRKdVHc-cE?')
        assert 'autoplay=1' in url
        assert 'playsinline=1' in url

    def test_document_has_single_iframe(self):
        html = build_embed_html('k1', 'Fight Club')

        assert html.count('<iframe') == 1
        assert 'youtube.com/embed/k1' in html
        assert '<title>Fight Club</title>' in html
        assert 'allowfullscreen' in html

    def test_title_is_escaped(self):
        html = build_embed_html('k1', '<script>alert(1)</script>')

        assert '<script>' not in html
        assert '&lt;script&gt;' in html

    def test_key_is_url_quoted(self):
        html = build_embed_html('a b"c')

        assert 'a%20b%22c' in html
        assert 'a b"c' not in html


class TestPlayerScreen:
    """Tests for opening the player."""

    def test_open_writes_document_and_calls_browser(self, temp_dir):
        opener = MagicMock(return_value=True)
        player = PlayerScreen('k1', 'Fight Club', player_dir=temp_dir, opener=opener)

        assert player.open() is True

        path = temp_dir / 'player.html'
        assert path.exists()
        assert 'youtube.com/embed/k1' in path.read_text(encoding='utf-8')
        opener.assert_called_once_with(path.as_uri())

    def test_mount_opens_off_calling_thread(self, temp_dir):
        """The browser is launched from a background thread, never the UI loop."""
        opened = threading.Event()
        threads = []

        def opener(uri):
            threads.append(threading.current_thread())
            opened.set()
            return True

        player = PlayerScreen('k1', 'Fight Club', player_dir=temp_dir, opener=opener)
        player.mount()

        assert player.mounted
        assert opened.wait(2)
        assert threads[0] is not threading.current_thread()
        player.unmount()
        assert not player.mounted

    def test_no_browser(self, temp_dir):
        player = PlayerScreen('k1', player_dir=temp_dir, opener=MagicMock(return_value=False))

        assert player.open() is False
        assert player.document_path == temp_dir / 'player.html'

    def test_unwritable_dir(self, temp_dir):
        blocker = temp_dir / 'file'
        blocker.write_text('x')
        opener = MagicMock()
        player = PlayerScreen('k1', player_dir=blocker / 'sub', opener=opener)

        assert player.open() is False
        opener.assert_not_called()

    def test_watch_url(self):
        player = PlayerScreen('k1', opener=MagicMock())
        assert player.watch_url == 'https://www.youtube.com/watch?v=k1'

    def test_makes_no_catalog_requests(self):
        """Player has no client at all."""
        player = PlayerScreen('k1', opener=MagicMock())
        assert not hasattr(player, 'client')
