"""
Tests for screens - data loading, failure fallbacks, stale loads, navigation hooks.
"""
import pytest

from marquee.controllers import NavigationController
from marquee.models import DetailsParams, HOME, BROWSE, DETAILS, PLAYER
from marquee.screens import HomeScreen, BrowseScreen, DetailsScreen, ROWS
from marquee.screens import base


@pytest.fixture
def deferred(monkeypatch):
    """Capture background loads instead of starting threads."""
    pending = []
    monkeypatch.setattr(base, 'run_async', lambda fn, *args: pending.append((fn, args)))
    return pending


class TestHomeScreen:
    """Tests for the featured list."""

    def test_loads_first_five_popular(self, fake_catalog):
        screen = HomeScreen(fake_catalog)
        screen.load()

        assert len(screen.featured) == 5
        assert screen.featured[0].id == 550
        assert fake_catalog.calls == [('list', 'popular')]
        assert not screen.loading

    def test_short_list_shown_as_is(self, fake_catalog):
        fake_catalog.lists['popular'] = fake_catalog.lists['popular'][:2]
        screen = HomeScreen(fake_catalog)
        screen.load()

        assert [m.id for m in screen.featured] == [550, 2]

    def test_failure_shows_empty(self, fake_catalog):
        fake_catalog.fail.add('list')
        screen = HomeScreen(fake_catalog)
        screen.load()

        assert screen.featured == []
        assert not screen.loading

    def test_select_opens_details(self, fake_catalog):
        nav = NavigationController()
        screen = HomeScreen(fake_catalog)
        screen.load()

        screen.select(nav, screen.featured[0])

        assert nav.current_screen == DETAILS
        assert nav.params['item_id'] == 550

    def test_hero_card_uses_backdrop(self, fake_catalog):
        screen = HomeScreen(fake_catalog)
        screen.load()

        assert screen.image_url(0, screen.featured[0]) == 'https://img.test/w780/backdrop550.jpg'
        assert screen.image_url(1, screen.featured[1]) == 'https://img.test/w500/poster2.jpg'


class TestBrowseScreen:
    """Tests for the four category rows."""

    def test_loads_every_row(self, fake_catalog):
        screen = BrowseScreen(fake_catalog)
        screen.load()

        for category, _ in ROWS:
            assert len(screen.row(category)) == 7
        assert sorted(key for _, key in fake_catalog.calls) == sorted(c for c, _ in ROWS)

    def test_row_titles(self):
        assert [title for _, title in ROWS] == ['Popular Movies', 'Now Playing', 'Coming Soon', 'Top Rated']

    def test_one_failure_empties_all_rows(self, fake_catalog):
        fake_catalog.fail.add(('list', 'now_playing'))
        screen = BrowseScreen(fake_catalog)
        screen.load()

        for category, _ in ROWS:
            assert screen.row(category) == []
        assert not screen.loading

    def test_select_opens_details(self, fake_catalog):
        nav = NavigationController(initial=BROWSE)
        screen = BrowseScreen(fake_catalog)
        screen.load()

        screen.select(nav, screen.row('top_rated')[2])

        assert nav.current_screen == DETAILS
        assert nav.params['item_id'] == 303


class TestDetailsScreen:
    """Tests for the joined details load."""

    def test_loads_everything_for_item(self, fake_catalog):
        screen = DetailsScreen(fake_catalog, 550)
        screen.load()

        assert screen.movie.title == 'Fight Club'
        assert sorted(fake_catalog.calls, key=str) == sorted(
            [('details', 550), ('similar', 550), ('videos', 550)], key=str)
        assert screen.metadata_text == '2020 • 139 min'
        assert not screen.not_found

    def test_similar_limited_to_ten(self, fake_catalog):
        screen = DetailsScreen(fake_catalog, 550)
        screen.load()

        assert len(screen.similar) == 10
        assert screen.similar[0].id == 1000

    def test_unknown_item_is_not_found(self, fake_catalog):
        screen = DetailsScreen(fake_catalog, 12345)
        screen.load()

        assert screen.movie is None
        assert screen.not_found
        assert not screen.can_play

    def test_videos_failure_fails_whole_load(self, fake_catalog):
        fake_catalog.fail.add('videos')
        screen = DetailsScreen(fake_catalog, 550)
        screen.load()

        assert screen.movie is None
        assert screen.similar == []
        assert screen.assets == []

    def test_play_prefers_trailer(self, fake_catalog):
        nav = NavigationController()
        nav.transition(DETAILS, DetailsParams(550))
        screen = DetailsScreen(fake_catalog, 550)
        screen.load()

        assert screen.play(nav) is True
        assert nav.current_screen == PLAYER
        assert nav.params['media_key'] == 'k1'
        assert nav.params['title'] == 'Fight Club'

    def test_no_assets_means_no_play(self, fake_catalog):
        fake_catalog.videos[550] = []
        nav = NavigationController()
        nav.transition(DETAILS, DetailsParams(550))
        screen = DetailsScreen(fake_catalog, 550)
        screen.load()

        assert not screen.can_play
        assert screen.play(nav) is False
        assert nav.current_screen == DETAILS

    def test_select_similar_reenters_details(self, fake_catalog):
        nav = NavigationController()
        nav.transition(DETAILS, DetailsParams(550))
        screen = DetailsScreen(fake_catalog, 550)
        screen.load()

        screen.select_similar(nav, screen.similar[3])

        assert nav.current_screen == DETAILS
        assert nav.params['item_id'] == 1003


class TestStaleLoads:
    """Results that land after a screen moved on are dropped."""

    def test_mount_starts_background_load(self, fake_catalog, deferred):
        screen = HomeScreen(fake_catalog)
        screen.mount()

        assert screen.loading
        assert len(deferred) == 1
        fn, args = deferred[0]
        fn(*args)
        assert len(screen.featured) == 5
        assert not screen.loading

    def test_load_after_unmount_discarded(self, fake_catalog, deferred):
        screen = DetailsScreen(fake_catalog, 550)
        screen.mount()
        screen.unmount()

        fn, args = deferred[0]
        fn(*args)

        assert screen.movie is None
        assert screen.similar == []

    def test_only_latest_mount_applies(self, fake_catalog, deferred):
        screen = BrowseScreen(fake_catalog)
        screen.mount()
        screen.unmount()
        screen.mount()

        old_fn, old_args = deferred[0]
        new_fn, new_args = deferred[1]

        old_fn(*old_args)
        assert screen.row('popular') == []

        new_fn(*new_args)
        assert len(screen.row('popular')) == 7


class TestEndToEnd:
    """Home -> Details -> Player -> back -> back."""

    def test_full_journey(self, fake_catalog):
        nav = NavigationController()
        assert nav.current_screen == HOME

        home = HomeScreen(fake_catalog)
        home.load()
        home.select(nav, home.featured[0])

        details = DetailsScreen(fake_catalog, nav.params['item_id'])
        details.load()
        assert details.play(nav)
        assert nav.params['media_key'] == 'k1'

        assert nav.back()
        assert nav.current_screen == DETAILS
        assert nav.params['item_id'] == 550

        assert nav.back()
        assert nav.current_screen == BROWSE
        assert nav.tab_bar_visible
