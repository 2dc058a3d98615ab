"""
Tests for NavigationController - transitions, back edges, tabs, parameter bag.
"""
import pytest

from marquee.controllers import NavigationController
from marquee.models import DetailsParams, PlayerParams, HOME, BROWSE, DETAILS, PLAYER


class TestTransitions:
    """Tests for forward navigation."""

    def test_starts_on_home(self):
        nav = NavigationController()
        assert nav.current_screen == HOME
        assert nav.params == {'item_id': None, 'media_key': None, 'title': None}

    def test_select_item_opens_details(self):
        nav = NavigationController()
        nav.transition(DETAILS, DetailsParams(550))

        assert nav.current_screen == DETAILS
        assert nav.params['item_id'] == 550

    def test_back_from_player_keeps_item(self):
        """Details(42) -> Player -> back lands on Details with item 42."""
        nav = NavigationController()
        nav.transition(DETAILS, DetailsParams(42))
        nav.transition(PLAYER, PlayerParams('abc', 'X'))
        nav.back()

        assert nav.current_screen == DETAILS
        assert nav.params['item_id'] == 42
        assert nav.params['media_key'] == 'abc'
        assert nav.params['title'] == 'X'

    def test_similar_item_reenters_details(self):
        nav = NavigationController()
        nav.transition(DETAILS, DetailsParams(1))
        nav.transition(DETAILS, DetailsParams(2))

        assert nav.current_screen == DETAILS
        assert nav.params['item_id'] == 2

    def test_player_payload_overwrites_title(self):
        """A new Player payload always replaces both key and title."""
        nav = NavigationController()
        nav.transition(DETAILS, DetailsParams(1))
        nav.transition(PLAYER, PlayerParams('k1', 'First'))
        nav.back()
        nav.transition(DETAILS, DetailsParams(2))
        nav.transition(PLAYER, PlayerParams('k2', 'Second'))

        assert nav.params == {'item_id': 2, 'media_key': 'k2', 'title': 'Second'}

    def test_tab_switch_keeps_parameters(self):
        nav = NavigationController()
        nav.transition(DETAILS, DetailsParams(7))
        nav.back()
        nav.select_tab(HOME)

        assert nav.params['item_id'] == 7


class TestPayloadValidation:
    """Illegal transitions are rejected."""

    def test_details_requires_item(self):
        nav = NavigationController()
        with pytest.raises(ValueError):
            nav.transition(DETAILS)
        assert nav.current_screen == HOME

    def test_details_rejects_missing_item_id(self):
        """DetailsParams(None) is rejected and the stored id survives."""
        nav = NavigationController()
        nav.transition(DETAILS, DetailsParams(42))
        nav.back()

        with pytest.raises(ValueError):
            nav.transition(DETAILS, DetailsParams(None))

        assert nav.current_screen == BROWSE
        assert nav.params['item_id'] == 42

    def test_player_title_is_required(self):
        """Key and title always travel together."""
        with pytest.raises(TypeError):
            PlayerParams('k1')

    def test_player_requires_media_key(self):
        nav = NavigationController()
        with pytest.raises(ValueError):
            nav.transition(PLAYER, DetailsParams(1))
        with pytest.raises(ValueError):
            nav.transition(PLAYER, PlayerParams('', 'Title'))
        assert nav.current_screen == HOME

    def test_tabs_take_no_payload(self):
        nav = NavigationController()
        with pytest.raises(ValueError):
            nav.transition(BROWSE, DetailsParams(1))

    def test_unknown_screen(self):
        nav = NavigationController()
        with pytest.raises(ValueError):
            nav.transition('Settings')


class TestBackEdges:
    """Tests for the fixed back edges."""

    def test_details_back_goes_to_browse(self):
        """Back from Details always lands on Browse, even when entered from Home."""
        nav = NavigationController()
        nav.transition(DETAILS, DetailsParams(5))

        assert nav.back() is True
        assert nav.current_screen == BROWSE
        assert nav.params['item_id'] == 5

    @pytest.mark.parametrize('screen', [HOME, BROWSE])
    def test_no_back_edge_on_tabs(self, screen):
        nav = NavigationController(initial=screen)
        assert nav.back() is False
        assert nav.current_screen == screen


class TestTabs:
    """Tests for the Home/Browse tab bar."""

    def test_switch_tabs(self):
        nav = NavigationController()
        nav.select_tab(BROWSE)
        assert nav.current_screen == BROWSE
        nav.select_tab(HOME)
        assert nav.current_screen == HOME

    def test_tab_bar_visibility(self):
        nav = NavigationController()
        assert nav.tab_bar_visible
        nav.transition(DETAILS, DetailsParams(1))
        assert not nav.tab_bar_visible
        nav.transition(PLAYER, PlayerParams('k', 'T'))
        assert not nav.tab_bar_visible

    def test_tab_hidden_outside_tab_screens(self):
        nav = NavigationController()
        nav.transition(DETAILS, DetailsParams(1))
        with pytest.raises(ValueError):
            nav.select_tab(HOME)

    def test_only_home_and_browse_are_tabs(self):
        nav = NavigationController()
        with pytest.raises(ValueError):
            nav.select_tab(DETAILS)


class TestListeners:
    """Tests for change notifications."""

    def test_listener_receives_each_state(self):
        nav = NavigationController()
        seen = []
        nav.subscribe(seen.append)

        nav.transition(DETAILS, DetailsParams(3))
        nav.transition(PLAYER, PlayerParams('k', 'T'))
        nav.back()

        assert [s.screen for s in seen] == [DETAILS, PLAYER, DETAILS]
        assert seen[-1].item_id == 3

    def test_selecting_current_tab_is_silent(self):
        nav = NavigationController()
        seen = []
        nav.subscribe(seen.append)

        nav.select_tab(HOME)

        assert seen == []

    def test_failed_back_is_silent(self):
        nav = NavigationController()
        seen = []
        nav.subscribe(seen.append)

        nav.back()

        assert seen == []
