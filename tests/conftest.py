"""
Pytest configuration and shared fixtures for Marquee tests.
"""
import pytest
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import MagicMock

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from marquee.api import CatalogClient, FetchError
from marquee.api.tmdb import parse_item, parse_asset


def make_response(status_code=200, payload=None):
    """Build a fake requests.Response."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = status_code < 400
    resp.json.return_value = payload if payload is not None else {}
    return resp


def make_movie(movie_id, title=None, rating=7.5, **extra):
    data = {
        'id': movie_id,
        'title': title or f'Movie {movie_id}',
        'overview': f'Overview {movie_id}',
        'vote_average': rating,
        'poster_path': f'/poster{movie_id}.jpg',
        'backdrop_path': f'/backdrop{movie_id}.jpg',
        'release_date': '2020-05-01',
    }
    data.update(extra)
    return data


class FakeCatalogClient:
    """In-memory catalog client that records calls and can be told to fail."""

    def __init__(self, lists=None, details=None, similar=None, videos=None, fail=()):
        self.lists = lists or {}
        self.details = details or {}
        self.similar = similar or {}
        self.videos = videos or {}
        self.fail = set(fail)
        self.calls = []

    def _check(self, name, key, **context):
        self.calls.append((name, key))
        if name in self.fail or (name, key) in self.fail:
            raise FetchError(f'{name} {key} failed', **context)

    def fetch_list(self, category, page=1):
        self._check('list', category, category=category, page=page)
        return [parse_item(m) for m in self.lists.get(category, [])]

    def fetch_details(self, item_id):
        self._check('details', item_id, item_id=item_id)
        if item_id not in self.details:
            raise FetchError(f'Movie {item_id} not found', item_id=item_id, status_code=404)
        return parse_item(self.details[item_id])

    def fetch_similar(self, item_id):
        self._check('similar', item_id, item_id=item_id)
        return [parse_item(m) for m in self.similar.get(item_id, [])]

    def fetch_media_assets(self, item_id):
        self._check('videos', item_id, item_id=item_id)
        return [parse_asset(v) for v in self.videos.get(item_id, [])]

    def poster_url(self, path):
        return f'https://img.test/w500{path}' if path else None

    def backdrop_url(self, path):
        return f'https://img.test/w780{path}' if path else None


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that's cleaned up after each test."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def client():
    """CatalogClient with a mocked HTTP session."""
    catalog = CatalogClient('test-key', base_url='https://api.test/3', image_base_url='https://img.test/t/p')
    catalog.session = MagicMock()
    catalog.session.params = {'api_key': 'test-key'}
    return catalog


@pytest.fixture
def sample_list_payload():
    return {
        'page': 1,
        'results': [make_movie(550, 'Fight Club', 8.4), make_movie(603, 'The Matrix', 8.2)],
    }


@pytest.fixture
def sample_details_payload():
    return make_movie(
        550, 'Fight Club', 8.4,
        runtime=139,
        genres=[{'id': 18, 'name': 'Drama'}, {'id': 53, 'name': 'Thriller'}],
    )


@pytest.fixture
def sample_videos_payload():
    return {
        'id': 550,
        'results': [
            {'id': 'a', 'type': 'Clip', 'site': 'YouTube', 'key': 'clip1', 'name': 'Clip'},
            {'id': 'b', 'type': 'Trailer', 'site': 'YouTube', 'key': 'k1', 'name': 'Trailer'},
        ],
    }


@pytest.fixture
def fake_catalog():
    """Fake client with every list populated and movie 550 fully described."""
    lists = {
        category: [make_movie(i + offset) for i in range(1, 8)]
        for offset, category in zip((0, 100, 200, 300), ('popular', 'now_playing', 'upcoming', 'top_rated'))
    }
    lists['popular'][0] = make_movie(550, 'Fight Club', 8.4)
    return FakeCatalogClient(
        lists=lists,
        details={550: make_movie(550, 'Fight Club', 8.4, runtime=139, genres=[{'name': 'Drama'}])},
        similar={550: [make_movie(1000 + i) for i in range(15)]},
        videos={550: [
            {'id': 'a', 'type': 'Clip', 'site': 'YouTube', 'key': 'clip1'},
            {'id': 'b', 'type': 'Trailer', 'site': 'YouTube', 'key': 'k1'},
        ]},
    )
