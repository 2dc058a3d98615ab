"""
TMDB API Client - Read-only catalog requests against The Movie Database v3.
"""
import logging
from typing import Optional, List

import requests

from ..models import CatalogItem, MediaAsset
from ..config import (
    TMDB_API_URL, IMAGE_BASE_URL, IMAGE_SIZES, REQUEST_TIMEOUT,
    LIST_CATEGORIES, TRAILER_TYPE, TRAILER_SITE,
)

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """A catalog request failed (transport error, non-2xx status or bad body)."""

    def __init__(self, message: str, category: Optional[str] = None, page: Optional[int] = None,
                 item_id: Optional[int] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.category = category
        self.page = page
        self.item_id = item_id
        self.status_code = status_code


def resolve_image_url(partial_path: Optional[str], size_tier: str,
                      base_url: str = IMAGE_BASE_URL) -> Optional[str]:
    """Build an image URL from a partial path and a size tier.

    Named tiers ('poster', 'backdrop') map through IMAGE_SIZES; anything
    else (e.g. 'w185') is used as-is. Returns None for an empty path so the
    caller can draw a placeholder.
    """
    if not partial_path:
        return None
    tier = IMAGE_SIZES.get(size_tier, size_tier)
    return f'{base_url.rstrip("/")}/{tier}/{partial_path.lstrip("/")}'


def select_trailer(assets: List[MediaAsset]) -> Optional[MediaAsset]:
    """Pick the asset to play.

    First YouTube trailer wins, otherwise the first asset. None means there is
    nothing playable and no play button should be offered.
    """
    for asset in assets:
        if asset.type == TRAILER_TYPE and asset.site == TRAILER_SITE:
            return asset
    return assets[0] if assets else None


def _clamp_rating(value) -> float:
    try:
        rating = float(value or 0.0)
    except (TypeError, ValueError):
        return 0.0
    return max(0.0, min(10.0, rating))


def parse_item(data: dict) -> Optional[CatalogItem]:
    """Map a TMDB movie object to a CatalogItem. Returns None without an id."""
    if not isinstance(data, dict) or not data.get('id'):
        return None
    genres = [g.get('name') for g in data.get('genres') or [] if isinstance(g, dict) and g.get('name')]
    return CatalogItem(
        id=data['id'],
        title=data.get('title') or data.get('name') or '',
        overview=data.get('overview') or '',
        rating=_clamp_rating(data.get('vote_average')),
        poster_path=data.get('poster_path'),
        backdrop_path=data.get('backdrop_path'),
        release_date=data.get('release_date') or None,
        runtime=data.get('runtime'),
        genres=genres,
    )


def parse_asset(data: dict) -> Optional[MediaAsset]:
    """Map a TMDB video object to a MediaAsset. Returns None without a key."""
    if not isinstance(data, dict) or not data.get('key'):
        return None
    return MediaAsset(
        id=str(data.get('id', '')),
        type=data.get('type', ''),
        site=data.get('site', ''),
        key=data['key'],
        name=data.get('name'),
    )


class CatalogClient:
    """Direct REST client for the TMDB catalog."""

    def __init__(self, api_key: str, base_url: str = TMDB_API_URL,
                 image_base_url: str = IMAGE_BASE_URL, timeout: float = REQUEST_TIMEOUT):
        self.base_url = base_url.rstrip('/')
        self.image_base_url = image_base_url
        self.timeout = timeout
        self.session = requests.Session()
        self.session.params = {'api_key': api_key}
        self.session.headers['Accept'] = 'application/json'

    def _get(self, path: str, params: Optional[dict] = None, **context) -> dict:
        """GET a path and return the decoded JSON object.

        Raises FetchError with the given context on any failure.
        """
        url = f'{self.base_url}{path}'
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f'Request to {path} failed: {e}', exc_info=True)
            raise FetchError(f'Request to {path} failed: {e}', **context) from e

        if not resp.ok:
            logger.error(f'Request to {path} returned {resp.status_code}')
            raise FetchError(f'{path} returned {resp.status_code}',
                             status_code=resp.status_code, **context)

        try:
            data = resp.json()
        except ValueError as e:
            logger.error(f'Invalid JSON from {path}: {e}')
            raise FetchError(f'Invalid JSON from {path}', status_code=resp.status_code, **context) from e

        if not isinstance(data, dict):
            raise FetchError(f'Unexpected body from {path}', status_code=resp.status_code, **context)
        return data

    def _get_results(self, path: str, params: Optional[dict] = None, **context) -> list:
        results = self._get(path, params, **context).get('results') or []
        return results if isinstance(results, list) else []

    def fetch_list(self, category: str, page: int = 1) -> List[CatalogItem]:
        """Fetch one page of a category list (popular, now_playing, upcoming, top_rated)."""
        if category not in LIST_CATEGORIES:
            raise ValueError(f'Unknown category: {category!r}')
        if page < 1:
            raise ValueError(f'Page must be >= 1, got {page}')

        results = self._get_results(f'/movie/{category}', {'page': page}, category=category, page=page)
        items = [item for item in (parse_item(r) for r in results) if item]
        logger.debug(f'Fetched {len(items)} {category} movies (page {page})')
        return items

    def fetch_details(self, item_id: int) -> CatalogItem:
        """Fetch the full record for one movie, including runtime and genres."""
        data = self._get(f'/movie/{item_id}', item_id=item_id)
        item = parse_item(data)
        if item is None:
            raise FetchError(f'Movie {item_id} not found', item_id=item_id)
        return item

    def fetch_similar(self, item_id: int) -> List[CatalogItem]:
        """Fetch movies similar to item_id. Empty is a valid answer."""
        results = self._get_results(f'/movie/{item_id}/similar', item_id=item_id)
        return [item for item in (parse_item(r) for r in results) if item]

    def fetch_media_assets(self, item_id: int) -> List[MediaAsset]:
        """Fetch trailers and clips for item_id. Empty is a valid answer."""
        results = self._get_results(f'/movie/{item_id}/videos', item_id=item_id)
        return [asset for asset in (parse_asset(r) for r in results) if asset]

    def resolve_image_url(self, partial_path: Optional[str], size_tier: str) -> Optional[str]:
        return resolve_image_url(partial_path, size_tier, self.image_base_url)

    def poster_url(self, partial_path: Optional[str]) -> Optional[str]:
        return self.resolve_image_url(partial_path, 'poster')

    def backdrop_url(self, partial_path: Optional[str]) -> Optional[str]:
        return self.resolve_image_url(partial_path, 'backdrop')


class NullCatalogClient(CatalogClient):
    """Offline client serving built-in sample data (mock mode)."""

    MOCK_MOVIES = [
        {'id': 550, 'title': 'Fight Club', 'vote_average': 8.4, 'release_date': '1999-10-15',
         'overview': 'An insomniac office worker and a soap salesman form an underground fight club.',
         'poster_path': '/pB8BM7pdSp6B6Ih7QZ4DrQ3PmJK.jpg', 'backdrop_path': '/hZkgoQYus5vegHoetLkCJzb17zJ.jpg',
         'runtime': 139, 'genres': [{'id': 18, 'name': 'Drama'}]},
        {'id': 603, 'title': 'The Matrix', 'vote_average': 8.2, 'release_date': '1999-03-30',
         'overview': 'A hacker learns the world he lives in is a simulation.',
         'poster_path': '/f89U3ADr1oiB1s9GkdPOEpXUk5H.jpg', 'backdrop_path': '/fNG7i7RqMErkcqhohV2a6cV1Ehy.jpg',
         'runtime': 136, 'genres': [{'id': 28, 'name': 'Action'}, {'id': 878, 'name': 'Science Fiction'}]},
        {'id': 157336, 'title': 'Interstellar', 'vote_average': 8.4, 'release_date': '2014-11-05',
         'overview': 'Explorers travel through a wormhole in search of a new home for humanity.',
         'poster_path': '/gEU2QniE6E77NI6lCU6MxlNBvIx.jpg', 'backdrop_path': '/xJHokMbljvjADYdit5fK5VQsXEG.jpg',
         'runtime': 169, 'genres': [{'id': 12, 'name': 'Adventure'}, {'id': 18, 'name': 'Drama'}]},
        {'id': 27205, 'title': 'Inception', 'vote_average': 8.4, 'release_date': '2010-07-15',
         'overview': 'A thief who steals secrets through dreams is offered a final job.',
         'poster_path': '/oYuLEt3zVCKq57qu2F8dT7NIa6f.jpg', 'backdrop_path': '/s3TBrRGB1iav7gFOCNx3H31MoES.jpg',
         'runtime': 148, 'genres': [{'id': 28, 'name': 'Action'}]},
        {'id': 680, 'title': 'Pulp Fiction', 'vote_average': 8.5, 'release_date': '1994-09-10',
         'overview': 'The lives of two mob hitmen, a boxer and a pair of diner bandits intertwine.',
         'poster_path': '/d5iIlFn5s0ImszYzBPb8JPIfbXD.jpg', 'backdrop_path': '/suaEOtk1N1sgg2MTM7oZd2cfVp3.jpg',
         'runtime': 154, 'genres': [{'id': 53, 'name': 'Thriller'}, {'id': 80, 'name': 'Crime'}]},
        {'id': 13, 'title': 'Forrest Gump', 'vote_average': 8.5, 'release_date': '1994-06-23',
         'overview': 'A man with a low IQ witnesses and influences several defining historical events.',
         'poster_path': '/arw2vcBveWOVZr6pxd9XTd1TdQa.jpg', 'backdrop_path': None,
         'runtime': 142, 'genres': [{'id': 35, 'name': 'Comedy'}, {'id': 18, 'name': 'Drama'}]},
    ]

    MOCK_VIDEOS = [
        {'id': 'v1', 'type': 'Featurette', 'site': 'YouTube', 'key': 'SUXWAEX2jlg', 'name': 'Behind the scenes'},
        {'id': 'v2', 'type': 'Trailer', 'site': 'YouTube', 'key': 'qtRKdVHc-cE', 'name': 'Official Trailer'},
    ]

    def __init__(self):
        super().__init__(api_key='mock')

    def _get(self, path: str, params: Optional[dict] = None, **context) -> dict:
        parts = path.strip('/').split('/')
        if len(parts) == 2 and parts[1] in LIST_CATEGORIES:
            offset = LIST_CATEGORIES.index(parts[1])
            movies = self.MOCK_MOVIES[offset:] + self.MOCK_MOVIES[:offset]
            return {'page': 1, 'results': movies}

        movie = next((m for m in self.MOCK_MOVIES if str(m['id']) == parts[1]), None)
        if movie is None:
            raise FetchError(f'{path} returned 404', status_code=404, **context)
        if len(parts) == 2:
            return movie
        if parts[2] == 'similar':
            return {'results': [m for m in self.MOCK_MOVIES if m is not movie]}
        return {'results': self.MOCK_VIDEOS}
