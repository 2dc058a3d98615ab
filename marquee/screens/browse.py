"""
Browse Screen - One row per catalog category.
"""
import logging
from typing import List, Dict

from .base import Screen
from ..api import FetchError
from ..models import CatalogItem, DetailsParams, DETAILS
from ..utils import fetch_all

logger = logging.getLogger(__name__)

# (category, row title) in display order
ROWS = [
    ('popular', 'Popular Movies'),
    ('now_playing', 'Now Playing'),
    ('upcoming', 'Coming Soon'),
    ('top_rated', 'Top Rated'),
]


class BrowseScreen(Screen):
    """Loads all four category lists together.

    If any one list fails, every row is shown empty rather than a partial page.
    """

    name = 'Browse'

    def __init__(self, client):
        super().__init__(client)
        self.rows: Dict[str, List[CatalogItem]] = {category: [] for category, _ in ROWS}

    def load(self, generation=None):
        calls = [lambda c=category: self.client.fetch_list(c) for category, _ in ROWS]
        try:
            results = fetch_all(*calls)
        except FetchError as e:
            logger.error(f'Error loading movies ({e.category}, page {e.page}): {e}', exc_info=True)
            results = [[] for _ in ROWS]

        rows = {category: items for (category, _), items in zip(ROWS, results)}
        self._apply(generation, rows=rows)

    def row(self, category: str) -> List[CatalogItem]:
        return self.rows.get(category, [])

    def select(self, navigation, item: CatalogItem):
        navigation.transition(DETAILS, DetailsParams(item.id))
