"""
Home Screen - Featured movies from the popular list.
"""
import logging
from typing import List

from .base import Screen
from ..api import FetchError
from ..models import CatalogItem, DetailsParams, DETAILS
from ..config import FEATURED_COUNT

logger = logging.getLogger(__name__)


class HomeScreen(Screen):
    """Shows the first few popular movies as large cards."""

    name = 'Home'

    def __init__(self, client):
        super().__init__(client)
        self.featured: List[CatalogItem] = []

    def load(self, generation=None):
        try:
            popular = self.client.fetch_list('popular')
        except FetchError as e:
            logger.error(f'Error loading movies: {e}', exc_info=True)
            popular = []
        self._apply(generation, featured=popular[:FEATURED_COUNT])

    def select(self, navigation, item: CatalogItem):
        navigation.transition(DETAILS, DetailsParams(item.id))

    def image_url(self, index: int, item: CatalogItem):
        """Hero card (first) uses the backdrop, the rest use posters."""
        if index == 0:
            return self.client.backdrop_url(item.backdrop_path)
        return self.client.poster_url(item.poster_path)
