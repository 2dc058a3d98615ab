"""
Details Screen - One movie with its similar titles and trailer.
"""
import logging
from typing import List, Optional

from .base import Screen
from ..api import FetchError, select_trailer
from ..models import CatalogItem, MediaAsset, DetailsParams, PlayerParams, DETAILS, PLAYER
from ..config import SIMILAR_LIMIT
from ..utils import fetch_all

logger = logging.getLogger(__name__)


class DetailsScreen(Screen):
    """Details, similar movies and media assets for item_id, loaded together."""

    name = 'Details'

    def __init__(self, client, item_id: int):
        super().__init__(client)
        self.item_id = item_id
        self.movie: Optional[CatalogItem] = None
        self.similar: List[CatalogItem] = []
        self.assets: List[MediaAsset] = []

    def load(self, generation=None):
        item_id = self.item_id
        try:
            movie, similar, assets = fetch_all(
                lambda: self.client.fetch_details(item_id),
                lambda: self.client.fetch_similar(item_id),
                lambda: self.client.fetch_media_assets(item_id),
            )
        except FetchError as e:
            logger.error(f'Error loading movie details for {item_id}: {e}', exc_info=True)
            movie, similar, assets = None, [], []

        self._apply(generation, movie=movie, similar=similar[:SIMILAR_LIMIT], assets=assets)

    @property
    def not_found(self) -> bool:
        return not self.loading and self.movie is None

    @property
    def trailer(self) -> Optional[MediaAsset]:
        return select_trailer(self.assets)

    @property
    def can_play(self) -> bool:
        return self.movie is not None and self.trailer is not None

    def play_payload(self) -> Optional[PlayerParams]:
        trailer = self.trailer
        if trailer is None or self.movie is None:
            return None
        return PlayerParams(media_key=trailer.key, title=self.movie.title)

    def play(self, navigation) -> bool:
        """Open the player for the preferred trailer. False if nothing is playable."""
        payload = self.play_payload()
        if payload is None:
            logger.info(f'No playable trailer for {self.item_id}')
            return False
        navigation.transition(PLAYER, payload)
        return True

    def select_similar(self, navigation, item: CatalogItem):
        navigation.transition(DETAILS, DetailsParams(item.id))

    @property
    def metadata_text(self) -> str:
        """'1999 • 139 min' style line, skipping unknown parts."""
        if self.movie is None:
            return ''
        parts = []
        if self.movie.release_year:
            parts.append(self.movie.release_year)
        if self.movie.runtime:
            parts.append(f'{self.movie.runtime} min')
        return ' • '.join(parts)
