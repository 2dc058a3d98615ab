"""
Marquee Data Models - Core data structures.
"""
from dataclasses import dataclass, field
from typing import Optional, List

# Screen names (closed set)
HOME = 'Home'
BROWSE = 'Browse'
DETAILS = 'Details'
PLAYER = 'Player'

SCREENS = (HOME, BROWSE, DETAILS, PLAYER)
TAB_SCREENS = (HOME, BROWSE)


@dataclass
class CatalogItem:
    """A single movie from the catalog service."""
    id: int
    title: str
    overview: str = ''
    rating: float = 0.0
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    release_date: Optional[str] = None
    runtime: Optional[int] = None  # Detail fetch only
    genres: List[str] = field(default_factory=list)  # Detail fetch only

    @property
    def release_year(self) -> Optional[str]:
        """Year part of the release date, or None if unknown."""
        if not self.release_date:
            return None
        year = self.release_date.split('-')[0]
        return year or None

    @property
    def rating_text(self) -> str:
        return f'{self.rating:.1f}'

    @property
    def genre_text(self) -> str:
        return ', '.join(self.genres)


@dataclass
class MediaAsset:
    """A playable media reference (trailer, clip, teaser) for a movie."""
    id: str
    type: str
    site: str
    key: str
    name: Optional[str] = None


@dataclass(frozen=True)
class DetailsParams:
    """Payload for navigating to the Details screen."""
    item_id: int


@dataclass(frozen=True)
class PlayerParams:
    """Payload for navigating to the Player screen."""
    media_key: str
    title: str


@dataclass(frozen=True)
class NavigationState:
    """
    Snapshot of the navigation controller.

    The parameter bag is additive: values are overwritten when a payload
    carries them and never cleared.
    """
    screen: str = HOME
    item_id: Optional[int] = None
    media_key: Optional[str] = None
    title: Optional[str] = None
