"""
Marquee API modules - External service integrations.
"""
from .tmdb import CatalogClient, NullCatalogClient, FetchError, resolve_image_url, select_trailer

__all__ = ['CatalogClient', 'NullCatalogClient', 'FetchError', 'resolve_image_url', 'select_trailer']
