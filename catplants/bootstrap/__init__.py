"""Bootstrap module for fetching the source document."""
from ..errors import FetchError
from .base_api import BasePageFetcher, exponential_backoff_retry
from .plant_list import PlantListFetcher, create_fetcher

__all__ = [
    "BasePageFetcher",
    "PlantListFetcher",
    "create_fetcher",
    "exponential_backoff_retry",
    "FetchError",
]
