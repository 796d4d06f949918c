"""
Fetcher for the ASPCA cats plant list page.
"""
from typing import Optional

from loguru import logger

from ..errors import FetchError
from .base_api import BasePageFetcher


class PlantListFetcher(BasePageFetcher):
    """
    Fetches the cats toxic and non-toxic plant list page.

    A failed fetch is fatal for the run: FetchError propagates once
    retries are exhausted and nothing downstream is produced.
    """

    DEFAULT_URL = "https://www.aspca.org/pet-care/animal-poison-control/cats-plant-list"

    def __init__(self, url: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.url = url or self.DEFAULT_URL

    def fetch(self) -> str:
        """
        Download the plant list page.

        Returns:
            Page markup as text

        Raises:
            FetchError: On network failure, non-2xx status or empty body
        """
        logger.info(f"Fetching plant list from {self.url}")
        response = self._make_request(self.url)

        body = response.text
        if not body or not body.strip():
            raise FetchError(f"Empty response body from {self.url}")

        logger.info(f"Fetched {len(body):,} characters from {self.url}")
        return body


def create_fetcher(config: Optional[dict] = None) -> PlantListFetcher:
    """
    Build a PlantListFetcher from the ``source`` and ``fetch`` config sections.

    Args:
        config: Full configuration dictionary (ConfigManager.get_all_config())

    Returns:
        Configured fetcher
    """
    config = config or {}
    source = config.get("source", {})
    fetch = config.get("fetch", {})

    return PlantListFetcher(
        url=source.get("url"),
        user_agent=source.get("user_agent"),
        cache_dir=fetch.get("cache_dir"),
        cache_expire_after=fetch.get("cache_expire_after", 86400),
        timeout=fetch.get("timeout", 30),
        max_retries=fetch.get("max_retries", 3),
        use_cache=fetch.get("use_cache", True),
    )
