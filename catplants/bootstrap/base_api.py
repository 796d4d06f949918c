"""
Base page fetcher with retry logic and response caching.
"""
import time
from abc import ABC, abstractmethod
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import requests
import requests_cache
from loguru import logger

from ..errors import FetchError


def exponential_backoff_retry(
    max_retries: int = 3, base_delay: float = 1.0, max_delay: float = 60.0
) -> Callable:
    """
    Decorator for exponential backoff retry logic.

    The retry count may be overridden per instance through a
    ``max_retries`` attribute on the decorated method's owner.

    Args:
        max_retries: Default maximum number of retry attempts
        base_delay: Initial delay in seconds
        max_delay: Maximum delay between retries

    Returns:
        Decorated function with retry logic
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            retries = max_retries
            if args and isinstance(getattr(args[0], "max_retries", None), int):
                retries = args[0].max_retries

            for attempt in range(retries + 1):
                try:
                    return func(*args, **kwargs)
                except (requests.RequestException, FetchError) as e:
                    if attempt == retries:
                        logger.error(f"Max retries ({retries}) exceeded: {e}")
                        raise

                    delay = min(base_delay * (2**attempt), max_delay)
                    logger.warning(
                        f"Attempt {attempt + 1} failed: {e}. Retrying in {delay:.1f}s..."
                    )
                    time.sleep(delay)

        return wrapper

    return decorator


class BasePageFetcher(ABC):
    """
    Abstract base class for source document fetchers.

    Provides:
    - Session management with connection pooling
    - Optional response caching to disk
    - Timeouts and retry with exponential backoff
    - Error handling and logging
    """

    USER_AGENT = "canmycateatthat/0.1"

    def __init__(
        self,
        cache_dir: Optional[Path] = None,
        cache_expire_after: int = 86400,  # 24 hours
        timeout: int = 30,
        max_retries: int = 3,
        use_cache: bool = True,
        user_agent: Optional[str] = None,
    ):
        """
        Initialize page fetcher.

        Args:
            cache_dir: Directory for caching responses
            cache_expire_after: Cache expiration time in seconds
            timeout: Request timeout in seconds
            max_retries: Maximum retry attempts
            use_cache: Cache responses on disk; False uses a plain session
            user_agent: User-Agent header value
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.source_name = self.__class__.__name__.replace("Fetcher", "").lower()

        if use_cache:
            if cache_dir is None:
                cache_dir = Path("data/raw/http_cache") / self.source_name
            else:
                cache_dir = Path(cache_dir) / self.source_name

            cache_dir.mkdir(parents=True, exist_ok=True)
            self.cache_dir = cache_dir

            self.session = requests_cache.CachedSession(
                cache_name=str(cache_dir / "http_cache"),
                backend="sqlite",
                expire_after=cache_expire_after,
                allowable_methods=["GET"],
                allowable_codes=[200],
            )
            logger.info(f"Initialized {self.source_name} fetcher with cache at {cache_dir}")
        else:
            self.cache_dir = None
            self.session = requests.Session()
            logger.info(f"Initialized {self.source_name} fetcher without cache")

        self.session.headers.update(
            {
                "User-Agent": user_agent or self.USER_AGENT,
                "Accept": "text/html,application/xhtml+xml",
            }
        )

    @abstractmethod
    def fetch(self) -> str:
        """
        Retrieve the source document.

        Returns:
            Document body as text

        Raises:
            FetchError: If the document cannot be retrieved
        """
        pass

    @exponential_backoff_retry(max_retries=3)
    def _make_request(self, url: str, params: Optional[Dict] = None) -> requests.Response:
        """
        Make a GET request with error handling.

        Args:
            url: Request URL
            params: URL parameters

        Returns:
            Response object with a 2xx status

        Raises:
            FetchError: On timeout, connection failure or non-2xx status
        """
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)

            if getattr(response, "from_cache", False):
                logger.debug(f"Cache hit for {url}")

            response.raise_for_status()
            return response

        except requests.Timeout as e:
            raise FetchError(f"Request timeout for {url}: {e}") from e
        except requests.HTTPError as e:
            raise FetchError(f"HTTP error {response.status_code} for {url}: {e}") from e
        except requests.RequestException as e:
            raise FetchError(f"Request failed for {url}: {e}") from e

    def save_raw_response(self, identifier: str, body: str, suffix: str = "html") -> Optional[Path]:
        """
        Save a raw document to the cache directory for debugging.

        Args:
            identifier: File stem
            body: Document text
            suffix: File suffix

        Returns:
            Written path, or None when caching is disabled
        """
        if self.cache_dir is None:
            return None

        filepath = self.cache_dir / f"{identifier.replace('/', '_')}.{suffix}"
        filepath.write_text(body, encoding="utf-8")
        logger.debug(f"Saved raw response to {filepath}")
        return filepath

    def clear_cache(self):
        """Clear the HTTP cache."""
        if hasattr(self.session, "cache"):
            self.session.cache.clear()
            logger.info(f"Cleared cache for {self.source_name}")

    def get_cache_info(self) -> Dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            Dictionary with cache info
        """
        if not hasattr(self.session, "cache"):
            return {"backend": None, "responses_cached": 0}
        return {
            "backend": str(self.cache_dir),
            "responses_cached": len(self.session.cache.responses) if hasattr(self.session.cache, "responses") else 0,
        }

    def close(self):
        """Close the session and cleanup resources."""
        self.session.close()
        logger.debug(f"Closed {self.source_name} fetcher session")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
