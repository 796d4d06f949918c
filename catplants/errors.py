"""
Exception types raised by the scraping pipeline.
"""


class ScrapeError(Exception):
    """Base exception for dataset generation failures."""

    pass


class FetchError(ScrapeError):
    """Raised when the source document cannot be retrieved."""

    pass


class EmptyDatasetError(ScrapeError):
    """Raised when a run produces no usable plant entries."""

    pass
