"""
End-to-end dataset generation.

fetch -> html_to_text -> split_sections -> parse_section -> merge_entries
-> RowAssembler. Every stage is synchronous and runs once per generation.
"""
import itertools
from datetime import datetime
from typing import Any, Dict, Optional

from loguru import logger

from .bootstrap.plant_list import PlantListFetcher, create_fetcher
from .dataset.assembler import SOURCE_LICENSE, SOURCE_NAME, SOURCE_URL, RowAssembler
from .dataset.merge import merge_entries
from .dataset.types import Dataset, Verdict, utc_now
from .errors import EmptyDatasetError
from .extraction import (
    DEFAULT_NON_TOXIC_HEADER,
    DEFAULT_TOXIC_HEADER,
    parse_section,
    split_sections,
)
from .normalization.html_text import html_to_text
from .utils.config_manager import ConfigManager


class PlantListPipeline:
    """
    Builds a dataset snapshot from the plant list page.

    Args:
        config: Full configuration dictionary; defaults to
            ConfigManager.DEFAULT_CONFIG
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or ConfigManager().get_all_config()
        sections = self.config.get("sections", {})
        source = self.config.get("source", {})

        self.toxic_header = sections.get("toxic_header", DEFAULT_TOXIC_HEADER)
        self.non_toxic_header = sections.get("non_toxic_header", DEFAULT_NON_TOXIC_HEADER)
        self.assembler = RowAssembler(
            source_name=source.get("name", SOURCE_NAME),
            source_url=source.get("url", SOURCE_URL),
            source_license=source.get("license", SOURCE_LICENSE),
        )

    def build_dataset(self, html: str, generated_at: Optional[datetime] = None) -> Dataset:
        """
        Turn page markup into a dataset.

        Args:
            html: Raw page markup
            generated_at: Run timestamp; defaults to now (UTC, whole seconds)

        Returns:
            Assembled dataset

        Raises:
            EmptyDatasetError: If neither section yields an entry
        """
        generated_at = generated_at or utc_now()

        text = html_to_text(html)
        toxic_block, safe_block = split_sections(text, self.toxic_header, self.non_toxic_header)

        toxic_entries = parse_section(toxic_block)
        safe_entries = parse_section(safe_block)
        logger.info(
            f"Parsed entries: {len(toxic_entries)} toxic, {len(safe_entries)} non-toxic"
        )

        if not toxic_entries and not safe_entries:
            raise EmptyDatasetError(
                "No plant entries found; the page layout may have changed"
            )

        records = merge_entries(itertools.chain(
            ((entry, Verdict.TOXIC) for entry in toxic_entries),
            ((entry, Verdict.SAFE) for entry in safe_entries),
        ))
        duplicates = len(toxic_entries) + len(safe_entries) - len(records)
        logger.info(f"Merged into {len(records)} species ({duplicates} duplicate entries folded)")

        return self.assembler.assemble(records.values(), generated_at)

    def run(
        self,
        fetcher: Optional[PlantListFetcher] = None,
        generated_at: Optional[datetime] = None,
    ) -> Dataset:
        """
        Fetch the page and build a dataset.

        The timestamp is fixed before the fetch so every row carries the
        run's start time.

        Raises:
            FetchError: If the page cannot be retrieved
            EmptyDatasetError: If no entries are found
        """
        generated_at = generated_at or utc_now()
        owns_fetcher = fetcher is None
        fetcher = fetcher or create_fetcher(self.config)

        try:
            html = fetcher.fetch()
        finally:
            if owns_fetcher:
                fetcher.close()

        return self.build_dataset(html, generated_at)


def build_dataset(html: str, generated_at: Optional[datetime] = None,
                  config: Optional[Dict[str, Any]] = None) -> Dataset:
    """Convenience wrapper around ``PlantListPipeline.build_dataset``."""
    return PlantListPipeline(config).build_dataset(html, generated_at)
