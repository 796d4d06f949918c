"""
Row assembly for the plant toxicity dataset.

Turns merged records into relational rows (species, names, toxicity,
sources, search terms) with sequential surrogate ids.
"""

import itertools
import logging
from datetime import datetime
from typing import Iterable, Optional

from .merge import resolve_verdict
from .types import (
    Dataset,
    EvidenceLevel,
    MergedRecord,
    NameRow,
    SearchTermRow,
    SourceRow,
    SpeciesRow,
    ToxicityRow,
    format_timestamp,
)

logger = logging.getLogger(__name__)

SOURCE_ID = 1
SOURCE_NAME = "ASPCA Toxic and Non-Toxic Plant List — Cats"
SOURCE_URL = "https://www.aspca.org/pet-care/animal-poison-control/cats-plant-list"
SOURCE_LICENSE = "restricted"
DEFAULT_LOCALE = "en"


def build_source_row(
    access_date_utc: str,
    name: str = SOURCE_NAME,
    url: str = SOURCE_URL,
    license: str = SOURCE_LICENSE,
) -> SourceRow:
    """Build the single row describing the origin document."""
    return SourceRow(
        id=SOURCE_ID,
        name=name,
        url=url,
        license=license,
        access_date_utc=access_date_utc,
    )


class RowAssembler:
    """
    Assigns ids and emits rows for one generation run.

    Each ``assemble`` call starts fresh sequences at 1, so ids are
    stable for identical input within one run and never shared across
    runs.
    """

    def __init__(
        self,
        source_name: str = SOURCE_NAME,
        source_url: str = SOURCE_URL,
        source_license: str = SOURCE_LICENSE,
        evidence_level: EvidenceLevel = EvidenceLevel.REPUTABLE,
    ):
        self.source_name = source_name
        self.source_url = source_url
        self.source_license = source_license
        self.evidence_level = evidence_level

    def assemble(self, records: Iterable[MergedRecord], generated_at: datetime) -> Dataset:
        """
        Emit rows for records in iteration order.

        Per record: one species row, one primary name row, one name row
        per synonym (sorted), one toxicity row and one search term per
        name row.

        Args:
            records: Merged records in insertion order
            generated_at: Run timestamp stamped on every row

        Returns:
            Dataset snapshot
        """
        stamp = format_timestamp(generated_at)
        species_ids = itertools.count(1)
        name_ids = itertools.count(1)
        toxicity_ids = itertools.count(1)

        dataset = Dataset(generated_at=generated_at)
        dataset.sources.append(
            build_source_row(stamp, self.source_name, self.source_url, self.source_license)
        )

        for record in records:
            species_id = next(species_ids)
            dataset.species.append(SpeciesRow(
                id=species_id,
                scientific_name=record.scientific_name,
                genus=record.genus,
                family=record.family,
                notes="",
                created_at_utc=stamp,
                updated_at_utc=stamp,
            ))

            names = [(record.primary.lower(), True)]
            names.extend((syn.lower(), False) for syn in sorted(record.synonyms))

            for name, is_primary in names:
                dataset.names.append(NameRow(
                    id=next(name_ids),
                    species_id=species_id,
                    name=name,
                    locale=DEFAULT_LOCALE,
                    is_primary=is_primary,
                ))
                dataset.search_terms.append(SearchTermRow(term=name, species_id=species_id))

            dataset.toxicity.append(ToxicityRow(
                id=next(toxicity_ids),
                species_id=species_id,
                verdict=resolve_verdict(record.verdicts),
                reviewed_at_utc=stamp,
                evidence_level=self.evidence_level,
                source_id=SOURCE_ID,
            ))

        logger.info(f"Assembled rows: {dataset.statistics()}")
        return dataset


def assemble_rows(
    records: Iterable[MergedRecord],
    generated_at: datetime,
    assembler: Optional[RowAssembler] = None,
) -> Dataset:
    """Convenience wrapper around ``RowAssembler.assemble``."""
    return (assembler or RowAssembler()).assemble(records, generated_at)
