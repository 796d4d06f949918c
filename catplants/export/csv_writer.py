"""
CSV rendering of dataset tables.
"""

import csv
import io
from enum import Enum
from typing import Any, Dict, List, Sequence

from ..dataset.types import Dataset, row_to_dict

SPECIES_COLUMNS = ["id", "scientific_name", "genus", "family", "notes", "created_at_utc", "updated_at_utc"]
NAMES_COLUMNS = ["id", "species_id", "name", "locale", "is_primary"]
TOXICITY_COLUMNS = [
    "id", "species_id", "verdict", "severity", "parts", "symptoms_short",
    "evidence_level", "source_id", "reviewed_at_utc",
]
SOURCES_COLUMNS = ["id", "name", "url", "license", "access_date_utc"]
SEARCH_TERMS_COLUMNS = ["term", "species_id"]


def _cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, Enum):
        return value.value
    return value


def render_csv(rows: Sequence[Dict[str, Any]], columns: List[str]) -> str:
    """
    Render rows as CSV text with every field quoted.

    Args:
        rows: Row dictionaries
        columns: Column order; also written as the header line

    Returns:
        CSV document as a string
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(columns)
    for row in rows:
        writer.writerow([_cell(row.get(column)) for column in columns])
    return buffer.getvalue()


def render_dataset_csv(dataset: Dataset) -> Dict[str, str]:
    """
    Render every table of a dataset.

    Returns:
        Mapping of file name -> CSV text
    """
    tables = [
        ("species.csv", dataset.species, SPECIES_COLUMNS),
        ("names.csv", dataset.names, NAMES_COLUMNS),
        ("toxicity.csv", dataset.toxicity, TOXICITY_COLUMNS),
        ("sources.csv", dataset.sources, SOURCES_COLUMNS),
        ("search_terms.csv", dataset.search_terms, SEARCH_TERMS_COLUMNS),
    ]
    return {
        filename: render_csv([row_to_dict(r) for r in rows], columns)
        for filename, rows, columns in tables
    }
