"""
Dataset construction: merging parsed entries and assembling rows.
"""

from .assembler import (
    SOURCE_LICENSE,
    SOURCE_NAME,
    SOURCE_URL,
    RowAssembler,
    assemble_rows,
    build_source_row,
)
from .merge import merge_entries, merge_records, record_from_entry, resolve_verdict
from .types import (
    Dataset,
    EvidenceLevel,
    MergedRecord,
    NameRow,
    ParsedEntry,
    SearchTermRow,
    SourceRow,
    SpeciesRow,
    ToxicityRow,
    Verdict,
    format_timestamp,
    row_to_dict,
    utc_now,
)

__all__ = [
    # Types
    "Verdict",
    "EvidenceLevel",
    "ParsedEntry",
    "MergedRecord",
    "SpeciesRow",
    "NameRow",
    "ToxicityRow",
    "SourceRow",
    "SearchTermRow",
    "Dataset",
    "row_to_dict",
    "format_timestamp",
    "utc_now",
    # Merging
    "record_from_entry",
    "merge_records",
    "merge_entries",
    "resolve_verdict",
    # Assembly
    "RowAssembler",
    "assemble_rows",
    "build_source_row",
    "SOURCE_NAME",
    "SOURCE_URL",
    "SOURCE_LICENSE",
]
