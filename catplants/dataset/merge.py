"""
Deduplication of parsed entries by scientific name.

The source page can list one plant several times, within a section or
across both sections. Entries are folded into one MergedRecord per
lowercased scientific name.
"""

import logging
from functools import reduce
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

from .types import MergedRecord, ParsedEntry, Verdict

logger = logging.getLogger(__name__)


def record_from_entry(entry: ParsedEntry, verdict: Verdict) -> MergedRecord:
    """Start a merged record from the first entry seen for a plant."""
    return MergedRecord(
        primary=entry.primary,
        synonyms=frozenset(entry.synonyms),
        scientific_name=entry.scientific_name,
        family=entry.family,
        genus=entry.genus,
        verdicts=frozenset([verdict]),
    )


def _first_set(current: Optional[str], incoming: Optional[str]) -> Optional[str]:
    return current if current else (incoming or None)


def merge_records(existing: MergedRecord, incoming: MergedRecord) -> MergedRecord:
    """
    Merge two records for the same scientific name.

    Synonyms and verdicts are unioned. Primary name, family and genus
    keep the existing value once it is set; the incoming value only
    fills a gap. The scientific name spelling of the first record wins.
    The resolved primary is never kept as a synonym.

    Args:
        existing: Record accumulated so far
        incoming: Record built from the newly seen entry

    Returns:
        New merged record (inputs are not modified)
    """
    primary = _first_set(existing.primary, incoming.primary) or ""
    return MergedRecord(
        primary=primary,
        synonyms=(existing.synonyms | incoming.synonyms) - {primary},
        scientific_name=existing.scientific_name,
        family=_first_set(existing.family, incoming.family),
        genus=_first_set(existing.genus, incoming.genus),
        verdicts=existing.verdicts | incoming.verdicts,
    )


def _fold(
    records: Dict[str, MergedRecord], item: Tuple[ParsedEntry, Verdict]
) -> Dict[str, MergedRecord]:
    entry, verdict = item
    incoming = record_from_entry(entry, verdict)
    existing = records.get(incoming.key)

    if existing is None:
        records[incoming.key] = incoming
    else:
        logger.debug(f"Merging duplicate entry for '{entry.scientific_name}'")
        records[incoming.key] = merge_records(existing, incoming)
    return records


def merge_entries(
    pairs: Iterable[Tuple[ParsedEntry, Verdict]]
) -> Dict[str, MergedRecord]:
    """
    Fold (entry, verdict) pairs into records keyed by lowercased scientific name.

    Key order is the order in which each scientific name was first seen.

    Args:
        pairs: Parsed entries with the verdict of the section they came from

    Returns:
        Insertion-ordered mapping of key -> MergedRecord
    """
    return reduce(_fold, pairs, {})


def resolve_verdict(verdicts: FrozenSet[Verdict]) -> Verdict:
    """
    Collapse a verdict set to a single verdict.

    Toxic dominates: a plant listed as toxic anywhere is reported toxic.
    """
    return Verdict.TOXIC if Verdict.TOXIC in verdicts else Verdict.SAFE
