"""
Type definitions for the plant toxicity dataset.

Defines the parsed/merged entry structures produced by the extraction
pass and the relational rows emitted by the row assembler.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, List, Dict, Any, FrozenSet


class Verdict(Enum):
    """Toxicity classification of a species."""
    TOXIC = "toxic"
    SAFE = "safe"


class EvidenceLevel(Enum):
    """Source reliability tag, used to rank multiple toxicity rows."""
    AUTHORITATIVE = "authoritative"
    REPUTABLE = "reputable"
    OTHER = "other"


@dataclass(frozen=True)
class ParsedEntry:
    """
    One accepted plant entry line.

    Attributes:
        primary: Normalized primary common name (never empty)
        synonyms: Normalized alternate common names
        scientific_name: First scientific name listed on the line
        family: Botanical family, None when the line has none
        genus: Genus guessed from the scientific name, None when unusable
    """
    primary: str
    synonyms: FrozenSet[str]
    scientific_name: str
    family: Optional[str] = None
    genus: Optional[str] = None

    @property
    def key(self) -> str:
        """Deduplication key (lowercased scientific name)."""
        return self.scientific_name.lower()


@dataclass(frozen=True)
class MergedRecord:
    """
    All entries sharing one scientific name, folded together.

    ``verdicts`` holds every section the plant was listed under.
    """
    primary: str
    synonyms: FrozenSet[str]
    scientific_name: str
    family: Optional[str]
    genus: Optional[str]
    verdicts: FrozenSet[Verdict]

    @property
    def key(self) -> str:
        return self.scientific_name.lower()


@dataclass
class SpeciesRow:
    id: int
    scientific_name: str
    genus: Optional[str]
    family: Optional[str]
    notes: str
    created_at_utc: str
    updated_at_utc: str


@dataclass
class NameRow:
    id: int
    species_id: int
    name: str
    locale: str = "en"
    is_primary: bool = False


@dataclass
class ToxicityRow:
    id: int
    species_id: int
    verdict: Verdict
    reviewed_at_utc: str
    severity: Optional[str] = None
    parts: str = ""
    symptoms_short: str = ""
    evidence_level: EvidenceLevel = EvidenceLevel.REPUTABLE
    source_id: Optional[int] = 1


@dataclass
class SourceRow:
    id: int
    name: str
    url: str
    license: str
    access_date_utc: str


@dataclass
class SearchTermRow:
    term: str
    species_id: int


@dataclass
class Dataset:
    """
    One full snapshot of normalized rows from a single generation run.

    Attributes:
        generated_at: Run timestamp shared by every row
        species: One row per distinct scientific name
        names: Primary and synonym names, primary first per species
        toxicity: Exactly one row per species
        sources: The single source document row
        search_terms: One row per name, for the full-text index
    """
    generated_at: datetime
    species: List[SpeciesRow] = field(default_factory=list)
    names: List[NameRow] = field(default_factory=list)
    toxicity: List[ToxicityRow] = field(default_factory=list)
    sources: List[SourceRow] = field(default_factory=list)
    search_terms: List[SearchTermRow] = field(default_factory=list)

    @property
    def dataset_version(self) -> str:
        """Date stamp (YYYY-MM-DD) identifying this snapshot."""
        return self.generated_at.strftime("%Y-%m-%d")

    def statistics(self) -> Dict[str, int]:
        """Row counts per table."""
        return {
            "species": len(self.species),
            "names": len(self.names),
            "toxicity": len(self.toxicity),
            "sources": len(self.sources),
            "search_terms": len(self.search_terms),
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to plain dictionaries with enum values unwrapped."""
        return {
            "generated_at": format_timestamp(self.generated_at),
            "species": [row_to_dict(r) for r in self.species],
            "names": [row_to_dict(r) for r in self.names],
            "toxicity": [row_to_dict(r) for r in self.toxicity],
            "sources": [row_to_dict(r) for r in self.sources],
            "search_terms": [row_to_dict(r) for r in self.search_terms],
        }


def row_to_dict(row) -> Dict[str, Any]:
    """Convert a row dataclass to a dict, replacing enums by their values."""
    data = asdict(row)
    for key, value in data.items():
        if isinstance(value, Enum):
            data[key] = value.value
    return data


def utc_now() -> datetime:
    """Current UTC time truncated to whole seconds."""
    return datetime.now(timezone.utc).replace(microsecond=0)


def format_timestamp(moment: datetime) -> str:
    """
    Format a timestamp as ISO-8601 UTC with a ``Z`` suffix.

    Naive datetimes are assumed to already be UTC.

    Examples:
        >>> format_timestamp(datetime(2025, 1, 2, 3, 4, 5, 600))
        '2025-01-02T03:04:05Z'
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")
