"""
CRUD and lookup operations for the plant toxicity store.

Provides:
- Dataset loading (idempotent upsert, search terms fully replaced)
- Exact-name and prefix search over species
- Species detail with names, toxicity rows and sources
- Version and statistics queries
"""

import logging
import re
from typing import Optional, List, Dict, Any, Iterable
from sqlalchemy import select, func, or_, delete
from sqlalchemy.orm import Session

from ..dataset.types import Dataset
from ..export.sql_writer import SCHEMA_VERSION
from .models import Species, Name, Source, Toxicity, SearchTerm, Meta

logger = logging.getLogger(__name__)

MAX_QUERY_TERMS = 5
EXACT_MATCH_LIMIT = 5
PREFIX_MATCH_LIMIT = 10

WORD_SEPARATOR_PATTERN = re.compile(r"[^a-z0-9]+")

EVIDENCE_RANK = {
    "authoritative": 1,
    "reputable": 2,
}


# ============================================================================
# LOADING
# ============================================================================

def clear_dataset(session: Session) -> None:
    """Delete every dataset row (meta is kept)."""
    for model in (SearchTerm, Toxicity, Name, Species, Source):
        session.execute(delete(model))
    session.flush()
    session.expunge_all()


def load_dataset(
    session: Session,
    dataset: Dataset,
    schema_version: Optional[str] = None,
    replace: bool = False,
) -> Dict[str, int]:
    """
    Load an assembled dataset into the store.

    Rows are upserted by id, so loading the same snapshot twice yields
    the same tables. Search terms are always cleared and reinserted so
    no stale term survives between runs.

    Args:
        session: Database session
        dataset: Assembled dataset snapshot
        schema_version: Value stored under meta.schema_version
        replace: If True, delete all existing dataset rows first

    Returns:
        Row counts loaded per table
    """
    if replace:
        clear_dataset(session)
    else:
        session.execute(delete(SearchTerm))

    for r in dataset.sources:
        session.merge(Source(
            id=r.id, name=r.name, url=r.url, license=r.license,
            access_date_utc=r.access_date_utc,
        ))

    for r in dataset.species:
        session.merge(Species(
            id=r.id, scientific_name=r.scientific_name, genus=r.genus, family=r.family,
            notes=r.notes or None, created_at_utc=r.created_at_utc, updated_at_utc=r.updated_at_utc,
        ))
    session.flush()

    for r in dataset.names:
        session.merge(Name(
            id=r.id, species_id=r.species_id, name=r.name, locale=r.locale,
            is_primary=r.is_primary,
        ))

    for r in dataset.toxicity:
        session.merge(Toxicity(
            id=r.id, species_id=r.species_id, verdict=r.verdict, severity=r.severity,
            parts=r.parts or None, symptoms_short=r.symptoms_short or None,
            evidence_level=r.evidence_level.value, source_id=r.source_id,
            reviewed_at_utc=r.reviewed_at_utc,
        ))

    session.add_all(
        SearchTerm(term=r.term, words=term_words(r.term), species_id=r.species_id)
        for r in dataset.search_terms
    )

    set_meta(session, "dataset_version", dataset.dataset_version)
    set_meta(session, "schema_version", schema_version or SCHEMA_VERSION)
    session.flush()

    stats = dataset.statistics()
    logger.info(f"Loaded dataset {dataset.dataset_version}: {stats}")
    return stats


def set_meta(session: Session, key: str, value: str) -> None:
    """Insert or update a meta key."""
    session.merge(Meta(key=key, value=value))


# ============================================================================
# LOOKUPS
# ============================================================================

def sanitize_terms(query: str) -> List[str]:
    """
    Split a free-text query into lookup tokens.

    Lowercases, treats every non-alphanumeric character as a separator,
    removes duplicates (first occurrence wins) and keeps at most five.

    Examples:
        >>> sanitize_terms("Easter-Lily, easter!")
        ['easter', 'lily']
    """
    tokens = WORD_SEPARATOR_PATTERN.sub(" ", (query or "").lower()).split()
    unique: List[str] = []
    for token in tokens:
        if token not in unique:
            unique.append(token)
    return unique[:MAX_QUERY_TERMS]


def term_words(term: str) -> str:
    """
    Tokenize a stored term for word-prefix matching.

    Punctuation and whitespace are both word breaks, the same as for
    query tokens; every token is preceded by one space.

    Examples:
        >>> term_words("Lily-of-the-Valley")
        ' lily of the valley'
        >>> term_words("cat's-claw")
        ' cat s claw'
    """
    tokens = WORD_SEPARATOR_PATTERN.sub(" ", (term or "").lower()).split()
    return "".join(" " + token for token in tokens)


def preferred_toxicity(rows: Iterable[Toxicity]) -> List[Toxicity]:
    """Order toxicity rows: authoritative, then reputable, then others; ties by id."""
    return sorted(rows, key=lambda t: (EVIDENCE_RANK.get(t.evidence_level, 3), t.id))


def display_name(species: Species) -> str:
    """Primary common name, else the first name alphabetically, else the scientific name."""
    primary = [n.name for n in species.names if n.is_primary]
    if primary:
        return primary[0]
    if species.names:
        return min(n.name for n in species.names)
    return species.scientific_name


def _summarize(species: Species) -> Dict[str, Any]:
    ranked = preferred_toxicity(species.toxicity)
    best = ranked[0] if ranked else None

    result = {
        "id": species.id,
        "display_name": display_name(species),
        "verdict": best.verdict.value if best else None,
    }
    if best and best.severity and best.severity.strip():
        result["severity"] = best.severity
    return result


def search_species(session: Session, query: str) -> List[Dict[str, Any]]:
    """
    Search species by common or scientific name.

    An exact case-insensitive name match is tried first (up to five
    species). Otherwise any search term with a word starting with one of the
    sanitized query tokens matches (punctuation separates words; up to
    ten species).

    Args:
        session: Database session
        query: Free-text query

    Returns:
        List of ``{id, display_name, verdict[, severity]}`` dicts

    Raises:
        ValueError: If the query is empty ("missing q") or has no
            alphanumeric token ("invalid q")
    """
    query = (query or "").strip()
    if not query:
        raise ValueError("missing q")

    terms = sanitize_terms(query)
    if not terms:
        raise ValueError("invalid q")

    species_ids = session.execute(
        select(Name.species_id)
        .where(func.lower(Name.name) == query.lower())
        .distinct()
        .order_by(Name.species_id)
        .limit(EXACT_MATCH_LIMIT)
    ).scalars().all()

    if not species_ids:
        conditions = [SearchTerm.words.like(f"% {term}%") for term in terms]
        species_ids = session.execute(
            select(SearchTerm.species_id)
            .where(or_(*conditions))
            .distinct()
            .order_by(SearchTerm.species_id)
            .limit(PREFIX_MATCH_LIMIT)
        ).scalars().all()
        logger.debug(f"Prefix search for {terms}: {len(species_ids)} species")

    return [_summarize(session.get(Species, species_id)) for species_id in species_ids]


def _drop_empty(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        k: v for k, v in data.items()
        if v is not None and not (isinstance(v, str) and not v.strip())
    }


def get_species_detail(session: Session, species_id: int) -> Optional[Dict[str, Any]]:
    """
    Get full details for one species.

    Args:
        session: Database session
        species_id: Species primary key

    Returns:
        Dict with ``species``, ``names``, ``toxicity`` and ``sources``,
        or None if no such species. Empty and null fields are omitted.
    """
    species = session.get(Species, species_id)
    if species is None:
        return None

    names = sorted(species.names, key=lambda n: (not n.is_primary, n.name))
    toxicity = preferred_toxicity(species.toxicity)

    source_ids = []
    for row in toxicity:
        if row.source_id and row.source_id not in source_ids:
            source_ids.append(row.source_id)
    sources = session.execute(
        select(Source).where(Source.id.in_(source_ids)).order_by(Source.id)
    ).scalars().all() if source_ids else []

    return {
        "species": _drop_empty({
            "id": species.id,
            "scientific_name": species.scientific_name,
            "genus": species.genus,
            "family": species.family,
            "notes": species.notes,
            "created_at_utc": species.created_at_utc,
            "updated_at_utc": species.updated_at_utc,
        }),
        "names": [
            _drop_empty({"name": n.name, "locale": n.locale, "is_primary": int(n.is_primary)})
            for n in names
        ],
        "toxicity": [
            _drop_empty({
                "verdict": t.verdict.value,
                "severity": t.severity,
                "parts": t.parts,
                "symptoms_short": t.symptoms_short,
                "evidence_level": t.evidence_level,
                "source_id": t.source_id,
                "reviewed_at_utc": t.reviewed_at_utc,
            })
            for t in toxicity
        ],
        "sources": [
            {
                "id": s.id,
                "name": s.name,
                "url": s.url,
                "license": s.license,
                "access_date_utc": s.access_date_utc,
            }
            for s in sources
        ],
    }


def get_version(session: Session) -> Dict[str, str]:
    """Return dataset_version and schema_version from meta (missing keys omitted)."""
    rows = session.execute(
        select(Meta).where(Meta.key.in_(["dataset_version", "schema_version"]))
    ).scalars().all()
    return {row.key: row.value for row in rows}


def get_database_statistics(session: Session) -> Dict[str, Any]:
    """
    Get row counts and verdict distribution.

    Returns:
        Dictionary with per-table counts and toxic/safe species counts
    """
    stats = {
        "species": session.scalar(select(func.count()).select_from(Species)),
        "names": session.scalar(select(func.count()).select_from(Name)),
        "toxicity": session.scalar(select(func.count()).select_from(Toxicity)),
        "sources": session.scalar(select(func.count()).select_from(Source)),
        "search_terms": session.scalar(select(func.count()).select_from(SearchTerm)),
    }

    verdict_counts = session.execute(
        select(Toxicity.verdict, func.count()).group_by(Toxicity.verdict)
    ).all()
    stats["verdicts"] = {verdict.value: count for verdict, count in verdict_counts}
    stats.update(get_version(session))
    return stats
