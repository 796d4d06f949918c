"""
Seed SQL rendering for the lookup store.

Produces idempotent statements: ``INSERT OR REPLACE`` keyed by row id for
the relational tables, and a "delete-all" directive followed by fresh
inserts for the contentless FTS5 search index, so re-running a seed never
leaves stale search entries behind.
"""

from enum import Enum
from typing import Any, List, Optional

from ..dataset.types import Dataset

SCHEMA_VERSION = "1"

SCHEMA_SQL = """\
CREATE TABLE IF NOT EXISTS species(
  id INTEGER PRIMARY KEY, scientific_name TEXT NOT NULL,
  genus TEXT, family TEXT, notes TEXT,
  created_at_utc TEXT NOT NULL, updated_at_utc TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS names(
  id INTEGER PRIMARY KEY, species_id INTEGER NOT NULL,
  name TEXT NOT NULL, locale TEXT DEFAULT 'en', is_primary INTEGER DEFAULT 0,
  FOREIGN KEY(species_id) REFERENCES species(id)
);
CREATE TABLE IF NOT EXISTS sources(
  id INTEGER PRIMARY KEY, name TEXT NOT NULL, url TEXT, license TEXT, access_date_utc TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS toxicity(
  id INTEGER PRIMARY KEY, species_id INTEGER NOT NULL,
  verdict TEXT NOT NULL, severity TEXT, parts TEXT, symptoms_short TEXT,
  evidence_level TEXT, source_id INTEGER, reviewed_at_utc TEXT NOT NULL,
  FOREIGN KEY(species_id) REFERENCES species(id),
  FOREIGN KEY(source_id) REFERENCES sources(id)
);
CREATE VIRTUAL TABLE IF NOT EXISTS search_index USING fts5(term, species_id UNINDEXED, content='');
CREATE TABLE IF NOT EXISTS meta(key TEXT PRIMARY KEY, value TEXT NOT NULL);
"""


def sql_literal(value: Any) -> str:
    """
    Render a value as a SQL literal.

    None and empty strings become NULL, booleans 1/0, numbers are bare
    and strings are single-quoted with embedded quotes doubled.

    Examples:
        >>> sql_literal("cat's claw")
        "'cat''s claw'"
        >>> sql_literal("")
        'NULL'
    """
    if isinstance(value, Enum):
        value = value.value
    if value is None or value == "":
        return "NULL"
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float)):
        return str(value)
    return "'" + str(value).replace("'", "''") + "'"


def _insert(table: str, columns: List[str], values: List[Any], replace: bool = True) -> str:
    verb = "INSERT OR REPLACE INTO" if replace else "INSERT INTO"
    rendered = ",".join(sql_literal(v) for v in values)
    return f"{verb} {table}({','.join(columns)}) VALUES ({rendered});"


def render_schema_sql() -> str:
    """DDL for the lookup store (SQLite with FTS5)."""
    return SCHEMA_SQL


def render_seed_sql(dataset: Dataset, schema_version: Optional[str] = None) -> str:
    """
    Render a full seed script for one dataset snapshot.

    No BEGIN/COMMIT is emitted; callers run the script in whatever
    transaction their client provides.

    Args:
        dataset: Assembled dataset
        schema_version: Value stored under meta.schema_version

    Returns:
        SQL script text
    """
    version = schema_version or SCHEMA_VERSION
    lines = [
        "INSERT OR REPLACE INTO meta(key,value) VALUES "
        f"('dataset_version',{sql_literal(dataset.dataset_version)}),"
        f"('schema_version',{sql_literal(version)});"
    ]

    for r in dataset.species:
        lines.append(_insert(
            "species",
            ["id", "scientific_name", "genus", "family", "notes", "created_at_utc", "updated_at_utc"],
            [r.id, r.scientific_name, r.genus, r.family, r.notes, r.created_at_utc, r.updated_at_utc],
        ))

    for r in dataset.names:
        lines.append(_insert(
            "names",
            ["id", "species_id", "name", "locale", "is_primary"],
            [r.id, r.species_id, r.name, r.locale, r.is_primary],
        ))

    for r in dataset.sources:
        lines.append(_insert(
            "sources",
            ["id", "name", "url", "license", "access_date_utc"],
            [r.id, r.name, r.url, r.license, r.access_date_utc],
        ))

    for r in dataset.toxicity:
        lines.append(_insert(
            "toxicity",
            ["id", "species_id", "verdict", "severity", "parts", "symptoms_short",
             "evidence_level", "source_id", "reviewed_at_utc"],
            [r.id, r.species_id, r.verdict, r.severity, r.parts, r.symptoms_short,
             r.evidence_level, r.source_id, r.reviewed_at_utc],
        ))

    # Contentless FTS5 tables only support the special delete-all command
    lines.append("INSERT INTO search_index(search_index) VALUES('delete-all');")
    for r in dataset.search_terms:
        lines.append(_insert("search_index", ["term", "species_id"], [r.term, r.species_id], replace=False))

    return "\n".join(lines) + "\n"
