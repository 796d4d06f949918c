"""
Database package for the plant toxicity lookup store.

This package provides:
- SQLAlchemy ORM models for species, names, toxicity, sources and search terms
- Connection and session management
- Dataset loading and lookup queries

Quick start:
    from catplants.database import DatabaseManager, load_dataset, search_species

    db = DatabaseManager("data/catplants.db")
    db.create_all_tables()

    with db.session_scope() as session:
        load_dataset(session, dataset)
        results = search_species(session, "lily")
"""

from .connection import (
    DatabaseManager,
    create_test_db,
    get_db_manager,
    init_db,
    session_scope,
)
from .models import (
    Base,
    Species,
    Name,
    Source,
    Toxicity,
    SearchTerm,
    Meta,
)
from .crud import (
    clear_dataset,
    load_dataset,
    set_meta,
    sanitize_terms,
    term_words,
    preferred_toxicity,
    display_name,
    search_species,
    get_species_detail,
    get_version,
    get_database_statistics,
)

__all__ = [
    # Connection
    "DatabaseManager",
    "create_test_db",
    "get_db_manager",
    "init_db",
    "session_scope",
    # Models
    "Base",
    "Species",
    "Name",
    "Source",
    "Toxicity",
    "SearchTerm",
    "Meta",
    # Loading
    "clear_dataset",
    "load_dataset",
    "set_meta",
    # Lookups
    "sanitize_terms",
    "term_words",
    "preferred_toxicity",
    "display_name",
    "search_species",
    "get_species_detail",
    "get_version",
    "get_database_statistics",
]
