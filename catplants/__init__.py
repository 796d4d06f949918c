"""
Cat Plant Toxicity Dataset - Source Package

Main modules:
- bootstrap: Source page fetching with caching and retry
- normalization: HTML-to-text conversion and common-name normalization
- extraction: Section slicing, entry line filtering and entry parsing
- dataset: Deduplication/merging and relational row assembly
- export: CSV and seed SQL writers
- database: SQLAlchemy ORM models, loading and lookup queries
- utils: Configuration management
"""

__version__ = "1.0.0"
