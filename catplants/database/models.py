"""
SQLAlchemy ORM models for the plant toxicity lookup store.

This module defines the database schema including:
- Species (one row per distinct scientific name)
- Names (primary and synonym common names)
- Sources (origin documents)
- Toxicity (verdict rows with evidence level)
- Search terms (lowercase terms indexed for lookup)
- Meta (dataset and schema versions)
"""

from typing import Optional
from sqlalchemy import (
    String,
    Integer,
    Text,
    Boolean,
    Index,
    ForeignKey,
    Enum,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from ..dataset.types import Verdict


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class Species(Base):
    """
    Plant species, keyed by surrogate id.

    Timestamps are ISO-8601 UTC strings, matching the exported CSV and
    seed SQL columns.
    """
    __tablename__ = "species"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    scientific_name: Mapped[str] = mapped_column(String(300), nullable=False)
    genus: Mapped[Optional[str]] = mapped_column(String(150), nullable=True, index=True)
    family: Mapped[Optional[str]] = mapped_column(String(150), nullable=True, index=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at_utc: Mapped[str] = mapped_column(String(32), nullable=False)
    updated_at_utc: Mapped[str] = mapped_column(String(32), nullable=False)

    names: Mapped[list["Name"]] = relationship(
        back_populates="species", cascade="all, delete-orphan", order_by="Name.id"
    )
    toxicity: Mapped[list["Toxicity"]] = relationship(
        back_populates="species", cascade="all, delete-orphan", order_by="Toxicity.id"
    )

    __table_args__ = (
        Index("ix_species_scientific_name", "scientific_name"),
    )

    def __repr__(self) -> str:
        return f"<Species(id={self.id}, scientific_name='{self.scientific_name}')>"


class Name(Base):
    """Common name of a species; at most one primary per species."""
    __tablename__ = "names"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    species_id: Mapped[int] = mapped_column(
        ForeignKey("species.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(300), nullable=False)
    locale: Mapped[str] = mapped_column(String(10), nullable=False, default="en")
    is_primary: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    species: Mapped["Species"] = relationship(back_populates="names")

    __table_args__ = (
        Index("ix_names_name", "name"),
    )

    def __repr__(self) -> str:
        return f"<Name(id={self.id}, species_id={self.species_id}, name='{self.name}')>"


class Source(Base):
    """Origin document for toxicity verdicts."""
    __tablename__ = "sources"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(300), nullable=False)
    url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    license: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    access_date_utc: Mapped[str] = mapped_column(String(32), nullable=False)

    def __repr__(self) -> str:
        return f"<Source(id={self.id}, name='{self.name}')>"


class Toxicity(Base):
    """
    Toxicity verdict for a species from one source.

    ``evidence_level`` is free text; 'authoritative' ranks above
    'reputable', which ranks above anything else.
    """
    __tablename__ = "toxicity"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    species_id: Mapped[int] = mapped_column(
        ForeignKey("species.id", ondelete="CASCADE"), nullable=False, index=True
    )
    verdict: Mapped[Verdict] = mapped_column(
        Enum(Verdict, values_callable=lambda e: [m.value for m in e], native_enum=False),
        nullable=False,
        index=True,
    )
    severity: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    parts: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    symptoms_short: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    evidence_level: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    source_id: Mapped[Optional[int]] = mapped_column(ForeignKey("sources.id"), nullable=True)
    reviewed_at_utc: Mapped[str] = mapped_column(String(32), nullable=False)

    species: Mapped["Species"] = relationship(back_populates="toxicity")
    source: Mapped[Optional["Source"]] = relationship()

    def __repr__(self) -> str:
        return f"<Toxicity(id={self.id}, species_id={self.species_id}, verdict='{self.verdict.value}')>"


class SearchTerm(Base):
    """
    Lowercase lookup term mapped to a species (many-to-one).

    ``words`` holds the term's alphanumeric tokens, each preceded by a
    single space (" lily of the valley"), for word-prefix matching.
    """
    __tablename__ = "search_terms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    term: Mapped[str] = mapped_column(String(300), nullable=False, index=True)
    words: Mapped[str] = mapped_column(String(300), nullable=False)
    species_id: Mapped[int] = mapped_column(
        ForeignKey("species.id", ondelete="CASCADE"), nullable=False, index=True
    )

    def __repr__(self) -> str:
        return f"<SearchTerm(term='{self.term}', species_id={self.species_id})>"


class Meta(Base):
    """Key/value metadata (dataset_version, schema_version)."""
    __tablename__ = "meta"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
