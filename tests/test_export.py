"""
Tests for dataset export.

Tests:
- CSV rendering and column order
- SQL literal rendering
- Seed SQL layout
- Writing files to disk
"""

import csv
import io
import sqlite3

import pytest
from catplants.dataset import EvidenceLevel, Verdict
from catplants.export import (
    SEED_SQL_FILENAME,
    render_csv,
    render_dataset_csv,
    render_export,
    render_schema_sql,
    render_seed_sql,
    sql_literal,
    write_export,
)
from catplants.export.csv_writer import TOXICITY_COLUMNS
from tests.fixtures.test_data import EXPECTED_NAME_COUNT, FIXED_RUN_STAMP


CSV_FILES = ["species.csv", "names.csv", "toxicity.csv", "sources.csv", "search_terms.csv"]


def read_csv(text):
    return list(csv.reader(io.StringIO(text)))


# ============================================================================
# CSV TESTS
# ============================================================================

class TestCsvWriter:
    """Tests for CSV rendering."""

    def test_all_fields_quoted(self):
        """Test every field, including numbers, is quoted."""
        text = render_csv([{"id": 1, "name": "aloe"}], ["id", "name"])
        assert text == '"id","name"\n"1","aloe"\n'

    def test_embedded_quotes_doubled(self):
        """Test quotes inside values are doubled."""
        text = render_csv([{"name": 'the "true" lily'}], ["name"])
        assert text.splitlines()[1] == '"the ""true"" lily"'

    def test_none_bool_and_enum_cells(self):
        """Test None, booleans and enums render as plain text."""
        text = render_csv(
            [{"a": None, "b": True, "c": False, "d": Verdict.TOXIC, "e": EvidenceLevel.REPUTABLE}],
            ["a", "b", "c", "d", "e"],
        )
        assert read_csv(text)[1] == ["", "1", "0", "toxic", "reputable"]

    def test_dataset_files(self, dataset):
        """Test one file per table with header and row counts."""
        files = render_dataset_csv(dataset)

        assert list(files) == CSV_FILES
        assert len(read_csv(files["species.csv"])) == 1 + 9
        assert len(read_csv(files["names.csv"])) == 1 + EXPECTED_NAME_COUNT
        assert len(read_csv(files["toxicity.csv"])) == 1 + 9
        assert len(read_csv(files["sources.csv"])) == 2
        assert len(read_csv(files["search_terms.csv"])) == 1 + EXPECTED_NAME_COUNT

    def test_species_row_content(self, dataset):
        """Test first species row values."""
        rows = read_csv(render_dataset_csv(dataset)["species.csv"])
        assert rows[0] == ["id", "scientific_name", "genus", "family", "notes", "created_at_utc", "updated_at_utc"]
        assert rows[1] == ["1", "Lilium candidum", "Lilium", "Liliaceae", "", FIXED_RUN_STAMP, FIXED_RUN_STAMP]

    def test_missing_family_written_empty(self, dataset):
        """Test a species without family has an empty cell."""
        rows = read_csv(render_dataset_csv(dataset)["species.csv"])
        claw = [r for r in rows if r[1] == "Uncaria tomentosa"][0]
        assert claw[3] == ""

    def test_toxicity_columns(self, dataset):
        """Test toxicity column order and defaults."""
        rows = read_csv(render_dataset_csv(dataset)["toxicity.csv"])
        assert rows[0] == TOXICITY_COLUMNS
        assert rows[1] == ["1", "1", "toxic", "", "", "", "reputable", "1", FIXED_RUN_STAMP]

    def test_names_is_primary_flags(self, dataset):
        """Test primary flag written as 1/0."""
        rows = read_csv(render_dataset_csv(dataset)["names.csv"])
        assert rows[1] == ["1", "1", "lily", "en", "1"]
        assert rows[2][4] == "0"


# ============================================================================
# SQL TESTS
# ============================================================================

class TestSqlLiteral:
    """Tests for SQL literal rendering."""

    @pytest.mark.parametrize("value,expected", [
        (None, "NULL"),
        ("", "NULL"),
        (True, "1"),
        (False, "0"),
        (7, "7"),
        ("aloe", "'aloe'"),
        ("cat's claw", "'cat''s claw'"),
        (Verdict.SAFE, "'safe'"),
    ])
    def test_literals(self, value, expected):
        """Test literal rendering rules."""
        assert sql_literal(value) == expected


class TestSeedSql:
    """Tests for seed SQL rendering."""

    def test_meta_line_first(self, dataset):
        """Test meta versions come first."""
        first = render_seed_sql(dataset).splitlines()[0]
        assert first == (
            "INSERT OR REPLACE INTO meta(key,value) VALUES "
            "('dataset_version','2025-03-14'),('schema_version','1');"
        )

    def test_custom_schema_version(self, dataset):
        """Test schema version override."""
        assert "('schema_version','2')" in render_seed_sql(dataset, "2")

    def test_statement_order(self, dataset):
        """Test species, names, sources, toxicity, then search index."""
        lines = render_seed_sql(dataset).splitlines()

        def first_index(prefix):
            return next(i for i, line in enumerate(lines) if line.startswith(prefix))

        assert (
            first_index("INSERT OR REPLACE INTO species")
            < first_index("INSERT OR REPLACE INTO names")
            < first_index("INSERT OR REPLACE INTO sources")
            < first_index("INSERT OR REPLACE INTO toxicity")
            < first_index("INSERT INTO search_index(search_index) VALUES('delete-all');")
            < first_index("INSERT INTO search_index(term,species_id)")
        )

    def test_row_counts(self, dataset):
        """Test one statement per row."""
        sql = render_seed_sql(dataset)
        assert sql.count("INSERT OR REPLACE INTO species") == 9
        assert sql.count("INSERT OR REPLACE INTO names") == EXPECTED_NAME_COUNT
        assert sql.count("INSERT OR REPLACE INTO toxicity") == 9
        assert sql.count("INSERT OR REPLACE INTO sources") == 1
        assert sql.count("INSERT INTO search_index(term,species_id)") == EXPECTED_NAME_COUNT
        assert sql.count("delete-all") == 1

    def test_quotes_escaped(self, dataset):
        """Test apostrophes in names are doubled."""
        assert "'cat''s claw'" in render_seed_sql(dataset)

    def test_empty_strings_become_null(self, dataset):
        """Test empty notes and parts become NULL."""
        line = render_seed_sql(dataset).splitlines()[1]
        assert line == (
            "INSERT OR REPLACE INTO species(id,scientific_name,genus,family,notes,created_at_utc,updated_at_utc) "
            f"VALUES (1,'Lilium candidum','Lilium','Liliaceae',NULL,'{FIXED_RUN_STAMP}','{FIXED_RUN_STAMP}');"
        )

    def test_no_transaction_statements(self, dataset):
        """Test the script leaves transaction control to the caller."""
        sql = render_seed_sql(dataset)
        assert "BEGIN" not in sql
        assert "COMMIT" not in sql

    def test_seed_runs_twice_against_schema(self, dataset):
        """Test schema and seed execute and re-seeding is idempotent."""
        conn = sqlite3.connect(":memory:")
        try:
            conn.executescript(render_schema_sql())
        except sqlite3.OperationalError as e:
            conn.close()
            pytest.skip(f"SQLite build lacks FTS5: {e}")

        seed = render_seed_sql(dataset)
        conn.executescript(seed)
        conn.executescript(seed)

        assert conn.execute("SELECT COUNT(*) FROM species").fetchone()[0] == 9
        assert conn.execute("SELECT COUNT(*) FROM names").fetchone()[0] == EXPECTED_NAME_COUNT
        assert conn.execute("SELECT value FROM meta WHERE key='dataset_version'").fetchone()[0] == "2025-03-14"
        conn.close()


# ============================================================================
# FILE OUTPUT TESTS
# ============================================================================

class TestWriteExport:
    """Tests for writing export files."""

    def test_render_export_includes_seed(self, dataset):
        """Test the seed script is rendered alongside the CSVs."""
        files = render_export(dataset)
        assert set(files) == set(CSV_FILES) | {SEED_SQL_FILENAME}

    def test_write_export(self, dataset, tmp_path):
        """Test all files are written to a new directory."""
        out_dir = tmp_path / "out" / "nested"
        written = write_export(dataset, out_dir)

        assert set(written) == set(CSV_FILES) | {SEED_SQL_FILENAME}
        for filename, path in written.items():
            assert path.parent == out_dir
            assert path.read_text(encoding="utf-8")

        names = (out_dir / "names.csv").read_text(encoding="utf-8")
        assert '"uña de gato"' in names

    def test_no_files_written_when_rendering_fails(self, dataset, tmp_path, monkeypatch):
        """Test a rendering failure leaves the output directory untouched."""
        import catplants.export as export

        def broken(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(export, "render_seed_sql", broken)
        out_dir = tmp_path / "out"

        with pytest.raises(RuntimeError):
            write_export(dataset, out_dir)

        assert not out_dir.exists()
