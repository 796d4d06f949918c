"""
Dataset export: CSV tables and seed SQL.

All files are rendered in memory before the first one is written, so a
rendering failure never leaves a partial export on disk.
"""

from pathlib import Path
from typing import Dict, Optional, Union

from loguru import logger

from ..dataset.types import Dataset
from .csv_writer import render_csv, render_dataset_csv
from .sql_writer import SCHEMA_VERSION, render_schema_sql, render_seed_sql, sql_literal

SEED_SQL_FILENAME = "seed_generated.sql"


def render_export(dataset: Dataset, schema_version: Optional[str] = None) -> Dict[str, str]:
    """Render every export file. Returns mapping of file name -> content."""
    files = render_dataset_csv(dataset)
    files[SEED_SQL_FILENAME] = render_seed_sql(dataset, schema_version)
    return files


def write_export(
    dataset: Dataset,
    out_dir: Union[str, Path],
    schema_version: Optional[str] = None,
) -> Dict[str, Path]:
    """
    Write CSV tables and the seed SQL script to ``out_dir``.

    Args:
        dataset: Assembled dataset
        out_dir: Output directory (created if missing)
        schema_version: Value stored under meta.schema_version

    Returns:
        Mapping of file name -> written path
    """
    files = render_export(dataset, schema_version)

    out_path = Path(out_dir)
    out_path.mkdir(parents=True, exist_ok=True)

    written = {}
    for filename, content in files.items():
        target = out_path / filename
        target.write_text(content, encoding="utf-8")
        written[filename] = target
        logger.debug(f"Wrote {target}")

    logger.info(f"Exported {len(written)} files to {out_path}")
    return written


__all__ = [
    "SCHEMA_VERSION",
    "SEED_SQL_FILENAME",
    "render_csv",
    "render_dataset_csv",
    "render_schema_sql",
    "render_seed_sql",
    "render_export",
    "sql_literal",
    "write_export",
]
