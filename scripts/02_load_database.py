"""
Build the dataset and load it into the local SQLite lookup store.

Usage:
    python scripts/02_load_database.py [--db-path PATH] [--html-file FILE] [--replace]
"""
import argparse
import sys
from pathlib import Path

from loguru import logger

sys.path.insert(0, str(Path(__file__).parent))

from _common import load_config, setup_logging

from catplants.database import DatabaseManager, get_database_statistics, load_dataset
from catplants.errors import ScrapeError
from catplants.pipeline import PlantListPipeline


def main() -> int:
    parser = argparse.ArgumentParser(description="Load the cats plant list into SQLite")
    parser.add_argument("--db-path", help="SQLite database path (default from config)")
    parser.add_argument("--html-file", type=Path, help="Parse a saved page instead of fetching")
    parser.add_argument("--replace", action="store_true", help="Delete existing rows before loading")
    parser.add_argument("--config", help="YAML configuration file")
    args = parser.parse_args()

    setup_logging("load_database")
    config = load_config(args.config)
    pipeline = PlantListPipeline(config.get_all_config())

    try:
        if args.html_file:
            dataset = pipeline.build_dataset(args.html_file.read_text(encoding="utf-8"))
        else:
            dataset = pipeline.run()
    except ScrapeError as e:
        logger.error(f"Generation failed, database untouched: {e}")
        return 1

    db = DatabaseManager(args.db_path or config.get("database", "db_path"))
    db.create_all_tables()

    try:
        with db.session_scope() as session:
            load_dataset(
                session,
                dataset,
                schema_version=config.get("export", "schema_version"),
                replace=args.replace,
            )

        with db.session_scope() as session:
            stats = get_database_statistics(session)
    finally:
        db.close()

    print("\n" + "=" * 60)
    print("DATABASE STATISTICS")
    print("=" * 60)
    for key, value in stats.items():
        print(f"  {key:<16}{value}")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
