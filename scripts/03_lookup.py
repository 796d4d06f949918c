"""
Query the local lookup store.

Usage:
    python scripts/03_lookup.py search "easter lily"
    python scripts/03_lookup.py species 12
    python scripts/03_lookup.py version
"""
import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from _common import load_config

from catplants.database import DatabaseManager, get_species_detail, get_version, search_species


def main() -> int:
    parser = argparse.ArgumentParser(description="Look up plant toxicity for cats")
    parser.add_argument("--db-path", help="SQLite database path (default from config)")
    parser.add_argument("--config", help="YAML configuration file")
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Search by common or scientific name")
    search.add_argument("query")

    species = sub.add_parser("species", help="Show one species by id")
    species.add_argument("species_id", type=int)

    sub.add_parser("version", help="Show dataset and schema versions")

    args = parser.parse_args()
    config = load_config(args.config)

    db = DatabaseManager(args.db_path or config.get("database", "db_path"))
    try:
        with db.session_scope() as session:
            if args.command == "search":
                try:
                    payload = {"q": args.query, "results": search_species(session, args.query)}
                except ValueError as e:
                    print(json.dumps({"error": str(e)}), file=sys.stderr)
                    return 2
            elif args.command == "species":
                payload = get_species_detail(session, args.species_id)
                if payload is None:
                    print(json.dumps({"error": "not found"}), file=sys.stderr)
                    return 1
            else:
                payload = get_version(session)
    finally:
        db.close()

    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
