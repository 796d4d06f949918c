"""
Scrape the ASPCA cats plant list and export normalized tables.

Fetches the page (or reads a saved copy), builds the dataset and writes
species/names/toxicity/sources/search_terms CSV files plus a seed SQL
script. Nothing is written unless the whole run succeeds.

Usage:
    python scripts/01_scrape_plant_list.py [--out-dir DIR] [--html-file FILE] [--config FILE]
"""
import argparse
import sys
from pathlib import Path

from loguru import logger

sys.path.insert(0, str(Path(__file__).parent))

from _common import load_config, setup_logging

from catplants.errors import ScrapeError
from catplants.export import write_export
from catplants.pipeline import PlantListPipeline


def main() -> int:
    parser = argparse.ArgumentParser(description="Scrape the cats plant list into CSV and SQL")
    parser.add_argument("--out-dir", type=Path, help="Output directory (default from config)")
    parser.add_argument("--html-file", type=Path, help="Parse a saved page instead of fetching")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug output on console")
    args = parser.parse_args()

    setup_logging("scrape_plant_list", verbose=args.verbose)
    config = load_config(args.config)

    pipeline = PlantListPipeline(config.get_all_config())
    out_dir = args.out_dir or Path(config.get("export", "out_dir", "out"))

    try:
        if args.html_file:
            logger.info(f"Reading saved page from {args.html_file}")
            dataset = pipeline.build_dataset(args.html_file.read_text(encoding="utf-8"))
        else:
            dataset = pipeline.run()
    except ScrapeError as e:
        logger.error(f"Generation failed, nothing written: {e}")
        return 1

    written = write_export(dataset, out_dir, config.get("export", "schema_version"))

    stats = dataset.statistics()
    logger.info("OK:")
    for table in ("species", "names", "toxicity", "search_terms"):
        logger.info(f"  {table + ':':<14}{stats[table]}")
    logger.info(f"  files in {out_dir}/ ({len(written)})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
