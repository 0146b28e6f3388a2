"""Command line entry point for the geospatial queries demo."""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from geoquery.config import get_settings
from geoquery.exceptions import InvalidFeatureError
from geoquery.pipeline import run_pipeline
from geoquery.sample_data import load_feature_collection

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Seed MongoDB with GeoJSON documents and run geospatial queries"
    )
    parser.add_argument('--uri', '-u', default=None,
                        help='MongoDB connection URI (default: $MONGODB_URI)')
    parser.add_argument('--collection', '-c', default=None,
                        help='Target collection, cleared on every run (default: test)')
    parser.add_argument('--file', '-f', default=None,
                        help='GeoJSON FeatureCollection to seed instead of the built-in samples')
    parser.add_argument('--near', default=None,
                        help='Name of the document to find the closest object to')
    parser.add_argument('--within', default=None,
                        help='Name of the Polygon document to find objects within')
    parser.add_argument('--log-level', default=None, type=str.upper, choices=LOG_LEVELS,
                        help='Logging level (default: $LOG_LEVEL or INFO)')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    settings = get_settings()
    overrides = {}
    if args.uri:
        overrides["MONGODB_URI"] = args.uri
    if args.collection:
        overrides["MONGODB_COLLECTION"] = args.collection
    if overrides:
        settings = settings.model_copy(update=overrides)

    level = args.log_level or settings.LOG_LEVEL.upper()
    if level not in LOG_LEVELS:
        print(f"Unknown log level {settings.LOG_LEVEL!r}, expected one of {', '.join(LOG_LEVELS)}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    documents = None
    if args.file:
        try:
            documents = load_feature_collection(args.file)
        except InvalidFeatureError as e:
            logging.getLogger("geoquery.cli").error("%s", e)
            return 1

    result = asyncio.run(run_pipeline(
        settings,
        documents=documents,
        near_name=args.near,
        within_name=args.within,
    ))
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
