"""
Command-line entry point for running Orama actions by hand.

    orama-actions --config config.yaml list-indexes
    orama-actions search docs "install guide" --limit 5
    orama-actions facets docs '{"category": {"limit": 5}}' --term shoes
    orama-actions multi-search docs blog --term release --merge
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from telemetry import init_telemetry, shutdown_telemetry

from .agent.lifecycle import register
from .errors import OramaIntegrationError
from .utils import load_config, setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orama-actions",
        description="Run Orama Cloud search actions against the configured indexes.",
    )
    parser.add_argument("--config", default="config.yaml", help="Path to config.yaml")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-indexes", help="List configured indexes")

    search = subparsers.add_parser("search", help="Search one index")
    search.add_argument("index_name")
    search.add_argument("term", nargs="?", default="")
    search.add_argument("--mode", choices=["fulltext", "vector", "hybrid"])
    search.add_argument("--property", dest="properties", action="append")
    search.add_argument("--limit", type=int)
    search.add_argument("--where", dest="where_conditions")
    search.add_argument("--sort-by", dest="sort_by_property")
    search.add_argument("--order", dest="sort_by_order", choices=["asc", "desc"])

    vector = subparsers.add_parser("vector-search", help="Vector search on one index")
    vector.add_argument("index_name")
    vector.add_argument("term", nargs="?", default="")
    vector.add_argument("--limit", type=int)
    vector.add_argument("--where", dest="where_conditions")

    facets = subparsers.add_parser("facets", help="Search one index with facets")
    facets.add_argument("index_name")
    facets.add_argument("facets_config")
    facets.add_argument("--term", default="")
    facets.add_argument("--mode", choices=["fulltext", "vector", "hybrid"])
    facets.add_argument("--limit", type=int)
    facets.add_argument("--where", dest="where_conditions")

    multi = subparsers.add_parser("multi-search", help="Search several indexes")
    multi.add_argument("index_names", nargs="+")
    multi.add_argument("--term", default="")
    multi.add_argument("--mode", choices=["fulltext", "vector", "hybrid"])
    multi.add_argument("--merge", dest="merge_results", action="store_true")
    multi.add_argument("--where", dest="where_conditions")

    return parser


def run(args: argparse.Namespace) -> dict:
    config = load_config(args.config)
    setup_logging(config)
    service = register(config)

    if args.command == "list-indexes":
        indexes = service.list_indexes()
        return {"indexes": indexes, "count": len(indexes)}
    if args.command == "search":
        return service.search(
            args.index_name,
            args.term,
            mode=args.mode,
            properties=args.properties,
            limit=args.limit,
            where_conditions=args.where_conditions,
            sort_by_property=args.sort_by_property,
            sort_by_order=args.sort_by_order,
        ).to_dict()
    if args.command == "vector-search":
        return service.vector_search(
            args.index_name,
            args.term,
            limit=args.limit,
            where_conditions=args.where_conditions,
        ).to_dict()
    if args.command == "facets":
        return service.search_with_facets(
            args.index_name,
            args.term,
            args.facets_config,
            mode=args.mode,
            limit=args.limit,
            where_conditions=args.where_conditions,
        ).to_dict()
    return service.multi_index_search(
        args.index_names,
        args.term,
        mode=args.mode,
        merge_results=args.merge_results,
        where_conditions=args.where_conditions,
    ).to_dict()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    init_telemetry()
    try:
        result = run(args)
    except (OramaIntegrationError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        shutdown_telemetry()

    print(json.dumps(result, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
