"""
Main script for the PLP bookstore queries.

Runs the basic, advanced, aggregation and indexing query groups against the
books collection, each on its own MongoDB connection.
"""

import argparse
import logging
from functools import partial
from typing import List, Optional, Sequence

from src.queries.advanced_queries import run_advanced_queries
from src.queries.aggregation_queries import run_aggregation_queries
from src.queries.basic_queries import run_basic_queries
from src.queries.indexing_queries import run_indexing_queries
from src.session_runner import GroupResult, SessionRunner
from src.utils.config import StoreConfig

logger = logging.getLogger(__name__)

GROUP_NAMES = ("basic", "advanced", "aggregation", "indexing")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line options for the query tool."""
    parser = argparse.ArgumentParser(description="Run sample queries against the bookstore collection")
    parser.add_argument(
        "--groups",
        nargs="+",
        choices=GROUP_NAMES,
        default=list(GROUP_NAMES),
        help="Query groups to run (default: all, in order)",
    )
    parser.add_argument("--page", type=int, default=1, help="Page number for pagination")
    parser.add_argument("--per-page", type=int, default=5, help="Books per page")
    parser.add_argument(
        "--delete-title",
        default=None,
        help="Also delete the book with this title (off by default)",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser.parse_args(argv)


def build_groups(args: argparse.Namespace) -> list:
    """Map the selected group names to their operations, in canonical order."""
    operations = {
        "basic": partial(run_basic_queries, delete_title=args.delete_title),
        "advanced": partial(run_advanced_queries, page=args.page, per_page=args.per_page),
        "aggregation": run_aggregation_queries,
        "indexing": run_indexing_queries,
    }
    return [(name, operations[name]) for name in GROUP_NAMES if name in args.groups]


def print_summary(results: List[GroupResult]) -> None:
    """Print one ok/failed line per group."""
    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    for result in results:
        status = "ok" if result.succeeded else f"failed ({result.error})"
        print(f"{result.name:<12} {status}")
    print("=" * 60)


def run(argv: Optional[Sequence[str]] = None) -> List[GroupResult]:
    """Parse arguments, run the selected groups and return their results."""
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    config = StoreConfig.from_env()

    print("=" * 60)
    print("PLP Bookstore - Query Tool")
    print("=" * 60)
    print(f"Database:   {config.database_name}")
    print(f"Collection: {config.collection_name}")
    print("=" * 60)

    runner = SessionRunner(config)
    results = runner.run_all(build_groups(args))
    print_summary(results)
    return results


def main(argv: Optional[Sequence[str]] = None) -> None:
    """
    Main entry point.

    Returns None so the console script exits with status 0 even when a group
    fails; failures are reported in the summary and the log.
    """
    run(argv)


if __name__ == "__main__":
    main()
