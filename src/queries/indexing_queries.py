"""
Index management and query execution statistics for the books collection.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from pymongo import ASCENDING, DESCENDING

from src.utils.report import print_stats

logger = logging.getLogger(__name__)

IndexKeys = List[Tuple[str, int]]

TITLE_INDEX: IndexKeys = [("title", ASCENDING)]
AUTHOR_YEAR_INDEX: IndexKeys = [("author", ASCENDING), ("published_year", DESCENDING)]

SAMPLE_TITLE = "Book A"


def index_name(keys: IndexKeys) -> str:
    """Default MongoDB name for an index, e.g. 'author_1_published_year_-1'."""
    return "_".join(f"{field}_{direction}" for field, direction in keys)


def ensure_index(collection, keys: IndexKeys) -> str:
    """
    Ensure an index with the given keys exists.

    Args:
        collection: MongoDB collection
        keys: List of (field, direction) pairs

    Returns:
        Name of the index
    """
    name = index_name(keys)
    existing_indexes = collection.index_information()

    if name not in existing_indexes:
        logger.info(f"Creating index '{name}'...")
        collection.create_index(keys, name=name)
        logger.info(f"Index '{name}' created successfully")
    else:
        logger.info(f"Index '{name}' already exists")
    return name


def explain_find(
    collection,
    query: Dict[str, Any],
    hint: Optional[IndexKeys] = None,
) -> Dict[str, Any]:
    """
    Explain a find with executionStats verbosity.

    Args:
        collection: MongoDB collection
        query: Filter to explain
        hint: Optional index keys the server should use

    Returns:
        The executionStats section of the explain output
    """
    find_command: Dict[str, Any] = {"find": collection.name, "filter": query}
    if hint:
        find_command["hint"] = dict(hint)

    explain = collection.database.command({
        "explain": find_command,
        "verbosity": "executionStats",
    })
    return explain.get("executionStats", {})


def run_indexing_queries(collection, title: str = SAMPLE_TITLE) -> Dict[str, Any]:
    """Create the indexes and compare execution stats with and without a hint."""
    results: Dict[str, Any] = {}

    results["title_index"] = ensure_index(collection, TITLE_INDEX)
    print("\nIndex created on 'title' field")

    results["compound_index"] = ensure_index(collection, AUTHOR_YEAR_INDEX)
    print("Compound index created on 'author' and 'published_year'")

    query = {"title": title}
    results["without_hint"] = explain_find(collection, query)
    print_stats("Query without using index explicitly:", results["without_hint"])

    results["with_hint"] = explain_find(collection, query, hint=TITLE_INDEX)
    print_stats("Query using index (hinted):", results["with_hint"])

    return results
