"""
Basic queries against the books collection.

Exact-match and range filters, a single-field price update and an optional
delete by title.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from src.utils.report import print_documents

logger = logging.getLogger(__name__)

# Sample values used when the group is run from the command line
SAMPLE_GENRE = "Fiction"
SAMPLE_YEAR = 1950
SAMPLE_AUTHOR = "George Orwell"
SAMPLE_UPDATE_TITLE = "The Great Gatsby"
SAMPLE_UPDATE_PRICE = 15.99


def find_by_genre(collection, genre: str) -> List[Dict[str, Any]]:
    """Return all books whose genre equals `genre`."""
    return list(collection.find({"genre": genre}))


def find_published_after(collection, year: int) -> List[Dict[str, Any]]:
    """Return all books with published_year strictly greater than `year`."""
    return list(collection.find({"published_year": {"$gt": year}}))


def find_by_author(collection, author: str) -> List[Dict[str, Any]]:
    """Return all books written by `author`."""
    return list(collection.find({"author": author}))


def update_price(collection, title: str, price: float) -> Tuple[int, int]:
    """
    Set the price of the first book matching `title`.

    Args:
        collection: MongoDB collection
        title: Exact title to match
        price: New price

    Returns:
        Tuple of (matched_count, modified_count)
    """
    result = collection.update_one({"title": title}, {"$set": {"price": price}})
    return result.matched_count, result.modified_count


def delete_by_title(collection, title: str) -> int:
    """
    Delete the first book matching `title`.

    Only called when a title is passed explicitly; the default run never
    deletes anything.

    Returns:
        Number of deleted documents (0 or 1)
    """
    result = collection.delete_one({"title": title})
    return result.deleted_count


def run_basic_queries(collection, delete_title: Optional[str] = None) -> Dict[str, Any]:
    """Run and display the basic query group."""
    results: Dict[str, Any] = {}

    results["by_genre"] = find_by_genre(collection, SAMPLE_GENRE)
    print_documents(f"Books in {SAMPLE_GENRE} genre:", results["by_genre"])

    results["published_after"] = find_published_after(collection, SAMPLE_YEAR)
    print_documents(f"Books published after {SAMPLE_YEAR}:", results["published_after"])

    results["by_author"] = find_by_author(collection, SAMPLE_AUTHOR)
    print_documents(f"Books by {SAMPLE_AUTHOR}:", results["by_author"])

    print(f"\nUpdating price of '{SAMPLE_UPDATE_TITLE}'...")
    matched, modified = update_price(collection, SAMPLE_UPDATE_TITLE, SAMPLE_UPDATE_PRICE)
    print(f"Matched: {matched}, Modified: {modified}")
    results["update"] = {"matched": matched, "modified": modified}

    if delete_title:
        print(f"\nDeleting '{delete_title}'...")
        deleted = delete_by_title(collection, delete_title)
        print(f"Deleted: {deleted}")
        logger.info(f"Deleted {deleted} book(s) titled '{delete_title}'")
        results["deleted"] = deleted

    return results
