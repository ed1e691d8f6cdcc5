"""
Advanced queries: compound filters, projection, sorting and pagination.
"""

from typing import Any, Dict, List, Sequence

from pymongo import ASCENDING, DESCENDING

from src.utils.report import print_documents

SAMPLE_IN_STOCK_YEAR = 2010
LISTING_FIELDS = ("title", "author", "price")
PRICE_FIELDS = ("title", "price")


def projection_for(fields: Sequence[str]) -> Dict[str, int]:
    """Build a projection returning only `fields`, without `_id`."""
    projection = {"_id": 0}
    for field in fields:
        projection[field] = 1
    return projection


def find_in_stock_published_after(collection, year: int) -> List[Dict[str, Any]]:
    """Books that are in stock and published after `year`."""
    return list(collection.find({
        "in_stock": True,
        "published_year": {"$gt": year},
    }))


def find_projected(collection, fields: Sequence[str] = LISTING_FIELDS) -> List[Dict[str, Any]]:
    """Return every book with only `fields`, suppressing `_id`."""
    return list(collection.find({}, projection_for(fields)))


def sort_by_price(collection, descending: bool = False) -> List[Dict[str, Any]]:
    """Return title and price of every book ordered by price."""
    direction = DESCENDING if descending else ASCENDING
    cursor = collection.find({}, projection_for(PRICE_FIELDS)).sort("price", direction)
    return list(cursor)


def paginate(collection, page: int = 1, per_page: int = 5) -> List[Dict[str, Any]]:
    """
    Return one page of books in natural order.

    Args:
        collection: MongoDB collection
        page: 1-based page number
        per_page: Number of books per page

    Returns:
        At most `per_page` documents (title, author, price)
    """
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if per_page < 1:
        raise ValueError(f"per_page must be >= 1, got {per_page}")

    cursor = (
        collection.find({}, projection_for(LISTING_FIELDS))
        .skip((page - 1) * per_page)
        .limit(per_page)
    )
    return list(cursor)


def run_advanced_queries(collection, page: int = 1, per_page: int = 5) -> Dict[str, Any]:
    """Run and display the advanced query group."""
    results: Dict[str, Any] = {}

    results["in_stock_recent"] = find_in_stock_published_after(collection, SAMPLE_IN_STOCK_YEAR)
    print_documents(
        f"Books in stock and published after {SAMPLE_IN_STOCK_YEAR}:",
        results["in_stock_recent"],
    )

    results["projected"] = find_projected(collection)
    print_documents("Books with projection (title, author, price):", results["projected"])

    results["price_asc"] = sort_by_price(collection)
    print_documents("Books sorted by price ascending:", results["price_asc"])

    results["price_desc"] = sort_by_price(collection, descending=True)
    print_documents("Books sorted by price descending:", results["price_desc"])

    results["page"] = paginate(collection, page, per_page)
    print_documents(f"Page {page} ({per_page} books per page):", results["page"])

    return results
