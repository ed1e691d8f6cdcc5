"""
Aggregation pipelines over the books collection.

Pipelines are built by plain functions so they can be inspected without a
server; the run_* helpers execute them.
"""

from typing import Any, Dict, List

from src.utils.report import print_documents


def average_price_by_genre_pipeline() -> List[Dict[str, Any]]:
    """Average price per genre, most expensive genre first."""
    return [
        {"$group": {"_id": "$genre", "avgPrice": {"$avg": "$price"}}},
        {"$sort": {"avgPrice": -1}},
    ]


def top_authors_pipeline(limit: int = 1) -> List[Dict[str, Any]]:
    """Authors ranked by number of books, keeping the first `limit`."""
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")
    return [
        {"$group": {"_id": "$author", "bookCount": {"$sum": 1}}},
        {"$sort": {"bookCount": -1}},
        {"$limit": limit},
    ]


def books_by_decade_pipeline() -> List[Dict[str, Any]]:
    """
    Count books per publication decade, ordered by decade.

    The decade is the year minus its remainder modulo 10, rendered as text
    with an 's' suffix, so 1955 falls under "1950s".
    """
    decade_start = {
        "$subtract": ["$published_year", {"$mod": ["$published_year", 10]}]
    }
    return [
        {"$project": {
            "decade": {"$concat": [{"$toString": decade_start}, "s"]},
        }},
        {"$group": {"_id": "$decade", "count": {"$sum": 1}}},
        {"$sort": {"_id": 1}},
    ]


def average_price_by_genre(collection) -> List[Dict[str, Any]]:
    """Run the average-price-by-genre pipeline."""
    return list(collection.aggregate(average_price_by_genre_pipeline()))


def top_authors(collection, limit: int = 1) -> List[Dict[str, Any]]:
    """Run the top-authors pipeline, keeping the first `limit` authors."""
    return list(collection.aggregate(top_authors_pipeline(limit)))


def books_by_decade(collection) -> List[Dict[str, Any]]:
    """Run the books-per-decade pipeline."""
    return list(collection.aggregate(books_by_decade_pipeline()))


def run_aggregation_queries(collection) -> Dict[str, Any]:
    """Run and display the aggregation group."""
    results: Dict[str, Any] = {}

    results["avg_price_by_genre"] = average_price_by_genre(collection)
    print_documents("Average price of books by genre:", results["avg_price_by_genre"])

    results["most_books_author"] = top_authors(collection, limit=1)
    print_documents("Author with the most books:", results["most_books_author"])

    results["by_decade"] = books_by_decade(collection)
    print_documents("Books grouped by publication decade:", results["by_decade"])

    return results
