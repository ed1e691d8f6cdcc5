"""
Seed the books collection from a CSV file.

Books are upserted by title with bulk UpdateOne operations, so running the
script again refreshes existing books instead of duplicating them.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
from pymongo import UpdateOne
from tqdm import tqdm

from src.utils.config import StoreConfig
from src.utils.mongo_client import MongoDBClient

logger = logging.getLogger(__name__)

BOOK_FIELDS = ("title", "author", "genre", "published_year", "price", "in_stock")
DEFAULT_CSV_PATH = Path(__file__).resolve().parent.parent / "data" / "books.csv"


def _native(value: Any) -> Any:
    # Convert numpy types to Python native types
    if hasattr(value, "item"):
        return value.item()
    return value


def load_books(csv_path) -> List[Dict[str, Any]]:
    """
    Read books from a CSV file.

    Args:
        csv_path: Path to a CSV with a header row naming the book fields

    Returns:
        List of book documents; rows without a title are skipped
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")

    df = pd.read_csv(csv_path)
    books = []
    for _, row in df.iterrows():
        title = row.get("title")
        if pd.isna(title) or not str(title).strip():
            continue

        book = {}
        for field in BOOK_FIELDS:
            value = row.get(field)
            if value is not None and pd.notna(value):
                book[field] = _native(value)

        if "published_year" in book:
            book["published_year"] = int(book["published_year"])
        if "price" in book:
            book["price"] = float(book["price"])
        if "in_stock" in book and isinstance(book["in_stock"], str):
            book["in_stock"] = book["in_stock"].strip().lower() == "true"
        books.append(book)
    return books


def build_operations(books: List[Dict[str, Any]]) -> List[UpdateOne]:
    return [
        UpdateOne({"title": book["title"]}, {"$set": book}, upsert=True)
        for book in books
    ]


def seed_books(
    config: StoreConfig,
    csv_path=DEFAULT_CSV_PATH,
    chunk_size: int = 500,
    client: Optional[MongoDBClient] = None,
) -> Dict[str, int]:
    """
    Upsert every book from `csv_path` into the configured collection.

    Args:
        config: Target store
        csv_path: Source CSV
        chunk_size: Number of operations per bulk_write
        client: Optional MongoDBClient (creates one from config if not provided)

    Returns:
        Dictionary with rows read, upserted and modified counts
    """
    books = load_books(csv_path)
    logger.info(f"Loaded {len(books):,} book(s) from {csv_path}")

    if client is None:
        client = MongoDBClient(config.connection_string, config.database_name)

    upserted = 0
    modified = 0
    operations = build_operations(books)

    with client:
        collection = client.get_collection(config.collection_name)
        with tqdm(total=len(operations), desc="Seeding books", unit="books") as pbar:
            for start in range(0, len(operations), chunk_size):
                batch = operations[start:start + chunk_size]
                result = collection.bulk_write(batch, ordered=False)
                upserted += result.upserted_count
                modified += result.modified_count
                pbar.update(len(batch))

    logger.info(f"Seeding complete | upserted: {upserted:,} | modified: {modified:,}")
    return {"rows": len(books), "upserted": upserted, "modified": modified}


def main():
    """Seed the configured collection from data/books.csv."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    result = seed_books(StoreConfig.from_env())
    logger.info(f"Final result: {result}")


if __name__ == "__main__":
    main()
