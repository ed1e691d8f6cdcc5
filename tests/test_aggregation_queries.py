"""
Tests for the aggregation pipelines.

The small evaluators below apply the pipeline stages to in-memory books, so
the stages that run on the server are what the assertions check.
"""

import unittest
from collections import defaultdict
from unittest.mock import MagicMock, patch

from src.queries.aggregation_queries import (
    average_price_by_genre,
    average_price_by_genre_pipeline,
    books_by_decade,
    books_by_decade_pipeline,
    run_aggregation_queries,
    top_authors,
    top_authors_pipeline,
)


def evaluate_expression(expr, doc):
    """Evaluate the field paths and operators used by the book pipelines."""
    if isinstance(expr, str) and expr.startswith("$"):
        return doc[expr[1:]]
    if not isinstance(expr, dict):
        return expr

    (operator, args), = expr.items()
    if operator == "$subtract":
        left, right = (evaluate_expression(a, doc) for a in args)
        return left - right
    if operator == "$mod":
        left, right = (evaluate_expression(a, doc) for a in args)
        return left % right
    if operator == "$toString":
        return str(evaluate_expression(args, doc))
    if operator == "$concat":
        return "".join(evaluate_expression(a, doc) for a in args)
    raise AssertionError(f"Unsupported operator {operator}")


def apply_pipeline(books, pipeline):
    """Evaluate $project, $group ($avg/$sum), $sort and $limit stages."""
    docs = [dict(book) for book in books]
    for stage in pipeline:
        (name, spec), = stage.items()
        if name == "$project":
            docs = [
                {field: evaluate_expression(expr, doc) for field, expr in spec.items()}
                for doc in docs
            ]
        elif name == "$group":
            buckets = defaultdict(list)
            for doc in docs:
                buckets[evaluate_expression(spec["_id"], doc)].append(doc)
            grouped = []
            for key, members in buckets.items():
                row = {"_id": key}
                for field, accumulator in spec.items():
                    if field == "_id":
                        continue
                    (op, arg), = accumulator.items()
                    values = [evaluate_expression(arg, m) for m in members]
                    row[field] = sum(values) / len(values) if op == "$avg" else sum(values)
                grouped.append(row)
            docs = grouped
        elif name == "$sort":
            for field, direction in reversed(list(spec.items())):
                docs = sorted(docs, key=lambda d: d[field], reverse=direction == -1)
        elif name == "$limit":
            docs = docs[:spec]
        else:
            raise AssertionError(f"Unsupported stage {name}")
    return docs


class TestAveragePriceByGenre(unittest.TestCase):
    """Tests for the average price by genre pipeline."""

    def test_pipeline_shape(self):
        """Test the group and sort stages."""
        pipeline = average_price_by_genre_pipeline()
        self.assertEqual(
            pipeline[0],
            {"$group": {"_id": "$genre", "avgPrice": {"$avg": "$price"}}},
        )
        self.assertEqual(pipeline[1], {"$sort": {"avgPrice": -1}})

    def test_sorted_descending_by_average(self):
        """Test genre A (avg 15) comes before genre B (avg 5)."""
        books = [
            {"genre": "A", "price": 10},
            {"genre": "A", "price": 20},
            {"genre": "B", "price": 5},
        ]

        rows = apply_pipeline(books, average_price_by_genre_pipeline())

        self.assertEqual(rows, [{"_id": "A", "avgPrice": 15}, {"_id": "B", "avgPrice": 5}])

    def test_runner_passes_pipeline(self):
        """Test the runner sends the pipeline and returns a list."""
        collection = MagicMock()
        collection.aggregate.return_value = iter([{"_id": "A", "avgPrice": 15}])

        result = average_price_by_genre(collection)

        collection.aggregate.assert_called_once_with(average_price_by_genre_pipeline())
        self.assertEqual(result, [{"_id": "A", "avgPrice": 15}])


class TestTopAuthors(unittest.TestCase):
    """Tests for the top authors pipeline."""

    def test_default_keeps_single_author(self):
        """Test the most prolific author is the only result by default."""
        books = [
            {"author": "George Orwell"},
            {"author": "Harper Lee"},
            {"author": "George Orwell"},
        ]

        rows = apply_pipeline(books, top_authors_pipeline())

        self.assertEqual(rows, [{"_id": "George Orwell", "bookCount": 2}])

    def test_custom_limit(self):
        """Test the limit stage follows the requested count."""
        self.assertEqual(top_authors_pipeline(3)[-1], {"$limit": 3})

    def test_invalid_limit(self):
        """Test a limit below one is rejected."""
        with self.assertRaises(ValueError):
            top_authors_pipeline(0)

    def test_runner(self):
        """Test the runner returns the aggregate output."""
        collection = MagicMock()
        collection.aggregate.return_value = [{"_id": "George Orwell", "bookCount": 2}]

        self.assertEqual(top_authors(collection)[0]["_id"], "George Orwell")


class TestBooksByDecade(unittest.TestCase):
    """Tests for the books by decade pipeline."""

    def test_groups_years_by_decade(self):
        """Test 1955 and 1950 land in 1950s and 2001 in 2000s, sorted by decade."""
        books = [
            {"title": "B", "published_year": 2001},
            {"title": "A", "published_year": 1955},
            {"title": "C", "published_year": 1950},
        ]

        rows = apply_pipeline(books, books_by_decade_pipeline())

        self.assertEqual(rows, [{"_id": "1950s", "count": 2}, {"_id": "2000s", "count": 1}])

    def test_decade_boundaries(self):
        """Test the last year of a decade stays in that decade."""
        books = [{"published_year": 1959}, {"published_year": 1960}, {"published_year": 1813}]

        rows = apply_pipeline(books, books_by_decade_pipeline())

        self.assertEqual(
            rows,
            [
                {"_id": "1810s", "count": 1},
                {"_id": "1950s", "count": 1},
                {"_id": "1960s", "count": 1},
            ],
        )

    def test_runner(self):
        """Test the runner sends the decade pipeline."""
        collection = MagicMock()
        collection.aggregate.return_value = []

        self.assertEqual(books_by_decade(collection), [])
        collection.aggregate.assert_called_once_with(books_by_decade_pipeline())


class TestRunAggregationQueries(unittest.TestCase):
    """Tests for the aggregation group runner."""

    @patch("builtins.print")
    def test_runs_three_pipelines(self, _print):
        """Test all three pipelines run and their results are collected."""
        collection = MagicMock()
        collection.aggregate.return_value = []

        results = run_aggregation_queries(collection)

        self.assertEqual(collection.aggregate.call_count, 3)
        self.assertEqual(
            set(results), {"avg_price_by_genre", "most_books_author", "by_decade"}
        )


if __name__ == "__main__":
    unittest.main()
