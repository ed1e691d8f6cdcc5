"""
Console output helpers for query results.
"""

from typing import Any, Dict, Iterable, Mapping

STATS_FIELDS = (
    "nReturned",
    "totalKeysExamined",
    "totalDocsExamined",
    "executionTimeMillis",
)


def print_documents(heading: str, documents: Iterable[Mapping[str, Any]]) -> None:
    """Print a heading followed by one line per document."""
    documents = list(documents)
    print(f"\n{heading}")
    if not documents:
        print("  (no documents)")
        return
    for doc in documents:
        print("  " + ", ".join(f"{key}: {value}" for key, value in doc.items()))


def print_stats(heading: str, stats: Dict[str, Any]) -> None:
    """Print the interesting parts of an executionStats document."""
    print(f"\n{heading}")
    if not stats:
        print("  (no execution stats returned)")
        return
    for field in STATS_FIELDS:
        print(f"  {field}: {stats.get(field, 'N/A')}")

    stage = stats.get("executionStages", {})
    if stage:
        # The index scan usually sits under a FETCH stage
        input_stage = stage.get("inputStage", {})
        print(f"  stage: {stage.get('stage', 'N/A')}")
        if input_stage:
            print(f"  input stage: {input_stage.get('stage', 'N/A')}")
            if "indexName" in input_stage:
                print(f"  index used: {input_stage['indexName']}")
