"""
Context serializer - renders an AggregateContext as prompt text.
"""

import json
from fileqa.ingestion.records import FileDataset
from .store import AggregateContext

BLOCK_SEPARATOR = "\n\n"


def serialize_dataset(dataset: FileDataset) -> str:
    """
    Render one dataset as a labeled block.
    
    Example:
        File: people.csv
        Data: [
          {
            "name": "ANN",
            ...
    """
    data = json.dumps([dict(record) for record in dataset.records], indent=2, ensure_ascii=False)
    return f"File: {dataset.provenance}\nData: {data}"


def serialize_context(context: AggregateContext) -> str:
    """
    Render every dataset in context order, blocks separated by a blank line.
    Deterministic for a given context; no truncation is applied.
    """
    return BLOCK_SEPARATOR.join(serialize_dataset(dataset) for dataset in context.datasets)
