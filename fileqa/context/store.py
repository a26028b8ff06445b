"""
Aggregate context snapshots.

The context is an immutable tuple of FileDatasets. ContextStore publishes a
new snapshot on every change; readers always get a complete snapshot.
"""

import threading
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple
from fileqa.ingestion.records import FileDataset


@dataclass(frozen=True)
class AggregateContext:
    """The currently loaded answerable corpus, in ingestion order."""
    datasets: Tuple[FileDataset, ...] = ()
    
    @property
    def is_empty(self) -> bool:
        return not self.datasets
    
    @property
    def record_count(self) -> int:
        return sum(dataset.record_count for dataset in self.datasets)
    
    def __len__(self) -> int:
        return len(self.datasets)
    
    def __iter__(self) -> Iterator[FileDataset]:
        return iter(self.datasets)
    
    def with_dataset(self, dataset: FileDataset) -> "AggregateContext":
        """Return a new context with one dataset appended."""
        return AggregateContext(datasets=self.datasets + (dataset,))
    
    def summary(self) -> dict:
        return {
            "dataset_count": len(self.datasets),
            "record_count": self.record_count,
            "files": [
                {
                    "provenance": dataset.provenance,
                    "format": dataset.format,
                    "source_id": dataset.source_id,
                    "record_count": dataset.record_count
                }
                for dataset in self.datasets
            ]
        }


class ContextStore:
    """
    Holder of the current AggregateContext.
    
    Updates build a new snapshot and swap the reference under a lock, so a
    reader never observes a partially rebuilt context.
    """
    
    def __init__(self, initial: Optional[AggregateContext] = None):
        self._snapshot = initial or AggregateContext()
        self._lock = threading.Lock()
    
    def snapshot(self) -> AggregateContext:
        """Return the current context."""
        return self._snapshot
    
    def append(self, dataset: FileDataset) -> AggregateContext:
        """Append one dataset, keeping everything already loaded."""
        with self._lock:
            self._snapshot = self._snapshot.with_dataset(dataset)
            return self._snapshot
    
    def replace(self, datasets: Iterable[FileDataset]) -> AggregateContext:
        """Replace the whole context with a new sequence of datasets."""
        new_snapshot = AggregateContext(datasets=tuple(datasets))
        with self._lock:
            self._snapshot = new_snapshot
            return new_snapshot
