"""
Record shapes shared by readers, the normalizer and the aggregator.

Readers return a tagged variant (tabular row or text line); after
normalization every record converges to one plain ``dict[str, str]``.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

TEXT_FIELD = "text"

NormalizedRecord = Dict[str, str]


@dataclass(frozen=True)
class TabularRecord:
    """One row of a delimited file or spreadsheet, keyed by header name."""
    fields: Dict[str, Any]


@dataclass(frozen=True)
class TextLineRecord:
    """One line of an unstructured text source."""
    text: str
    
    @property
    def fields(self) -> Dict[str, Any]:
        return {TEXT_FIELD: self.text}


Record = Union[TabularRecord, TextLineRecord]


@dataclass(frozen=True)
class FileDataset:
    """
    Normalized records read from one file, tagged with their provenance.
    Created once per successfully read file and never mutated.
    """
    provenance: str
    records: Tuple[NormalizedRecord, ...]
    format: str = "unknown"
    source_id: Optional[str] = None
    
    @property
    def record_count(self) -> int:
        return len(self.records)
    
    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "provenance": self.provenance,
            "format": self.format,
            "source_id": self.source_id,
            "record_count": self.record_count,
            "records": [dict(record) for record in self.records],
        }


@dataclass(frozen=True)
class FileFailure:
    """A file that could not be ingested during a batch rebuild."""
    file_id: str
    file_name: str
    error_kind: str
    message: str
    
    def to_dict(self) -> dict:
        return {
            "file_id": self.file_id,
            "file_name": self.file_name,
            "error_kind": self.error_kind,
            "message": self.message,
        }


@dataclass(frozen=True)
class BatchResult:
    """
    Outcome of a batch rebuild. Failed files appear in ``failures`` and are
    absent from ``datasets``, so ``len(datasets)`` can be lower than the
    number of files listed.
    """
    datasets: Tuple[FileDataset, ...]
    failures: Tuple[FileFailure, ...] = ()
    
    @property
    def files_listed(self) -> int:
        return len(self.datasets) + len(self.failures)
    
    def to_dict(self) -> dict:
        return {
            "datasets": [dataset.to_dict() for dataset in self.datasets],
            "failures": [failure.to_dict() for failure in self.failures],
            "files_listed": self.files_listed,
        }
