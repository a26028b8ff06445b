"""
File ingestion: format readers and record normalization.
Supports: CSV, XLSX/XLS (first sheet), PDF, TXT
"""

from .dispatcher import detect_format, read_records
from .normalize import normalize_record, normalize_records
from .records import FileDataset, TabularRecord, TextLineRecord

__all__ = [
    "detect_format",
    "read_records",
    "normalize_record",
    "normalize_records",
    "FileDataset",
    "TabularRecord",
    "TextLineRecord"
]
