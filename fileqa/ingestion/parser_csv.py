"""
CSV reader - first row is the header, every following row becomes one
record keyed by header name.
"""

import csv
import io
from typing import List
from fileqa.core.errors import ReadError
from fileqa.core.logging import setup_logger
from .records import TabularRecord

logger = setup_logger()

CANDIDATE_DELIMITERS = ",;\t|"


def decode_bytes(raw_bytes: bytes) -> str:
    """
    Decode file bytes as UTF-8 (BOM stripped), falling back to latin-1.
    """
    try:
        return raw_bytes.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.warning("UTF-8 decode failed, falling back to latin-1")
        return raw_bytes.decode("latin-1")


def detect_delimiter(sample: str) -> str:
    """Sniff the delimiter from a text sample, defaulting to a comma."""
    try:
        return csv.Sniffer().sniff(sample, delimiters=CANDIDATE_DELIMITERS).delimiter
    except csv.Error:
        return ','


def unique_headers(headers: List[str]) -> List[str]:
    """
    Make header names unique by suffixing repeats with ``_<n>``.
    
    Example:
        >>> unique_headers(["id", "name", "name"])
        ['id', 'name', 'name_2']
    """
    seen = set()
    result = []
    for header in headers:
        name = header
        suffix = 1
        while name in seen:
            suffix += 1
            name = f"{header}_{suffix}"
        seen.add(name)
        result.append(name)
    return result


def parse_csv(raw_bytes: bytes) -> List[TabularRecord]:
    """
    Parse delimited text into tabular records.
    
    Args:
        raw_bytes: CSV file content
        
    Returns:
        One TabularRecord per data row, in file order. Empty or header-only
        input yields an empty list.
        
    Raises:
        ReadError: If the content is not valid delimited text
    """
    text = decode_bytes(raw_bytes)
    delimiter = detect_delimiter(text[:4096])
    logger.info(f"CSV delimiter detected: '{delimiter}'")
    
    try:
        rows = list(csv.reader(io.StringIO(text, newline=''), delimiter=delimiter))
    except csv.Error as e:
        raise ReadError(f"Failed to parse CSV: {str(e)}") from e
    
    if not rows:
        logger.info("CSV is empty, no records produced")
        return []
    
    headers = unique_headers(rows[0])
    records = []
    
    for row in rows[1:]:
        # Blank lines produce no record
        if not row:
            continue
        
        fields = {}
        for index, header in enumerate(headers):
            fields[header] = row[index] if index < len(row) else ""
        # Cells beyond the header row are keyed by column position
        for index in range(len(headers), len(row)):
            fields[f"_{index}"] = row[index]
        
        records.append(TabularRecord(fields=fields))
    
    logger.info(f"CSV parsed successfully - {len(records)} rows, {len(headers)} columns")
    return records
