"""
Record normalization.
Converts every field value to its canonical upper-cased string so records
from any reader share one comparable shape. Field names are left untouched.
"""

import math
from datetime import date, datetime, time
from typing import Any, Iterable, List, Mapping, Union
from .records import NormalizedRecord, Record


def canonical_string(value: Any) -> str:
    """
    Convert a raw cell value to its canonical string form.
    
    - None and NaN become ""
    - integral floats lose their fractional part (30.0 -> "30")
    - dates and times use ISO-8601
    
    Args:
        value: Raw value produced by a reader
        
    Returns:
        String representation, not yet case-folded
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    # pandas.Timestamp and numpy scalars
    if hasattr(value, "isoformat"):
        return value.isoformat()
    if hasattr(value, "item"):
        return canonical_string(value.item())
    return str(value)


def normalize_value(value: Any) -> str:
    """Canonical string, upper-cased."""
    return canonical_string(value).upper()


def normalize_record(record: Union[Record, Mapping[str, Any]]) -> NormalizedRecord:
    """
    Normalize one record. Pure, total and idempotent.
    
    Args:
        record: A reader record or any field-name -> value mapping
        
    Returns:
        New dict with the same keys, in the same order, and normalized values
    """
    fields = record.fields if hasattr(record, "fields") else record
    return {key: normalize_value(value) for key, value in fields.items()}


def normalize_records(records: Iterable[Union[Record, Mapping[str, Any]]]) -> List[NormalizedRecord]:
    """Apply normalize_record to every record of a batch."""
    return [normalize_record(record) for record in records]
