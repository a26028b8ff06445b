"""
Ingestion dispatcher - routes raw bytes to the reader for their format.
The format comes from an external hint: a file name, an extension or a
declared MIME type.
"""

import re
from pathlib import PurePosixPath
from typing import List, Optional
from fileqa.core.errors import FileQAError, ReadError, UnsupportedFormat
from fileqa.core.logging import setup_logger
from .records import Record

logger = setup_logger()


# File extension to format mapping
EXTENSION_MAP = {
    '.csv': 'csv',
    '.xlsx': 'xlsx',
    '.xlsm': 'xlsx',
    '.xls': 'xls',
    '.pdf': 'pdf',
    '.txt': 'txt'
}

# MIME type to format mapping, checked before the substring rules
MIME_MAP = {
    'text/csv': 'csv',
    'application/csv': 'csv',
    'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet': 'xlsx',
    'application/vnd.ms-excel': 'xls',
    'application/pdf': 'pdf',
    'text/plain': 'txt'
}

# Reader family per format
FORMAT_FAMILIES = {
    'csv': 'tabular',
    'xlsx': 'spreadsheet',
    'xls': 'spreadsheet',
    'pdf': 'text',
    'txt': 'text'
}

_MIME_PATTERN = re.compile(r"^[a-z0-9.+-]+/[a-z0-9.+-]+$")

# Top-level types of the MIME types readers accept; anything else with a
# slash is a file name
MIME_TOP_LEVEL_TYPES = ("application", "text")


def _is_mime_type(hint: str) -> bool:
    """A declared content type, as opposed to a file name containing a slash."""
    if not _MIME_PATTERN.match(hint):
        return False
    if PurePosixPath(hint).suffix in EXTENSION_MAP:
        return False
    return hint.split("/", 1)[0] in MIME_TOP_LEVEL_TYPES


def _format_from_mime(mime_type: str) -> Optional[str]:
    if mime_type in MIME_MAP:
        return MIME_MAP[mime_type]
    if "csv" in mime_type:
        return "csv"
    if "excel" in mime_type or "spreadsheet" in mime_type:
        return "xlsx"
    return None


def _format_from_extension(hint: str) -> Optional[str]:
    extension = PurePosixPath(hint).suffix
    if not extension:
        extension = hint if hint.startswith(".") else f".{hint}"
    return EXTENSION_MAP.get(extension)


def detect_format(format_hint: Optional[str]) -> str:
    """
    Resolve a format hint to a supported format.
    
    Args:
        format_hint: File name, extension (".csv" or "csv") or MIME type
        
    Returns:
        One of the keys of FORMAT_FAMILIES
        
    Raises:
        UnsupportedFormat: If the hint matches no supported reader
    """
    if not format_hint or not format_hint.strip():
        raise UnsupportedFormat(format_hint)
    
    hint = format_hint.strip().lower()
    detected = None
    
    # Declared content type, parameters such as charset are ignored
    mime_type = hint.split(";", 1)[0].strip()
    if _is_mime_type(mime_type):
        detected = _format_from_mime(mime_type)
    
    if detected is None:
        detected = _format_from_extension(hint)
    
    if detected is None:
        logger.warning(f"Unsupported format hint: {format_hint!r}")
        raise UnsupportedFormat(format_hint)
    
    logger.info(f"Format detected: {detected} (hint: {format_hint})")
    return detected


def parse_bytes(raw_bytes: bytes, file_format: str) -> List[Record]:
    """
    Run the reader for an already detected format.
    
    Raises:
        UnsupportedFormat: If no reader exists for the format
        ReadError: If the bytes cannot be read as that format
    """
    try:
        if file_format == 'csv':
            from .parser_csv import parse_csv
            return parse_csv(raw_bytes)
        elif file_format in ('xlsx', 'xls'):
            from .parser_excel import parse_excel
            return parse_excel(raw_bytes, file_format)
        elif file_format == 'pdf':
            from .parser_pdf import parse_pdf
            return parse_pdf(raw_bytes)
        elif file_format == 'txt':
            from .parser_pdf import parse_text
            return parse_text(raw_bytes)
    except FileQAError:
        raise
    except Exception as e:
        logger.error(f"Reader error for {file_format}: {str(e)}")
        raise ReadError(f"Failed to read {file_format.upper()} data: {str(e)}") from e
    
    raise UnsupportedFormat(file_format)


def read_records(raw_bytes: bytes, format_hint: Optional[str]) -> List[Record]:
    """
    Convert raw bytes into records using the reader selected by the hint.
    
    Args:
        raw_bytes: Complete file content
        format_hint: File name, extension or MIME type
        
    Returns:
        Records in source order
        
    Raises:
        UnsupportedFormat: If the hint matches no reader (nothing is parsed)
        ReadError: If the content is malformed for the detected format
    """
    return parse_bytes(raw_bytes, detect_format(format_hint))


def get_supported_formats() -> List[str]:
    """
    Get list of supported file formats.
    
    Returns:
        Sorted list of supported format strings
    """
    return sorted(FORMAT_FAMILIES)
