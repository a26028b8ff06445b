"""
Error taxonomy for ingestion, aggregation and answering.

Each error carries an ``error_kind`` used in logs, batch failure entries
and API responses.
"""

from typing import Optional


class FileQAError(Exception):
    """Base exception for all service failures."""
    
    error_kind = "FILEQA_ERROR"


class UnsupportedFormat(FileQAError):
    """Format hint matches no supported reader."""
    
    error_kind = "UNSUPPORTED_FORMAT"
    
    def __init__(self, format_hint: Optional[str]):
        self.format_hint = format_hint
        super().__init__(
            f"Unsupported file type: {format_hint!r}. "
            "Supported formats: CSV, XLSX/XLS, PDF, TXT"
        )


class ReadError(FileQAError):
    """Source bytes are malformed for the claimed format."""
    
    error_kind = "READ_ERROR"


class EmptyContext(FileQAError):
    """A question was asked before anything was ingested."""
    
    error_kind = "EMPTY_CONTEXT"
    user_message = "Please provide a file for related questions."
    
    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.user_message)


class GenerationError(FileQAError):
    """The text-generation backend failed or returned unusable output."""
    
    error_kind = "GENERATION_ERROR"


class TransportError(FileQAError):
    """The remote storage provider could not be reached."""
    
    error_kind = "TRANSPORT_ERROR"


def error_kind_of(error: BaseException) -> str:
    """Return the taxonomy kind for any exception."""
    if isinstance(error, FileQAError):
        return error.error_kind
    return type(error).__name__
