"""
Unstructured text readers - PDF and plain text.
No structure is inferred: every line becomes one record with a single
``text`` field, empty lines included.
"""

import io
from typing import List
import pdfplumber
from fileqa.core.errors import ReadError
from fileqa.core.logging import setup_logger
from .parser_csv import decode_bytes
from .records import TextLineRecord

logger = setup_logger()


def split_lines(text: str) -> List[TextLineRecord]:
    """
    Split text on line boundaries into one record per line.
    
    Example:
        >>> [r.text for r in split_lines("Total: 42\\n")]
        ['Total: 42', '']
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return [TextLineRecord(text=line) for line in text.split("\n")]


def extract_pdf_text(raw_bytes: bytes) -> str:
    """
    Extract the text of every page, pages separated by a blank line.
    
    Raises:
        ReadError: If the PDF cannot be opened
    """
    try:
        with pdfplumber.open(io.BytesIO(raw_bytes)) as pdf:
            logger.info(f"PDF has {len(pdf.pages)} pages")
            pages = []
            for page_num, page in enumerate(pdf.pages, start=1):
                text = page.extract_text() or ""
                if not text.strip():
                    logger.warning(f"No text found on page {page_num}")
                pages.append(text)
    except Exception as e:
        logger.error(f"Failed to process PDF: {str(e)}")
        raise ReadError(f"PDF processing failed: {str(e)}") from e
    
    return "\n\n".join(pages)


def parse_pdf(raw_bytes: bytes) -> List[TextLineRecord]:
    """
    Parse a PDF into line records.
    
    Args:
        raw_bytes: PDF file content
        
    Returns:
        One TextLineRecord per extracted line
    """
    records = split_lines(extract_pdf_text(raw_bytes))
    logger.info(f"PDF parsed successfully - {len(records)} lines")
    return records


def parse_text(raw_bytes: bytes) -> List[TextLineRecord]:
    """Parse a plain text file into line records."""
    records = split_lines(decode_bytes(raw_bytes))
    logger.info(f"TXT parsed successfully - {len(records)} lines")
    return records
