"""
Graceful Response Layer

Human-friendly messages for degraded and failed operations, with the
technical details kept in metadata for observability.

- Never expose raw error text as the user message
- Always suggest a constructive next action
- Keep messages short (1-2 sentences)
"""

from enum import Enum
from typing import Dict, Any, Optional
from fileqa.core.errors import EmptyContext
from fileqa.core.logging import setup_logger

logger = setup_logger()


class DegradationLevel(str, Enum):
    """
    Degradation levels for operations.
    
    - NONE: Operation succeeded fully
    - DEGRADED: Operation succeeded partially (some files skipped)
    - FAILED: Operation failed completely
    """
    NONE = "none"
    DEGRADED = "degraded"
    FAILED = "failed"


_MESSAGE_TEMPLATES = {
    # Answering
    "qa_empty_context": EmptyContext.user_message,
    "qa_generation_error": "Error generating answer.",
    
    # Ingestion
    "ingest_unsupported_format": "Unsupported file type.",
    "ingest_read_error": "The file could not be read.",
    "batch_partial_failure": "Some files couldn't be processed; answers will use the remaining files.",
    "batch_all_failed": "None of the files in the folder could be processed.",
    
    # Storage
    "storage_unreachable": "The file storage service could not be reached.",
    
    "generic_error": "An unexpected issue occurred during processing."
}


_ACTION_HINTS = {
    "qa_empty_context": "Upload a file or load a folder before asking questions.",
    "qa_generation_error": "Please try again in a moment.",
    "ingest_unsupported_format": "Upload a CSV, Excel, PDF or TXT file.",
    "ingest_read_error": "Check that the file is not corrupted and matches its extension.",
    "batch_partial_failure": "Check the listed failures and re-upload those files.",
    "batch_all_failed": "Check that the folder contains CSV, Excel, PDF or TXT files.",
    "storage_unreachable": "Check the folder id and access token, then try again.",
    "generic_error": "Please try again or contact support if the issue persists."
}

# Error kind to message context
ERROR_CONTEXTS = {
    "EMPTY_CONTEXT": "qa_empty_context",
    "GENERATION_ERROR": "qa_generation_error",
    "UNSUPPORTED_FORMAT": "ingest_unsupported_format",
    "READ_ERROR": "ingest_read_error",
    "TRANSPORT_ERROR": "storage_unreachable"
}


def success_message(details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Graceful fields for a fully successful operation.
    
    Example:
        >>> success_message({"records": 5})
        {'graceful_message': None, 'degradation_level': 'none', 'user_action_hint': None, 'records': 5}
    """
    return {
        "graceful_message": None,
        "degradation_level": DegradationLevel.NONE.value,
        "user_action_hint": None,
        **(details or {})
    }


def graceful_degraded(
    context: str,
    reason: str,
    meta: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Graceful fields for a partially successful operation.
    
    Args:
        context: Message context (e.g. "batch_partial_failure")
        reason: Internal reason, kept as metadata
        meta: Optional metadata to include
    """
    logger.info(f"graceful_degraded context={context} reason={reason}")
    
    result = {
        "graceful_message": _MESSAGE_TEMPLATES.get(context, _MESSAGE_TEMPLATES["generic_error"]),
        "degradation_level": DegradationLevel.DEGRADED.value,
        "user_action_hint": _ACTION_HINTS.get(context, _ACTION_HINTS["generic_error"]),
        "fallback_reason": reason
    }
    if meta:
        result.update(meta)
    return result


def graceful_failure(
    context: str,
    error: str,
    meta: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Graceful fields for a failed operation.
    
    Args:
        context: Message context (e.g. "qa_generation_error")
        error: Internal error details, logged but not exposed
        meta: Optional metadata to include
        
    Example:
        >>> graceful_failure("qa_empty_context", "no datasets")["graceful_message"]
        'Please provide a file for related questions.'
    """
    logger.error(f"graceful_failure context={context} error={error}")
    
    result = {
        "graceful_message": _MESSAGE_TEMPLATES.get(context, _MESSAGE_TEMPLATES["generic_error"]),
        "degradation_level": DegradationLevel.FAILED.value,
        "user_action_hint": _ACTION_HINTS.get(context, _ACTION_HINTS["generic_error"])
    }
    if meta:
        result.update(meta)
    return result


def failure_for_error(error: Exception) -> Dict[str, Any]:
    """
    Graceful failure fields for a raised service error, tagged with its kind.
    """
    error_kind = getattr(error, "error_kind", type(error).__name__)
    context = ERROR_CONTEXTS.get(error_kind, "generic_error")
    return graceful_failure(context, str(error), {"error_class": error_kind})
