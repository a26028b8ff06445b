"""
Multi-file aggregation and context assembly.
"""

from .store import AggregateContext, ContextStore
from .aggregator import add_file, build_dataset, rebuild_from
from .serializer import serialize_context

__all__ = [
    "AggregateContext",
    "ContextStore",
    "add_file",
    "build_dataset",
    "rebuild_from",
    "serialize_context"
]
