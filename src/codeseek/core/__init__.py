"""Core package initialization."""

from codeseek.core.indexer import Indexer, IndexResult, IndexingError, discover_files
from codeseek.core.retriever import NO_RESULTS_MESSAGE, Retriever, format_results

__all__ = [
    "Indexer",
    "IndexResult",
    "IndexingError",
    "discover_files",
    "NO_RESULTS_MESSAGE",
    "Retriever",
    "format_results",
]
