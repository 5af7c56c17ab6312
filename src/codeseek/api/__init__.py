"""Public API for using codeseek as a library.

Example:
    ```python
    from codeseek.api import CodebaseContext, ask, ingest_codebase

    with CodebaseContext(embedding_provider="openai") as ctx:
        print(ingest_codebase("/path/to/repo", context=ctx))
        print(ask("How are release notes generated?", context=ctx))
    ```
"""

from codeseek.core.indexer import IndexingError, IndexResult
from codeseek.db.vector.base import StoreError
from codeseek.embeddings.base import EmbeddingError

from .context import CodebaseContext
from .exceptions import CodebaseAPIError, CodebaseNotFoundError
from .operations import ask, index_codebase, ingest_codebase

__all__ = [
    "CodebaseContext",
    "ask",
    "index_codebase",
    "ingest_codebase",
    "IndexResult",
    "CodebaseAPIError",
    "CodebaseNotFoundError",
    "EmbeddingError",
    "IndexingError",
    "StoreError",
]
