"""Operations exposed to hosts (CLI, MCP server, library callers).

- ingest_codebase: index every source file under a directory
- ask: answer a question with the most similar indexed chunks
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from codeseek.config.settings import CODEBASE_COLLECTION, DEFAULT_TOP_K, SOURCE_FILE_PATTERNS
from codeseek.core.indexer import Indexer, IndexResult
from codeseek.core.retriever import Retriever

from .context import CodebaseContext
from .exceptions import CodebaseNotFoundError


@contextmanager
def _use_context(
    context: Optional[CodebaseContext],
    data_dir: Optional[Path],
    embedding_provider: Optional[str],
) -> Iterator[CodebaseContext]:
    # A caller-owned context outlives the call; a temporary one is closed here
    if context is not None:
        yield context
        return
    with CodebaseContext(data_dir=data_dir, embedding_provider=embedding_provider) as ctx:
        yield ctx


def index_codebase(
    path: Union[str, Path],
    context: Optional[CodebaseContext] = None,
    data_dir: Optional[Path] = None,
    embedding_provider: Optional[str] = None,
) -> IndexResult:
    """Index all source files under path into the codebase collection.

    Returns:
        IndexResult with chunk and file counts

    Raises:
        CodebaseNotFoundError: If path is not an existing directory
        IndexingError: If embedding or storing a chunk fails
        StoreError: If the collection cannot be created
    """
    root = Path(path).expanduser()
    if not root.is_dir():
        raise CodebaseNotFoundError(str(path))

    with _use_context(context, data_dir, embedding_provider) as ctx:
        indexer = Indexer(
            embedder=ctx.embedder,
            vector_db=ctx.vector_db,
            collection_name=CODEBASE_COLLECTION,
            patterns=SOURCE_FILE_PATTERNS,
        )
        try:
            return indexer.index(root)
        except FileNotFoundError as e:
            raise CodebaseNotFoundError(str(path)) from e


def ingest_codebase(
    path: Union[str, Path],
    context: Optional[CodebaseContext] = None,
    data_dir: Optional[Path] = None,
    embedding_provider: Optional[str] = None,
) -> str:
    """Index a codebase and describe the outcome.

    Example:
        ```python
        print(ingest_codebase("~/src/MyService"))
        # Indexed 412 chunks from 37 files.
        ```

    Returns:
        Status string "Indexed {chunks} chunks from {files} files."
    """
    result = index_codebase(path, context=context, data_dir=data_dir, embedding_provider=embedding_provider)
    return f"Indexed {result.chunk_count} chunks from {result.file_count} files."


def ask(
    query: str,
    context: Optional[CodebaseContext] = None,
    data_dir: Optional[Path] = None,
    embedding_provider: Optional[str] = None,
) -> str:
    """Answer a question with the closest chunks of the indexed codebase.

    Returns:
        Formatted hits (best first), or "No relevant information found."

    Raises:
        EmbeddingError: If the question cannot be embedded
        StoreError: If the search fails
    """
    with _use_context(context, data_dir, embedding_provider) as ctx:
        retriever = Retriever(
            embedder=ctx.embedder,
            vector_db=ctx.vector_db,
            collection_name=CODEBASE_COLLECTION,
        )
        return retriever.ask(query, top_k=DEFAULT_TOP_K)
