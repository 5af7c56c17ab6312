import fnmatch
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from codeseek.config.settings import SOURCE_FILE_PATTERNS
from codeseek.db.vector.base import StoreError, VectorDB
from codeseek.embeddings.base import Embedder, EmbeddingError
from codeseek.models.text_chunk import TextChunk
from codeseek.utils import progress as progress_utils
from codeseek.utils.chunking import parse_file
from codeseek.utils.progress import log_info, log_success, log_warning


@dataclass
class IndexResult:
    """Outcome of an indexing run.

    Attributes:
        chunk_count: Chunks embedded and stored
        file_count: Source files discovered under the root
        cancelled: True if the run was stopped before all chunks were stored
    """

    chunk_count: int
    file_count: int
    cancelled: bool = False


class IndexingError(Exception):
    """An embedding or store failure that aborted an indexing run.

    Chunks stored before the failure stay in the collection.

    Attributes:
        chunk_key: Key of the chunk that failed
        stored_count: Chunks stored before the failure
        total_count: Chunks the run intended to store
    """

    def __init__(self, chunk_key: str, stored_count: int, total_count: int, cause: Exception):
        self.chunk_key = chunk_key
        self.stored_count = stored_count
        self.total_count = total_count
        stage = "Embedding" if isinstance(cause, EmbeddingError) else "Storing"
        super().__init__(
            f"{stage} failed for chunk '{chunk_key}' after {stored_count} of "
            f"{total_count} chunks were stored: {cause}"
        )


def discover_files(root: Path, patterns: Sequence[str] = SOURCE_FILE_PATTERNS) -> List[Path]:
    """Find files under root whose names match any of the glob patterns.

    Returns:
        Matching files, recursively, in sorted path order
    """
    files = [
        p for p in root.rglob("*")
        if p.is_file() and any(fnmatch.fnmatch(p.name, pattern) for pattern in patterns)
    ]
    return sorted(files)


class Indexer:
    """Chunks a source tree, embeds every chunk and upserts it into a collection.

    The embedder and vector store are injected so the pipeline runs unchanged
    against any provider (or test double).
    """

    def __init__(
        self,
        embedder: Embedder,
        vector_db: VectorDB,
        collection_name: str,
        patterns: Sequence[str] = SOURCE_FILE_PATTERNS,
    ):
        self.embedder = embedder
        self.vector_db = vector_db
        self.collection_name = collection_name
        self.patterns = tuple(patterns)

    def collect_chunks(self, root: Path, files: Iterable[Path]) -> List[TextChunk]:
        """Chunk each file, concatenating chunks in file order.

        Chunks are named by their path relative to root so files sharing a
        base name in different directories get distinct keys.
        """
        chunks: List[TextChunk] = []
        for file_path in files:
            document_name = file_path.relative_to(root).as_posix()
            chunks.extend(parse_file(file_path, document_name=document_name))
        return chunks

    def index(self, root: Path, stop_event: Optional[threading.Event] = None) -> IndexResult:
        """Index every matching file under root.

        Each chunk is embedded and then upserted before the next one starts.

        Args:
            root: Directory to scan recursively
            stop_event: Optional event; when set, the run stops between chunks

        Returns:
            IndexResult with the stored chunk count and discovered file count

        Raises:
            FileNotFoundError: If root does not exist or is not a directory
            StoreError: If the collection cannot be created
            IndexingError: On the first embedding or store failure for a chunk
        """
        root = Path(root)
        if not root.is_dir():
            raise FileNotFoundError(f"Directory not found: {root}")

        files = discover_files(root, self.patterns)
        chunks = self.collect_chunks(root, files)
        total = len(chunks)
        log_info(f"Found {total} chunks in {len(files)} files under {root}")

        self.vector_db.ensure_collection(self.collection_name, self.embedder.dimension)

        stored = 0
        progress, task_id = progress_utils.create_progress_bar("Embedding chunks", total=total)
        with progress:
            for chunk in chunks:
                if stop_event is not None and stop_event.is_set():
                    log_warning(f"Indexing cancelled after {stored} of {total} chunks")
                    return IndexResult(chunk_count=stored, file_count=len(files), cancelled=True)

                progress_utils.update_progress(progress, task_id, advance=0, description=f"Embedding {chunk.key}")
                try:
                    chunk.embedding = self.embedder.embed(chunk.text)
                    self.vector_db.upsert(self.collection_name, chunk)
                except (EmbeddingError, StoreError) as e:
                    raise IndexingError(chunk.key, stored, total, e) from e
                stored += 1
                progress_utils.update_progress(progress, task_id)

        log_success(f"Indexed {stored} chunks from {len(files)} files into '{self.collection_name}'")
        return IndexResult(chunk_count=stored, file_count=len(files))
