"""Dependency container for codeseek operations."""

import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from codeseek.config.settings import Settings
from codeseek.db.vector.base import VectorDB
from codeseek.embeddings.base import Embedder


@dataclass
class CodebaseContext:
    """Lazily builds the embedder and vector store used by operations.

    Components are created on first access. Long-running hosts keep a single
    context so the embedder (and an in-memory store) survive between calls.

    Example:
        ```python
        with CodebaseContext(embedding_provider="bedrock") as ctx:
            ingest_codebase("/path/to/repo", context=ctx)
            print(ask("Where is the version stored?", context=ctx))
        ```

    Attributes:
        data_dir: Optional custom data directory
        embedding_provider: "openai", "azure", "bedrock" or "local"
        vector_store: "chroma" or "memory"
        debug: Enable debug logging of provider traffic
    """

    data_dir: Optional[Path] = None
    embedding_provider: Optional[str] = None
    vector_store: Optional[str] = None
    debug: bool = False

    _settings: Optional[Settings] = field(default=None, init=False, repr=False)
    _embedder: Optional[Embedder] = field(default=None, init=False, repr=False)
    _vector_db: Optional[VectorDB] = field(default=None, init=False, repr=False)
    # Reentrant: building a component reads settings while holding the lock
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False, compare=False)

    @property
    def settings(self) -> Settings:
        with self._lock:
            if self._settings is None:
                # Unset options fall back to environment / .env values
                settings_kwargs = {}
                if self.data_dir is not None:
                    settings_kwargs['data_dir'] = self.data_dir
                if self.embedding_provider is not None:
                    settings_kwargs['embedding_provider'] = self.embedding_provider
                if self.vector_store is not None:
                    settings_kwargs['vector_store'] = self.vector_store
                if self.debug:
                    settings_kwargs['debug'] = True
                self._settings = Settings(**settings_kwargs)
            return self._settings

    @property
    def embedder(self) -> Embedder:
        with self._lock:
            if self._embedder is None:
                from codeseek.embeddings.factory import create_embedder
                self._embedder = create_embedder(self.settings)
            return self._embedder

    @property
    def vector_db(self) -> VectorDB:
        with self._lock:
            if self._vector_db is None:
                from codeseek.db.vector.factory import create_vector_db
                self._vector_db = create_vector_db(self.settings)
            return self._vector_db

    def close(self) -> None:
        """Release the vector store, if one was opened."""
        with self._lock:
            if self._vector_db is not None:
                self._vector_db.close()
                self._vector_db = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
