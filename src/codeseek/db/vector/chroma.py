from pathlib import Path
from typing import Optional

import chromadb

from codeseek.db.vector.base import StoreError, VectorDB, validate_record
from codeseek.models.query_result import ChunkSearchResult
from codeseek.models.text_chunk import TextChunk


class ChromaVectorDB(VectorDB):
    """Persistent ChromaDB store; chunk text and attribution live next to the vector."""

    def __init__(self, storage_path: Optional[Path] = None):
        self.storage_path = Path(storage_path or Path.home() / ".codeseek" / "chroma")
        self.client = None
        self._collections: dict = {}

    def _ensure_client(self):
        if self.client is None:
            try:
                self.storage_path.mkdir(parents=True, exist_ok=True)
                self.client = chromadb.PersistentClient(
                    path=str(self.storage_path),
                    settings=chromadb.Settings(anonymized_telemetry=False)
                )
            except Exception as e:
                raise StoreError(f"Failed to open ChromaDB at {self.storage_path}: {e}") from e
        return self.client

    def ensure_collection(self, name: str, dimension: int) -> None:
        client = self._ensure_client()
        try:
            self._collections[name] = client.get_or_create_collection(
                name=name,
                metadata={"dimension": dimension, "hnsw:space": "cosine"}
            )
        except Exception as e:
            raise StoreError(f"Failed to create collection '{name}': {e}", name) from e

    def _get(self, name: str):
        collection = self._collections.get(name)
        if collection is None:
            raise StoreError(f"Collection '{name}' not initialized. Call ensure_collection() first.", name)
        return collection

    def upsert(self, name: str, chunk: TextChunk) -> None:
        """Insert or replace a chunk by key (idempotent)."""
        validate_record(name, chunk)
        collection = self._get(name)
        try:
            collection.upsert(
                ids=[chunk.key],
                embeddings=[chunk.embedding],
                documents=[chunk.text],
                metadatas=[chunk.to_metadata()]
            )
        except Exception as e:
            raise StoreError(f"Failed to upsert '{chunk.key}' into '{name}': {e}", name) from e

    def search(self, name: str, query_vector: list[float], top_k: int) -> list[ChunkSearchResult]:
        if top_k < 1:
            raise StoreError(f"top_k must be positive, got {top_k}", name)
        collection = self._get(name)

        try:
            available = collection.count()
            if available == 0:
                return []
            results = collection.query(
                query_embeddings=[query_vector],
                # Chroma warns when asked for more neighbours than it holds
                n_results=min(top_k, available),
                include=["documents", "metadatas", "distances"]
            )
        except Exception as e:
            raise StoreError(f"Search in '{name}' failed: {e}", name) from e

        return self._parse_results(results)

    def _parse_results(self, results) -> list[ChunkSearchResult]:
        """Convert a ChromaDB query response (single query) to ChunkSearchResult objects."""
        if not results['ids'] or not results['ids'][0]:
            return []

        hits = []
        for i, key in enumerate(results['ids'][0]):
            metadata = results['metadatas'][0][i] or {}
            distance = results['distances'][0][i] if results['distances'] else 0.0
            chunk = TextChunk(
                key=key,
                document_name=metadata.get("document_name", ""),
                sequence_number=int(metadata.get("sequence_number", 0)),
                text=results['documents'][0][i] or "",
            )
            hits.append(ChunkSearchResult(chunk=chunk, distance=float(distance)))
        return hits

    def count(self, name: str) -> int:
        collection = self._collections.get(name)
        if collection is None:
            return 0
        try:
            return collection.count()
        except Exception as e:
            raise StoreError(f"Failed to count '{name}': {e}", name) from e

    def close(self) -> None:
        """Close database connection and release resources."""
        self._collections.clear()

        # Shut the client down so file handles are released (matters on Windows)
        if self.client is not None:
            try:
                if hasattr(self.client, 'clear_system_cache'):
                    self.client.clear_system_cache()
            finally:
                self.client = None
