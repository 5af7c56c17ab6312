"""Process-local vector store using cosine distance."""

import threading
from dataclasses import replace
from typing import Optional

import numpy as np

from codeseek.db.vector.base import StoreError, VectorDB, validate_record
from codeseek.models.query_result import ChunkSearchResult
from codeseek.models.text_chunk import TextChunk


class _Collection:
    def __init__(self, dimension: Optional[int]):
        self.dimension = dimension
        # dicts keep insertion order, which breaks distance ties
        self.records: dict[str, TextChunk] = {}


class InMemoryVectorDB(VectorDB):
    """Vector collections held in memory for the lifetime of the process.

    Suitable for tests and for long-running hosts (such as the MCP server)
    where the index only needs to live as long as the session.
    """

    def __init__(self):
        self._collections: dict[str, _Collection] = {}
        self._lock = threading.Lock()

    def ensure_collection(self, name: str, dimension: int) -> None:
        with self._lock:
            if name not in self._collections:
                self._collections[name] = _Collection(dimension or None)

    def _get(self, name: str) -> _Collection:
        collection = self._collections.get(name)
        if collection is None:
            raise StoreError(f"Collection '{name}' does not exist. Call ensure_collection() first.", name)
        return collection

    def upsert(self, name: str, chunk: TextChunk) -> None:
        validate_record(name, chunk)
        with self._lock:
            collection = self._get(name)
            if collection.dimension is None:
                collection.dimension = len(chunk.embedding)
            elif len(chunk.embedding) != collection.dimension:
                raise StoreError(
                    f"Embedding for '{chunk.key}' has {len(chunk.embedding)} dimensions, "
                    f"collection '{name}' expects {collection.dimension}",
                    name,
                )
            # Stored as a copy of the caller's chunk
            collection.records[chunk.key] = replace(chunk, embedding=list(chunk.embedding))

    def search(self, name: str, query_vector: list[float], top_k: int) -> list[ChunkSearchResult]:
        if top_k < 1:
            raise StoreError(f"top_k must be positive, got {top_k}", name)

        with self._lock:
            collection = self._get(name)
            records = list(collection.records.values())
            dimension = collection.dimension

        if not records:
            return []
        if len(query_vector) != dimension:
            raise StoreError(
                f"Query vector has {len(query_vector)} dimensions, collection '{name}' expects {dimension}",
                name,
            )

        matrix = np.asarray([r.embedding for r in records], dtype=np.float64)
        query = np.asarray(query_vector, dtype=np.float64)

        norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
        with np.errstate(divide="ignore", invalid="ignore"):
            similarity = np.where(norms > 0, matrix @ query / norms, 0.0)
        distances = 1.0 - similarity

        order = np.argsort(distances, kind="stable")[:top_k]
        return [
            ChunkSearchResult(chunk=replace(records[i], embedding=list(records[i].embedding)), distance=float(distances[i]))
            for i in order
        ]

    def count(self, name: str) -> int:
        with self._lock:
            collection = self._collections.get(name)
            return len(collection.records) if collection else 0

    def close(self) -> None:
        """Nothing to release; records stay available until the object is dropped."""
