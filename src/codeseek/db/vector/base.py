"""Abstract base class for vector database implementations.

This module defines the VectorDB interface that all vector storage backends
must implement. Records are TextChunk objects keyed by ``TextChunk.key``;
search results are ChunkSearchResult objects from the models module.
"""

from abc import ABC, abstractmethod

from ...models.query_result import ChunkSearchResult
from ...models.text_chunk import TextChunk


class StoreError(Exception):
    """Raised when a collection create, upsert or search fails."""

    def __init__(self, message: str, collection_name: str = None):
        self.collection_name = collection_name
        super().__init__(message)


class VectorDB(ABC):
    """Abstract base class for keyed vector collections.

    A VectorDB holds any number of named collections. Each collection stores
    chunks keyed by their ``key`` together with their embedding, and answers
    nearest-neighbour queries. The distance metric is fixed per collection
    so index-time and query-time vectors are always compared the same way.
    """

    @abstractmethod
    def ensure_collection(self, name: str, dimension: int) -> None:
        """Create the collection if it does not exist.

        Idempotent. An existing collection is reused as-is; schema mismatches
        surface later as StoreError from upsert or search.

        Args:
            name: Collection name
            dimension: Dimensionality of the embedding vectors
        """
        pass

    @abstractmethod
    def upsert(self, name: str, chunk: TextChunk) -> None:
        """Insert a chunk, replacing any existing record with the same key.

        Args:
            name: Collection name
            chunk: Chunk with non-empty text and a populated embedding

        Raises:
            StoreError: If the chunk is invalid or the backend rejects it
        """
        pass

    @abstractmethod
    def search(
        self,
        name: str,
        query_vector: list[float],
        top_k: int
    ) -> list[ChunkSearchResult]:
        """Return up to top_k chunks nearest to query_vector, closest first.

        Asking for more results than the collection holds returns every
        record; an empty collection returns an empty list.

        Raises:
            StoreError: If the collection is missing or the query fails
        """
        pass

    @abstractmethod
    def count(self, name: str) -> int:
        """Number of records in the collection (0 if it does not exist)."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release backend resources."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def validate_record(name: str, chunk: TextChunk) -> None:
    """Check the invariants every stored chunk must satisfy.

    Raises:
        StoreError: If the chunk has no key, blank text or no embedding
    """
    if not chunk.key:
        raise StoreError(f"Cannot upsert chunk without a key into '{name}'", name)
    if not chunk.text or not chunk.text.strip():
        raise StoreError(f"Cannot upsert chunk '{chunk.key}' with empty text into '{name}'", name)
    if not chunk.is_embedded:
        raise StoreError(f"Cannot upsert chunk '{chunk.key}' without an embedding into '{name}'", name)
