from typing import List

from codeseek.config.settings import DEFAULT_TOP_K
from codeseek.db.vector.base import VectorDB
from codeseek.embeddings.base import Embedder
from codeseek.models.query import AskParams
from codeseek.models.query_result import ChunkSearchResult

NO_RESULTS_MESSAGE = "No relevant information found."


def format_results(results: List[ChunkSearchResult]) -> str:
    """Render search hits best first, or the no-results sentinel when empty."""
    if not results:
        return NO_RESULTS_MESSAGE
    return "".join(result.format() for result in results)


class Retriever:
    """Answers questions by nearest-neighbour search over an indexed collection."""

    def __init__(self, embedder: Embedder, vector_db: VectorDB, collection_name: str):
        self.embedder = embedder
        self.vector_db = vector_db
        self.collection_name = collection_name

    def search(self, query: str, top_k: int = DEFAULT_TOP_K) -> List[ChunkSearchResult]:
        """Find the chunks closest to the query.

        The collection is created if missing, so querying before anything was
        indexed returns no results instead of failing.

        Raises:
            pydantic.ValidationError: If query is blank or top_k is out of range
            EmbeddingError: If the query cannot be embedded
            StoreError: If the search fails
        """
        params = AskParams(query=query, top_k=top_k)
        query_vector = self.embedder.embed(params.query)
        self.vector_db.ensure_collection(self.collection_name, self.embedder.dimension)
        return self.vector_db.search(self.collection_name, query_vector, params.top_k)

    def ask(self, query: str, top_k: int = DEFAULT_TOP_K) -> str:
        """Search and format the hits as "{document} (chunk {n}):\\n{text}" blocks."""
        return format_results(self.search(query, top_k))
