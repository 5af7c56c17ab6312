"""Search result model returned by vector stores."""

from dataclasses import dataclass

from .text_chunk import TextChunk


@dataclass
class ChunkSearchResult:
    """A stored chunk matched by nearest-neighbour search.

    Attributes:
        chunk: The matched chunk (its embedding may be omitted by the store)
        distance: Distance to the query vector; lower is closer
    """

    chunk: TextChunk
    distance: float

    @property
    def similarity_score(self) -> float:
        """Cosine similarity derived from distance, clamped to 0.0-1.0."""
        return max(0.0, min(1.0, 1.0 - self.distance))

    def format(self) -> str:
        """Render as "{document_name} (chunk {n}):" followed by the chunk text."""
        return f"{self.chunk.document_name} (chunk {self.chunk.sequence_number}):\n{self.chunk.text}\n"
