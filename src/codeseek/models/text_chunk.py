"""TextChunk data model: the unit of indexing and retrieval."""

from dataclasses import dataclass, field
from typing import List


def make_chunk_key(document_name: str, sequence_number: int) -> str:
    """Build the collection key for a chunk.

    Keys depend only on the document name and the chunk's position, so
    re-indexing an unchanged file overwrites its previous records.
    """
    return f"{document_name}_{sequence_number}"


@dataclass
class TextChunk:
    """A keyed chunk of source text with its embedding.

    Attributes:
        key: Unique key within a collection ("{document_name}_{sequence_number}")
        document_name: Identifier of the originating file
        sequence_number: 1-based position of the chunk within its document
        text: Chunk content, optionally prefixed with a "// METHOD:" annotation
        embedding: Embedding vector; empty until the chunk is indexed
    """

    key: str
    document_name: str
    sequence_number: int
    text: str
    embedding: List[float] = field(default_factory=list, repr=False)

    @classmethod
    def create(cls, document_name: str, sequence_number: int, text: str) -> "TextChunk":
        return cls(
            key=make_chunk_key(document_name, sequence_number),
            document_name=document_name,
            sequence_number=sequence_number,
            text=text,
        )

    @property
    def is_embedded(self) -> bool:
        return len(self.embedding) > 0

    def to_metadata(self) -> dict:
        """Scalar fields stored alongside the vector in a vector store."""
        return {
            "document_name": self.document_name,
            "sequence_number": self.sequence_number,
        }
