from abc import ABC, abstractmethod
from typing import List


class EmbeddingError(Exception):
    """Raised when an embedding provider call fails."""

    def __init__(self, message: str, provider: str = "unknown"):
        self.provider = provider
        super().__init__(message)


class Embedder(ABC):
    @abstractmethod
    def embed(self, text: str) -> List[float]:
        """Generate embedding vector for text

        Raises:
            EmbeddingError: If the provider call fails
        """

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Embedding vector dimension"""
