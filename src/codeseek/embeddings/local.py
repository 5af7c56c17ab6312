from typing import List, Optional

from .base import Embedder, EmbeddingError
from ..utils.debug import DebugLogger
from ..utils.progress import console, SYMBOLS

sentence_transformers_import = None


class SentenceTransformerEmbedder(Embedder):
    """Local embeddings using a sentence-transformers model."""

    def __init__(self, model_id: str, dimension: int, device: Optional[str] = None):
        """Load the model.

        Args:
            model_id: Hugging Face model identifier
            dimension: Target dimension; longer vectors are truncated (Matryoshka models)
            device: Torch device; sentence-transformers picks one when None
        """
        self.model_id = model_id
        self._dimension = dimension

        # Heavy import, deferred until a local embedder is actually requested
        global sentence_transformers_import
        if sentence_transformers_import is None:
            try:
                sentence_transformers_import = __import__("sentence_transformers")
            except ImportError as e:
                raise EmbeddingError(
                    "Local embeddings require the 'local' extra: pip install codeseek[local]",
                    "local",
                ) from e

        self.model = sentence_transformers_import.SentenceTransformer(model_id, device=device)
        console.print(f"{SYMBOLS['info']} Local embeddings using {model_id} on {self.model.device}")

    def embed(self, text: str) -> List[float]:
        if DebugLogger.is_enabled():
            DebugLogger.log_request("local", {"model_id": self.model_id, "input": text})

        try:
            vector = self.model.encode(text, normalize_embeddings=True, show_progress_bar=False)
        except RuntimeError as e:
            raise EmbeddingError(f"Local embedding failed: {e}", "local") from e

        embedding = [float(x) for x in vector[:self._dimension]]
        if len(embedding) != self._dimension:
            raise EmbeddingError(
                f"Model {self.model_id} produced {len(embedding)} dimensions, expected {self._dimension}",
                "local",
            )
        return embedding

    @property
    def dimension(self) -> int:
        return self._dimension
