"""OpenAI and Azure OpenAI embedding provider."""

from typing import List, Optional

from openai import APIError, AzureOpenAI, OpenAI, OpenAIError

from .base import Embedder, EmbeddingError
from ..utils.debug import DebugLogger


class OpenAIEmbedder(Embedder):
    """Embeddings from the OpenAI embeddings endpoint.

    Works against api.openai.com, any OpenAI-compatible server (via
    ``base_url``) or an Azure OpenAI deployment (via ``azure_endpoint``, in
    which case ``model`` is the deployment name).
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        dimension: int,
        base_url: Optional[str] = None,
        azure_endpoint: Optional[str] = None,
        api_version: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: int = 3,
    ):
        """Initialize the embeddings client.

        Args:
            api_key: API key for authentication
            model: Embedding model (or Azure deployment) name
            dimension: Expected vector dimension
            base_url: Custom base URL for OpenAI-compatible servers
            azure_endpoint: Azure OpenAI resource endpoint
            api_version: Azure OpenAI API version
            timeout: Request timeout in seconds
            max_retries: Maximum retry attempts inside the client (default: 3)
        """
        self.model = model
        self._dimension = dimension

        client_kwargs = {
            "api_key": api_key,
            "max_retries": max_retries,
        }
        if timeout:
            client_kwargs["timeout"] = timeout

        if azure_endpoint:
            self.provider = "azure"
            self.client = AzureOpenAI(
                azure_endpoint=azure_endpoint,
                api_version=api_version,
                **client_kwargs,
            )
        else:
            self.provider = "openai"
            if base_url:
                client_kwargs["base_url"] = base_url
            self.client = OpenAI(**client_kwargs)

    def embed(self, text: str) -> List[float]:
        request = {"model": self.model, "input": text}

        request_id = None
        if DebugLogger.is_enabled():
            request_id = DebugLogger.log_request(self.provider, request)

        try:
            response = self.client.embeddings.create(model=self.model, input=text)
        except APIError as e:
            raise EmbeddingError(f"{self.provider} embedding request failed: {e.message}", self.provider) from e
        except OpenAIError as e:
            raise EmbeddingError(f"{self.provider} embedding request failed: {e}", self.provider) from e

        if not response.data:
            raise EmbeddingError(f"{self.provider} returned no embedding data", self.provider)
        embedding = list(response.data[0].embedding)

        if DebugLogger.is_enabled():
            DebugLogger.log_response(self.provider, {
                "embedding_dimension": len(embedding),
                "model": self.model,
            }, request_id)

        if len(embedding) != self._dimension:
            raise EmbeddingError(
                f"{self.provider} returned a {len(embedding)}-dimensional embedding, "
                f"expected {self._dimension}",
                self.provider,
            )
        return embedding

    @property
    def dimension(self) -> int:
        return self._dimension
