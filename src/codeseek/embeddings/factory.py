from .base import Embedder
from ..config.settings import Settings


def create_embedder(settings: Settings) -> Embedder:
    """
    Create an Embedder implementation based on settings.

    Provider is selected via settings.embedding_provider:
      - "openai": OpenAI (or an OpenAI-compatible server via openai_base_url)
      - "azure": Azure OpenAI; embedding_model is the deployment name
      - "bedrock": AWS Bedrock Titan
      - "local": sentence-transformers model loaded in-process
    """
    provider = settings.embedding_provider

    if provider in ("openai", "azure"):
        from .openai_compatible import OpenAIEmbedder

        if provider == "azure":
            if not settings.azure_openai_endpoint:
                raise ValueError("Azure embeddings require AZURE_OPENAI_ENDPOINT to be set.")
            return OpenAIEmbedder(
                api_key=settings.azure_openai_api_key,
                model=settings.embedding_model,
                dimension=settings.embedding_dimension,
                azure_endpoint=settings.azure_openai_endpoint,
                api_version=settings.azure_openai_api_version,
                timeout=settings.request_timeout,
                max_retries=settings.max_retries,
            )
        return OpenAIEmbedder(
            api_key=settings.openai_api_key,
            model=settings.embedding_model,
            dimension=settings.embedding_dimension,
            base_url=settings.openai_base_url,
            timeout=settings.request_timeout,
            max_retries=settings.max_retries,
        )

    if provider == "bedrock":
        from .bedrock import BedrockEmbedder

        return BedrockEmbedder(
            model_id=settings.embedding_model,
            region=settings.aws_region,
            dimension=settings.embedding_dimension,
        )

    if provider == "local":
        from .local import SentenceTransformerEmbedder

        return SentenceTransformerEmbedder(
            model_id=settings.embedding_model,
            dimension=settings.embedding_dimension,
        )

    raise ValueError(
        f"Unknown embedding provider: {settings.embedding_provider}. "
        f"Expected one of: 'openai', 'azure', 'bedrock', 'local'."
    )
