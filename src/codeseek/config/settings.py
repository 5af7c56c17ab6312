"""Configuration management for codeseek."""

from pathlib import Path
from typing import Optional

from pydantic import Field, AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict


# Fixed pipeline configuration (not runtime parameters)
CODEBASE_COLLECTION = "codebase"
SOURCE_FILE_PATTERNS = ("*.cs",)
DEFAULT_TOP_K = 5

# Embedding model characteristics - OpenAI / Azure OpenAI
DEFAULT_OPENAI_EMBEDDING_MODEL = "text-embedding-3-small"
OPENAI_EMBEDDING_DIMENSION = 1536

# Embedding model characteristics - Bedrock Titan
DEFAULT_TITAN_EMBEDDING_MODEL = "amazon.titan-embed-text-v2:0"
TITAN_EMBEDDING_DIMENSION = 1024

# Embedding model characteristics - local sentence-transformers
DEFAULT_LOCAL_EMBEDDING_MODEL = "sentence-transformers/all-MiniLM-L6-v2"
LOCAL_EMBEDDING_DIMENSION = 384

PROVIDER_EMBEDDING_DEFAULTS = {
    "openai": (DEFAULT_OPENAI_EMBEDDING_MODEL, OPENAI_EMBEDDING_DIMENSION),
    "azure": (DEFAULT_OPENAI_EMBEDDING_MODEL, OPENAI_EMBEDDING_DIMENSION),
    "bedrock": (DEFAULT_TITAN_EMBEDDING_MODEL, TITAN_EMBEDDING_DIMENSION),
    "local": (DEFAULT_LOCAL_EMBEDDING_MODEL, LOCAL_EMBEDDING_DIMENSION),
}


class Settings(BaseSettings):
    """Application settings.

    Values come from keyword arguments, then environment variables
    (``CODESEEK_`` prefix, plus the conventional ``OPENAI_API_KEY`` /
    ``AZURE_OPENAI_*`` names), then ``.env``.
    """

    model_config = SettingsConfigDict(
        env_prefix="CODESEEK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Storage base directory
    data_dir: Path = Field(default_factory=lambda: Path.home() / ".codeseek")

    # Provider settings
    embedding_provider: str = "openai"  # "openai", "azure", "bedrock" or "local"
    vector_store: str = "chroma"  # "chroma" or "memory"

    # Model overrides; provider defaults apply when unset
    embedding_model_override: Optional[str] = None
    embedding_dimension_override: Optional[int] = None

    # OpenAI-compatible settings
    openai_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_API_KEY", "openai_api_key")
    )
    openai_base_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_BASE_URL", "openai_base_url")
    )

    # Azure OpenAI settings
    azure_openai_endpoint: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("AZURE_OPENAI_ENDPOINT", "azure_openai_endpoint")
    )
    azure_openai_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("AZURE_OPENAI_API_KEY", "azure_openai_api_key")
    )
    azure_openai_api_version: str = "2024-06-01"

    # Client behaviour for remote providers
    request_timeout: Optional[float] = None
    max_retries: int = 3

    # AWS settings
    aws_region: str = "us-west-2"

    # Debug settings
    debug: bool = False

    @property
    def embedding_model(self) -> str:
        """Get embedding model for current provider.

        Raises:
            KeyError: If provider is not recognized
        """
        if self.embedding_model_override:
            return self.embedding_model_override
        if self.embedding_provider not in PROVIDER_EMBEDDING_DEFAULTS:
            raise KeyError(f"Unknown embedding provider: {self.embedding_provider}")
        return PROVIDER_EMBEDDING_DEFAULTS[self.embedding_provider][0]

    @property
    def embedding_dimension(self) -> int:
        """Get embedding vector dimension for current provider.

        Raises:
            KeyError: If provider is not recognized
        """
        if self.embedding_dimension_override:
            return self.embedding_dimension_override
        if self.embedding_provider not in PROVIDER_EMBEDDING_DEFAULTS:
            raise KeyError(f"Unknown embedding provider: {self.embedding_provider}")
        return PROVIDER_EMBEDDING_DEFAULTS[self.embedding_provider][1]

    @property
    def chroma_dir(self) -> Path:
        """Get the ChromaDB storage directory."""
        return self.data_dir / "chroma"

    @property
    def debug_log_dir(self) -> Path:
        """Get the debug log directory."""
        return self.data_dir / "logs"
