"""Tests for embedder selection from settings."""

from unittest.mock import patch

import pytest

from codeseek.config.settings import Settings
from codeseek.embeddings.factory import create_embedder


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for var in ("OPENAI_API_KEY", "OPENAI_BASE_URL", "AZURE_OPENAI_ENDPOINT", "AZURE_OPENAI_API_KEY"):
        monkeypatch.delenv(var, raising=False)
    # Keep a developer's .env out of the tests
    monkeypatch.chdir(tmp_path)


def test_openai_provider():
    settings = Settings(embedding_provider="openai", openai_api_key="sk-test", max_retries=2)

    with patch("codeseek.embeddings.openai_compatible.OpenAIEmbedder") as mock_embedder:
        create_embedder(settings)

    mock_embedder.assert_called_once_with(
        api_key="sk-test",
        model="text-embedding-3-small",
        dimension=1536,
        base_url=None,
        timeout=None,
        max_retries=2,
    )


def test_azure_provider():
    settings = Settings(
        embedding_provider="azure",
        azure_openai_endpoint="https://example.openai.azure.com",
        azure_openai_api_key="key",
        embedding_model_override="my-deployment",
    )

    with patch("codeseek.embeddings.openai_compatible.OpenAIEmbedder") as mock_embedder:
        create_embedder(settings)

    kwargs = mock_embedder.call_args.kwargs
    assert kwargs["azure_endpoint"] == "https://example.openai.azure.com"
    assert kwargs["model"] == "my-deployment"
    assert kwargs["dimension"] == 1536


def test_azure_requires_endpoint():
    with pytest.raises(ValueError, match="AZURE_OPENAI_ENDPOINT"):
        create_embedder(Settings(embedding_provider="azure"))


def test_bedrock_provider():
    settings = Settings(embedding_provider="bedrock", aws_region="eu-west-1")

    with patch("codeseek.embeddings.bedrock.BedrockEmbedder") as mock_embedder:
        create_embedder(settings)

    mock_embedder.assert_called_once_with(
        model_id="amazon.titan-embed-text-v2:0",
        region="eu-west-1",
        dimension=1024,
    )


def test_local_provider():
    settings = Settings(embedding_provider="local", embedding_dimension_override=256)

    with patch("codeseek.embeddings.local.SentenceTransformerEmbedder") as mock_embedder:
        create_embedder(settings)

    mock_embedder.assert_called_once_with(
        model_id="sentence-transformers/all-MiniLM-L6-v2",
        dimension=256,
    )


def test_unknown_provider():
    with pytest.raises(ValueError, match="Unknown embedding provider"):
        create_embedder(Settings(embedding_provider="nope"))
