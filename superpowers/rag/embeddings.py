"""Embeddings factory for different providers."""

from langchain_core.embeddings import Embeddings

from superpowers.config import Settings


class EmbeddingsFactoryError(Exception):
    """Raised when embeddings cannot be created."""


def create_embeddings(settings: Settings) -> Embeddings:
    """Create embeddings based on settings.

    Args:
        settings: Application settings.

    Returns:
        Configured embeddings instance.

    Raises:
        EmbeddingsFactoryError: If the provider is unknown or misconfigured.
    """
    match settings.embedding_provider:
        case "ollama":
            from langchain_ollama import OllamaEmbeddings

            return OllamaEmbeddings(
                base_url=settings.ollama_base_url,
                model=settings.ollama_embedding_model,
            )

        case "openai":
            if not settings.openai_api_key:
                raise EmbeddingsFactoryError(
                    "OPENAI_API_KEY required for OpenAI embeddings"
                )
            from langchain_openai import OpenAIEmbeddings

            return OpenAIEmbeddings(
                api_key=settings.openai_api_key,
                model=settings.openai_embedding_model,
            )

        case _:
            raise EmbeddingsFactoryError(
                f"Unknown provider for embeddings: {settings.embedding_provider}"
            )
