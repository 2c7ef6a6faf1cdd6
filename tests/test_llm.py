"""Tests for LLM module."""

import pytest

from superpowers.config import Settings
from superpowers.llm import (
    AnthropicProvider,
    CustomOpenAIProvider,
    LLMFactoryError,
    LLMProvider,
    OllamaProvider,
    OpenAIProvider,
    create_llm_provider,
)
from superpowers.rag import EmbeddingsFactoryError, create_embeddings


class TestLLMFactory:
    def test_create_ollama_provider(self):
        provider = create_llm_provider(Settings(llm_provider="ollama"))

        assert isinstance(provider, OllamaProvider)
        assert isinstance(provider, LLMProvider)
        assert provider.provider_name == "ollama"

    def test_create_anthropic_provider(self):
        provider = create_llm_provider(
            Settings(llm_provider="anthropic", anthropic_api_key="test-key")
        )

        assert isinstance(provider, AnthropicProvider)
        assert provider.provider_name == "anthropic"

    def test_create_openai_provider(self):
        provider = create_llm_provider(Settings(llm_provider="openai", openai_api_key="k"))

        assert isinstance(provider, OpenAIProvider)
        assert provider.model_name == "gpt-4o"

    def test_create_custom_openai_provider(self):
        provider = create_llm_provider(
            Settings(
                llm_provider="custom_openai",
                custom_openai_api_key="k",
                custom_openai_base_url="https://llm.internal/v1",
                custom_openai_model="qwen",
                custom_openai_timeout=5,
            )
        )

        assert isinstance(provider, CustomOpenAIProvider)
        assert provider.base_url == "https://llm.internal/v1"
        assert provider.model_name == "qwen"
        assert provider.timeout == 5

    def test_sampling_settings_reach_every_provider(self):
        settings = Settings(
            llm_provider="custom_openai",
            custom_openai_api_key="k",
            llm_temperature=0.0,
            llm_max_tokens=512,
        )

        provider = create_llm_provider(settings)

        assert provider.temperature == 0.0
        assert provider.max_tokens == 512

    def test_unknown_provider_raises(self):
        settings = Settings()
        settings.llm_provider = "unknown"  # type: ignore

        with pytest.raises(LLMFactoryError):
            create_llm_provider(settings)


class TestProviders:
    def test_ollama_chat_model(self):
        provider = OllamaProvider(base_url="http://localhost:11434", model="llama3.2", max_tokens=256)

        model = provider.get_chat_model()

        assert provider.model_name == "llama3.2"
        assert model.num_predict == 256
        assert model.temperature == 0.3

    def test_custom_openai_chat_model(self):
        provider = CustomOpenAIProvider(api_key="k", base_url="http://localhost:8080/v1", model="m")

        model = provider.get_chat_model()

        assert model.model_name == "m"

    def test_custom_openai_is_an_openai_provider(self):
        provider = CustomOpenAIProvider(api_key="k", base_url="http://localhost:8080/v1", model="m")

        assert isinstance(provider, OpenAIProvider)
        assert provider.provider_name == "custom_openai"
        assert OpenAIProvider(api_key="k").model_name == "gpt-4o"


class TestEmbeddingsFactory:
    def test_ollama_embeddings(self):
        from langchain_ollama import OllamaEmbeddings

        embeddings = create_embeddings(Settings(embedding_provider="ollama"))

        assert isinstance(embeddings, OllamaEmbeddings)
        assert embeddings.model == "nomic-embed-text"

    def test_openai_embeddings(self):
        from langchain_openai import OpenAIEmbeddings

        embeddings = create_embeddings(
            Settings(embedding_provider="openai", openai_api_key="k")
        )

        assert isinstance(embeddings, OpenAIEmbeddings)

    def test_unknown_provider_raises(self):
        settings = Settings()
        settings.embedding_provider = "unknown"  # type: ignore

        with pytest.raises(EmbeddingsFactoryError):
            create_embeddings(settings)
