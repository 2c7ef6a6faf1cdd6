"""Chat model provider selection."""

from superpowers.config import Settings
from superpowers.llm.protocol import LLMProvider
from superpowers.llm.providers import (
    AnthropicProvider,
    CustomOpenAIProvider,
    OllamaProvider,
    OpenAIProvider,
)


class LLMFactoryError(Exception):
    """The configured provider cannot be constructed."""


def create_llm_provider(settings: Settings) -> LLMProvider:
    """Pick the provider named by ``settings.llm_provider``.

    Every provider gets the shared ``llm_temperature`` and ``llm_max_tokens``.

    Raises:
        LLMFactoryError: If the provider is unknown or its API key is missing.
    """
    sampling = {
        "temperature": settings.llm_temperature,
        "max_tokens": settings.llm_max_tokens,
    }

    match settings.llm_provider:
        case "ollama":
            return OllamaProvider(
                base_url=settings.ollama_base_url,
                model=settings.ollama_model,
                **sampling,
            )

        case "anthropic":
            if not settings.anthropic_api_key:
                raise LLMFactoryError("ANTHROPIC_API_KEY is required for Anthropic provider")
            return AnthropicProvider(
                api_key=settings.anthropic_api_key,
                model=settings.anthropic_model,
                **sampling,
            )

        case "openai":
            if not settings.openai_api_key:
                raise LLMFactoryError("OPENAI_API_KEY is required for OpenAI provider")
            return OpenAIProvider(
                api_key=settings.openai_api_key,
                model=settings.openai_model,
                **sampling,
            )

        case "custom_openai":
            if not settings.custom_openai_api_key:
                raise LLMFactoryError(
                    "CUSTOM_OPENAI_API_KEY is required for custom OpenAI-compatible provider"
                )
            return CustomOpenAIProvider(
                api_key=settings.custom_openai_api_key,
                base_url=settings.custom_openai_base_url,
                model=settings.custom_openai_model,
                timeout=settings.custom_openai_timeout,
                max_retries=settings.custom_openai_max_retries,
                **sampling,
            )

        case _:
            raise LLMFactoryError(f"Unknown LLM provider: {settings.llm_provider}")
