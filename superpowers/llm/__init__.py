"""Chat model providers."""

from superpowers.llm.factory import LLMFactoryError, create_llm_provider
from superpowers.llm.protocol import LLMProvider
from superpowers.llm.providers import (
    AnthropicProvider,
    ChatProvider,
    CustomOpenAIProvider,
    OllamaProvider,
    OpenAIProvider,
)

__all__ = [
    "LLMProvider",
    "ChatProvider",
    "create_llm_provider",
    "LLMFactoryError",
    "OllamaProvider",
    "AnthropicProvider",
    "OpenAIProvider",
    "CustomOpenAIProvider",
]
