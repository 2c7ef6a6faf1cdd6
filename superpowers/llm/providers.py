"""Chat model providers.

One dataclass per backend. They share sampling settings (temperature and the
output token cap) so an agent behaves the same whichever backend serves it.
"""

from dataclasses import dataclass
from typing import ClassVar

from langchain_anthropic import ChatAnthropic
from langchain_core.language_models import BaseChatModel
from langchain_ollama import ChatOllama
from langchain_openai import ChatOpenAI

DEFAULT_TEMPERATURE = 0.3
DEFAULT_MAX_TOKENS = 4096


@dataclass(kw_only=True)
class ChatProvider:
    model: str
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS

    provider_name: ClassVar[str]

    @property
    def model_name(self) -> str:
        return self.model

    def get_chat_model(self) -> BaseChatModel:
        raise NotImplementedError


@dataclass(kw_only=True)
class OllamaProvider(ChatProvider):
    """Local inference. Ollama calls the output cap ``num_predict``."""

    provider_name: ClassVar[str] = "ollama"

    base_url: str

    def get_chat_model(self) -> BaseChatModel:
        return ChatOllama(
            base_url=self.base_url,
            model=self.model,
            temperature=self.temperature,
            num_predict=self.max_tokens,
        )


@dataclass(kw_only=True)
class AnthropicProvider(ChatProvider):
    provider_name: ClassVar[str] = "anthropic"

    api_key: str
    model: str = "claude-sonnet-4-20250514"

    def get_chat_model(self) -> BaseChatModel:
        return ChatAnthropic(
            api_key=self.api_key,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )


@dataclass(kw_only=True)
class OpenAIProvider(ChatProvider):
    provider_name: ClassVar[str] = "openai"

    api_key: str
    model: str = "gpt-4o"

    def get_chat_model(self) -> BaseChatModel:
        return ChatOpenAI(
            api_key=self.api_key,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )


@dataclass(kw_only=True)
class CustomOpenAIProvider(OpenAIProvider):
    """Any endpoint speaking the OpenAI chat completions protocol.

    The endpoint must support function calling: skills, scripts and
    knowledge base search all reach the agent as tools.
    """

    provider_name: ClassVar[str] = "custom_openai"

    base_url: str
    model: str
    timeout: int = 60
    max_retries: int = 3

    def get_chat_model(self) -> BaseChatModel:
        return ChatOpenAI(
            api_key=self.api_key,
            base_url=self.base_url,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            timeout=self.timeout,
            max_retries=self.max_retries,
        )
