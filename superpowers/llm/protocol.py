"""Chat model provider protocol."""

from typing import Protocol, runtime_checkable

from langchain_core.language_models import BaseChatModel


@runtime_checkable
class LLMProvider(Protocol):
    """Anything that can hand out a tool-calling LangChain chat model."""

    def get_chat_model(self) -> BaseChatModel:
        """Return a chat model that supports ``bind_tools``."""
        ...

    @property
    def model_name(self) -> str: ...

    @property
    def provider_name(self) -> str:
        """One of ollama, anthropic, openai, custom_openai."""
        ...
