"""Message types for agent conversations."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, ToolMessage


class MessageRole(StrEnum):
    """Message role in conversation."""

    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


@dataclass
class Message:
    """A message in the conversation."""

    role: MessageRole
    content: str
    tool_call_id: str | None = None
    tool_calls: list[dict[str, Any]] | None = None

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=MessageRole.USER, content=content)

    @classmethod
    def assistant(cls, content: str, tool_calls: list[dict] | None = None) -> "Message":
        return cls(role=MessageRole.ASSISTANT, content=content, tool_calls=tool_calls)

    @classmethod
    def tool(cls, content: str, tool_call_id: str) -> "Message":
        return cls(role=MessageRole.TOOL, content=content, tool_call_id=tool_call_id)

    def to_langchain(self) -> BaseMessage:
        """Convert to the LangChain message type for model calls."""
        match self.role:
            case MessageRole.USER:
                return HumanMessage(content=self.content)
            case MessageRole.ASSISTANT:
                if self.tool_calls:
                    return AIMessage(content=self.content, tool_calls=self.tool_calls)
                return AIMessage(content=self.content)
            case MessageRole.TOOL:
                return ToolMessage(content=self.content, tool_call_id=self.tool_call_id or "")

    def to_dict(self) -> dict[str, Any]:
        return {
            "role": self.role.value,
            "content": self.content,
            "tool_call_id": self.tool_call_id,
            "tool_calls": self.tool_calls,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Message":
        return cls(
            role=MessageRole(data["role"]),
            content=data["content"],
            tool_call_id=data.get("tool_call_id"),
            tool_calls=data.get("tool_calls"),
        )


@dataclass
class Conversation:
    """Conversation memory carried across turns.

    The system prompt is not stored here; it is rebuilt from the agent's
    current configuration on every turn.
    """

    messages: list[Message] = field(default_factory=list)

    def add(self, message: Message) -> None:
        """Add a message to the conversation."""
        self.messages.append(message)

    def add_user(self, content: str) -> None:
        """Add a user message."""
        self.add(Message.user(content))

    def add_assistant(self, content: str, tool_calls: list[dict] | None = None) -> None:
        """Add an assistant message."""
        self.add(Message.assistant(content, tool_calls))

    def add_tool_result(self, content: str, tool_call_id: str) -> None:
        """Add a tool result message."""
        self.add(Message.tool(content, tool_call_id))

    def to_langchain(self) -> list[BaseMessage]:
        return [message.to_langchain() for message in self.messages]

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON storage."""
        return {"messages": [message.to_dict() for message in self.messages]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Conversation":
        """Deserialize from JSON storage."""
        return cls(messages=[Message.from_dict(m) for m in data.get("messages", [])])

    def clear(self) -> None:
        """Clear all messages."""
        self.messages.clear()

    def __len__(self) -> int:
        return len(self.messages)
