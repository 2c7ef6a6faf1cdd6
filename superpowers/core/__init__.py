"""Core module - tool & skill orchestration."""

from superpowers.core.agent import Agent, AgentResponse
from superpowers.core.catalog import SkillCatalog, SkillCatalogResolver
from superpowers.core.exception import (
    AgentNotFoundError,
    DuplicateToolError,
    OrchestrationError,
    ScriptError,
    ScriptExecutionError,
    ScriptParamsError,
    ScriptTimeoutError,
)
from superpowers.core.messages import Conversation, Message, MessageRole
from superpowers.core.middleware import (
    NO_SKILLS_MESSAGE,
    Middleware,
    ModelRequest,
    SkillMiddleware,
)
from superpowers.core.records import AgentConfig, KnowledgeDocument, Script, Superpower
from superpowers.core.registry import ToolRegistry
from superpowers.core.tool import Tool
from superpowers.core.tool_names import parse_tool_identifier, parse_tool_identifiers

__all__ = [
    # Records
    "AgentConfig",
    "Superpower",
    "Script",
    "KnowledgeDocument",
    # Catalog & tools
    "SkillCatalog",
    "SkillCatalogResolver",
    "parse_tool_identifier",
    "parse_tool_identifiers",
    "Tool",
    "ToolRegistry",
    # Middleware
    "Middleware",
    "ModelRequest",
    "SkillMiddleware",
    "NO_SKILLS_MESSAGE",
    # Agent
    "Agent",
    "AgentResponse",
    # Messages
    "Message",
    "MessageRole",
    "Conversation",
    # Errors
    "OrchestrationError",
    "AgentNotFoundError",
    "DuplicateToolError",
    "ScriptError",
    "ScriptParamsError",
    "ScriptTimeoutError",
    "ScriptExecutionError",
]
