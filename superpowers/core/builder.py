"""Per-turn assembly of an agent from its stored configuration."""

import logging
from dataclasses import dataclass
from typing import Literal

from langchain_core.language_models import BaseChatModel

from superpowers.core.agent import Agent
from superpowers.core.catalog import SkillCatalog, SkillCatalogResolver
from superpowers.core.messages import Conversation
from superpowers.core.middleware import SkillMiddleware
from superpowers.core.registry import ToolRegistry
from superpowers.store.protocol import RecordStore

logger = logging.getLogger(__name__)

ChatMode = Literal["text", "voice"]

TEXT_MODE_PROMPT = (
    "\n\nNever mention using tools, mistakes, or that you will check something; just do it. "
    "Do not provide commentary before using a tool; call it immediately when needed. "
    "Never mention a skill, a document search, a script execution or skill loading."
)


def knowledge_base_prompt(file_names: list[str]) -> str:
    """System prompt section listing the agent's knowledge base files."""
    if not file_names:
        return ""
    return (
        "\n\n## Knowledge Base\n\n"
        f"You have access to the following files in your knowledge base: {', '.join(file_names)}."
    )


@dataclass
class AgentBuilder:
    """Builds a ready-to-run Agent for one conversation turn.

    Resolution order: catalog, then tools, then middleware. A missing agent
    fails before any tool is constructed.

    Example:
        builder = AgentBuilder(store, registry, chat_model)
        agent = await builder.build("agent-123")
        response = await agent.process("Hi!")
    """

    store: RecordStore
    registry: ToolRegistry
    chat_model: BaseChatModel
    max_iterations: int = 10

    async def build(
        self,
        agent_id: str,
        mode: ChatMode = "text",
        conversation: Conversation | None = None,
    ) -> Agent:
        """Resolve the agent and assemble its tools and middleware.

        Raises:
            AgentNotFoundError: If the agent does not exist.
        """
        catalog = await SkillCatalogResolver(self.store).resolve(agent_id)
        tools = await self.registry.build_tools(catalog)
        system_prompt = await self.build_system_prompt(catalog, mode)

        logger.info(
            "Built agent %s (%s) with tools=%s skills=%s",
            catalog.agent.name,
            agent_id,
            [t.name for t in tools],
            catalog.skill_names,
        )

        return Agent(
            chat_model=self.chat_model,
            system_prompt=system_prompt,
            tools=tools,
            middleware=[SkillMiddleware(catalog.skills)],
            max_iterations=self.max_iterations,
            conversation=conversation,
        )

    async def build_system_prompt(self, catalog: SkillCatalog, mode: ChatMode = "text") -> str:
        """Base prompt, knowledge base files, and the text-mode instruction."""
        documents = await self.store.get_documents(catalog.agent_id)
        prompt = catalog.agent.base_prompt + knowledge_base_prompt([d.name for d in documents])
        if mode == "text":
            prompt += TEXT_MODE_PROMPT
        return prompt
