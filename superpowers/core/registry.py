"""Tool registry mapping tool identifiers to implementations."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from superpowers.core.catalog import SkillCatalog
from superpowers.core.exception import DuplicateToolError
from superpowers.core.tool import Tool

logger = logging.getLogger(__name__)

ToolFactory = Callable[[SkillCatalog], Awaitable[Tool]]


@dataclass
class ToolRegistry:
    """Registry of static tools and per-agent tool factories.

    Static tools are shared by every agent. Factories build a fresh tool
    for each resolved catalog, e.g. ``run_script`` bound to the agent's
    scripts.

    Example:
        registry = ToolRegistry()
        registry.register(http_call_tool)
        registry.register_factory("run_script", run_script_factory)

        tools = await registry.build_tools(catalog)
    """

    _tools: dict[str, Tool] = field(default_factory=dict)
    _factories: dict[str, ToolFactory] = field(default_factory=dict)

    def register(self, tool: Tool) -> None:
        """Add a static tool.

        Raises:
            DuplicateToolError: If the name is already registered.
        """
        self._check_name(tool.name)
        self._tools[tool.name] = tool

    def register_factory(self, name: str, factory: ToolFactory) -> None:
        """Add a factory that builds a tool per catalog.

        Raises:
            DuplicateToolError: If the name is already registered.
        """
        self._check_name(name)
        self._factories[name] = factory

    def _check_name(self, name: str) -> None:
        if name in self._tools or name in self._factories:
            raise DuplicateToolError(f"Tool '{name}' is already registered")

    def knows(self, name: str) -> bool:
        """Whether a static tool or factory exists for the name."""
        return name in self._tools or name in self._factories

    async def build_tools(self, catalog: SkillCatalog) -> list[Tool]:
        """Instantiate the tools a catalog declares.

        Identifiers with no matching tool are dropped; the agent simply
        does not receive that capability.

        Args:
            catalog: The resolved catalog for this turn.

        Returns:
            Tools in order of first declaration.
        """
        tools: list[Tool] = []
        for name in catalog.tool_ids:
            if name in self._factories:
                tools.append(await self._factories[name](catalog))
            elif name in self._tools:
                tools.append(self._tools[name])
            else:
                logger.debug("Dropping unknown tool %r for agent %s", name, catalog.agent_id)
        return tools

    @property
    def tool_names(self) -> list[str]:
        """Every name this registry can satisfy."""
        return [*self._tools, *self._factories]

    @property
    def tool_count(self) -> int:
        return len(self._tools) + len(self._factories)

    def __repr__(self) -> str:
        return f"ToolRegistry(tools={self.tool_names})"
