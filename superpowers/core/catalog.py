"""Skill catalog resolution for a single conversation turn."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from superpowers.core.exception import AgentNotFoundError
from superpowers.core.records import AgentConfig, Superpower
from superpowers.core.tool_names import parse_tool_identifier

if TYPE_CHECKING:
    from superpowers.store.protocol import RecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkillCatalog:
    """Everything resolved for one agent, built once per turn.

    Every tool factory receives the same catalog instance. Nothing in it is
    mutated after construction.

    Attributes:
        agent: Snapshot of the agent.
        skills: Attached superpowers, in catalog order.
        tool_ids: Distinct tool identifiers, in order of first declaration.
        scripts: Script name to script source across all skills.
    """

    agent: AgentConfig
    skills: tuple[Superpower, ...] = ()
    tool_ids: tuple[str, ...] = ()
    scripts: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_skills(cls, agent: AgentConfig, skills: list[Superpower]) -> SkillCatalog:
        """Derive tool identifiers and the script map from a list of skills.

        A later skill's script silently replaces an earlier one with the
        same name.
        """
        scripts: dict[str, str] = {}
        tool_ids: list[str] = []

        for skill in skills:
            for script in skill.scripts:
                if script.name and script.content:
                    scripts[script.name] = script.content

            for entry in skill.tools:
                identifier = parse_tool_identifier(entry)
                if identifier is None:
                    logger.debug("Discarding tool entry %r in skill %r", entry, skill.name)
                    continue
                if identifier not in tool_ids:
                    tool_ids.append(identifier)

        return cls(
            agent=agent,
            skills=tuple(skills),
            tool_ids=tuple(tool_ids),
            scripts=MappingProxyType(scripts),
        )

    @property
    def agent_id(self) -> str:
        return self.agent.id

    @property
    def skill_names(self) -> list[str]:
        return [skill.name for skill in self.skills]

    @property
    def script_names(self) -> list[str]:
        return list(self.scripts)


@dataclass
class SkillCatalogResolver:
    """Resolves an agent id into a SkillCatalog.

    Example:
        resolver = SkillCatalogResolver(store)
        catalog = await resolver.resolve("agent-123")
        catalog.tool_ids  # ("run_script", "http_call")
    """

    store: RecordStore

    async def resolve(self, agent_id: str) -> SkillCatalog:
        """Load the agent and its superpowers.

        Args:
            agent_id: Agent identifier.

        Returns:
            The resolved catalog.

        Raises:
            AgentNotFoundError: If the agent does not exist.
        """
        agent = await self.store.get_agent(agent_id)
        if agent is None:
            raise AgentNotFoundError(agent_id)

        referenced = set(agent.superpower_ids)
        skills: list[Superpower] = []
        seen: set[str] = set()

        if referenced:
            for superpower in await self.store.get_superpowers(list(dict.fromkeys(agent.superpower_ids))):
                if superpower.id in referenced and superpower.id not in seen:
                    seen.add(superpower.id)
                    skills.append(superpower)

        catalog = SkillCatalog.from_skills(agent, skills)
        logger.debug(
            "Resolved agent %s: skills=%s tools=%s scripts=%s",
            agent_id,
            catalog.skill_names,
            list(catalog.tool_ids),
            catalog.script_names,
        )
        return catalog
