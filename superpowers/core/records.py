"""Snapshots of the records the orchestration core reads.

The record store owns these entities. The core only ever sees frozen
snapshots taken for the duration of one conversation turn.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Script:
    """A named, user-authored script attached to a superpower.

    Attributes:
        name: Execution key used by ``run_script``.
        content: Python source that must define ``main(params)``.
    """

    name: str
    content: str


@dataclass(frozen=True)
class Superpower:
    """A reusable capability bundle (a "skill").

    Attributes:
        id: Record identifier.
        name: Display name, shown in the skill catalog.
        description: One-line summary, shown in the skill catalog.
        content: Full instructions, revealed only through ``load_skill``.
        tools: Declared tool identifiers. Entries are free-form and may be
            slightly malformed (see ``parse_tool_identifier``).
        scripts: Scripts the agent may run through ``run_script``.
    """

    id: str
    name: str
    description: str = ""
    content: str = ""
    tools: tuple[Any, ...] = ()
    scripts: tuple[Script, ...] = ()


@dataclass(frozen=True)
class AgentConfig:
    """An assistant composed of a base prompt and a set of superpowers."""

    id: str
    name: str
    base_prompt: str = ""
    superpower_ids: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class KnowledgeDocument:
    """A tabular document uploaded to an agent's knowledge base."""

    id: str
    agent_id: str
    name: str
    content: str
